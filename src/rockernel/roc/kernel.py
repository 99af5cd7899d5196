"""ROC engine entry points.

``compute_roc`` runs the three stages (rank grouping, curve construction,
integration) on one score vector. ``compute_roc_batch`` repeats them for every
column of a score matrix against one shared ground truth and returns the AUCs
in column order.

Examples:
    >>> compute_roc([0.1, 0.4, 0.35, 0.8], [False, True, False, True], auc_only=True)
    1.0
    >>> compute_roc([1, 1, 1, 1], [True, False, True, False]).as_array()
    array([[0. , 0. , 0. ],
           [1. , 1. , 0.5]])
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from numpy.typing import NDArray

from ._utils import ArrayLike, as_labels, as_scores, check_lengths, count_classes
from .curve import RocCurve, build_curve
from .integrate import ThresholdOn, select_threshold_index
from .ranking import _group_validated, group_by_score

logger = logging.getLogger(__name__)


def _partial_auc(
    curve: RocCurve,
    x_threshold: float,
    threshold_on: ThresholdOn,
    verbose: bool,
) -> float:
    idx = select_threshold_index(
        curve.fpr, curve.auc, x_threshold=x_threshold, threshold_on=threshold_on
    )
    if verbose:
        print(f"x=\t{curve.fpr[idx]}\ty=\t{curve.tpr[idx]}")
    return float(curve.auc[idx])


def _column_auc(
    scores: NDArray,
    labels: NDArray,
    decreasing: bool,
    x_threshold: float,
    threshold_on: ThresholdOn,
    verbose: bool,
) -> float:
    # Scores and labels were validated once for the whole matrix
    curve = build_curve(_group_validated(scores, labels, decreasing))
    return _partial_auc(curve, x_threshold, threshold_on, verbose)


def compute_roc(
    scores: ArrayLike,
    labels: ArrayLike,
    decreasing: bool = True,
    auc_only: bool = False,
    x_threshold: float = 1,
    verbose: bool = False,
    threshold_on: ThresholdOn = "fpr",
) -> RocCurve | float | NDArray:
    """Compute the ROC curve or its AUC for one score vector.

    Args:
        scores: Score for each sample. A 2-D array is treated as one score
            vector per column and handed to :func:`compute_roc_batch`, which
            always returns per-column AUCs: ``auc_only`` is ignored and no
            curves are returned for matrix input.
        labels: Whether each sample is a positive (boolean or 0/1).
        decreasing: Higher scores mean more likely positive. Set to False if
            lower scores mean higher probability of being positive.
        auc_only: Return the (partial) AUC instead of the curve. Only applies
            to 1-D scores.
        x_threshold: Cutoff for the partial AUC in ``auc_only`` mode. The
            default of 1 returns the full AUC.
        verbose: Print the (FPR, TPR) point the AUC was read at to stdout.
        threshold_on: Curve coordinate compared against ``x_threshold``:
            ``"fpr"`` for AUC up to an FPR cutoff, ``"auc"`` for the first
            running AUC reaching the cutoff.

    Returns:
        RocCurve when ``auc_only`` is False, the AUC as a float otherwise. For
        2-D scores, an array of per-column AUCs whatever ``auc_only`` is.

    Raises:
        DimensionMismatch: If scores and labels differ in length.
        DegenerateLabelSet: If labels lack either class.
        RocInputError: If scores are non-numeric or NaN, or labels are not
            binary.
    """
    if np.ndim(scores) == 2:
        return compute_roc_batch(
            scores,
            labels,
            decreasing=decreasing,
            x_threshold=x_threshold,
            verbose=verbose,
            threshold_on=threshold_on,
        )

    groups = group_by_score(scores, labels, decreasing=decreasing)
    curve = build_curve(groups)
    logger.debug(
        "ROC curve: %d samples, %d rank groups, %d points, AUC=%.6f",
        curve.n_pos + curve.n_neg,
        len(groups),
        len(curve),
        curve.full_auc,
    )

    if not auc_only:
        return curve
    return _partial_auc(curve, x_threshold, threshold_on, verbose)


def compute_roc_batch(
    score_matrix: ArrayLike,
    labels: ArrayLike,
    decreasing: bool = True,
    x_threshold: float = 1,
    verbose: bool = False,
    threshold_on: ThresholdOn = "fpr",
    n_jobs: int = 1,
) -> NDArray:
    """Compute the AUC of every column of a score matrix.

    Each column is an independent scoring of the same samples (rows) and is
    evaluated against the shared ``labels`` in AUC-only mode.

    Args:
        score_matrix: Scores of shape (n_samples, n_scorers).
        labels: Whether each row is a positive (boolean or 0/1).
        decreasing: Score direction, see :func:`compute_roc`.
        x_threshold: Partial-AUC cutoff, see :func:`compute_roc`.
        verbose: Print the point each AUC was read at.
        threshold_on: Coordinate compared against ``x_threshold``.
        n_jobs: Number of worker threads. 1 runs sequentially, -1 uses one
            thread per CPU.

    Returns:
        Array of shape (n_scorers,) with the AUC of each column.

    Raises:
        DimensionMismatch: If the matrix is not 2-D or its row count differs
            from the number of labels.
        DegenerateLabelSet: If labels lack either class.
    """
    score_matrix = as_scores(score_matrix, ndim=2)
    labels = as_labels(labels)
    n_rows, n_cols = score_matrix.shape
    check_lengths(n_rows, len(labels))
    count_classes(labels)

    def column_auc(column: NDArray) -> float:
        return _column_auc(
            column, labels, decreasing, x_threshold, threshold_on, verbose
        )

    columns = list(score_matrix.T)
    if n_jobs == -1:
        n_jobs = os.cpu_count() or 1
    if n_jobs < 1:
        raise ValueError(f"n_jobs must be a positive integer or -1, got {n_jobs}")

    if n_jobs == 1 or n_cols <= 1:
        aucs = [column_auc(column) for column in columns]
    else:
        # map() yields results in submission order
        with ThreadPoolExecutor(max_workers=min(n_jobs, n_cols)) as pool:
            aucs = list(pool.map(column_auc, columns))

    return np.asarray(aucs, dtype=np.float64)
