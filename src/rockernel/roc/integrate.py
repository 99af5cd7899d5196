"""Trapezoidal integration of ROC curves and partial-AUC thresholding.

Areas are accumulated on the integer TP/FP counts and normalised once at the
end. Every increment is an exact integer multiple of ``1 / (2 * n_pos * n_neg)``
so the running AUC is monotone and the full AUC is exactly 1.0 for a perfect
scorer.

A collapsed curve keeps only the highest TPR at each FPR. The segment leading
into such a point rises to the TPR the curve had when it first reached that
FPR (``tp_entry``); the remaining vertical rise adds no area. Integrating with
``tp_entry`` gives the exact area of the uncollapsed curve.
"""

from typing import Literal

import numpy as np
from numpy.typing import NDArray

ThresholdOn = Literal["fpr", "auc"]


def _doubled_areas(
    tp: NDArray, fp: NDArray, tp_entry: NDArray | None = None
) -> NDArray:
    """Twice the un-normalised area of each interval, in integer units."""
    tp = np.asarray(tp, dtype=np.int64)
    fp = np.asarray(fp, dtype=np.int64)
    tp_entry = tp if tp_entry is None else np.asarray(tp_entry, dtype=np.int64)

    doubled = np.zeros(len(tp), dtype=np.int64)
    doubled[1:] = np.diff(fp) * (tp[:-1] + tp_entry[1:])
    return doubled


def trapezoid_increments(
    tp: NDArray,
    fp: NDArray,
    n_pos: int,
    n_neg: int,
    tp_entry: NDArray | None = None,
) -> NDArray:
    """Area under each curve interval.

    ``a[0] = 0`` and ``a[i] = 0.5 * (x[i] - x[i-1]) * (y[i] + y[i-1])`` with
    ``x = fp / n_neg`` and ``y = tp / n_pos``. When ``tp_entry`` is given it
    replaces ``tp`` at the right end of each interval.

    Args:
        tp: Cumulative true-positive counts at each curve point.
        fp: Cumulative false-positive counts at each curve point.
        n_pos: Total number of positives.
        n_neg: Total number of negatives.
        tp_entry: True-positive count when the curve first reached each
            point's FPR. Defaults to ``tp`` (plain polyline trapezoid).

    Returns:
        Float array aligned with the curve points.
    """
    return _doubled_areas(tp, fp, tp_entry) / (2.0 * n_pos * n_neg)


def cumulative_auc(
    tp: NDArray,
    fp: NDArray,
    n_pos: int,
    n_neg: int,
    tp_entry: NDArray | None = None,
) -> NDArray:
    """Running AUC up to each curve point; the last entry is the full AUC."""
    return np.cumsum(_doubled_areas(tp, fp, tp_entry)) / (2.0 * n_pos * n_neg)


def select_threshold_index(
    fpr: NDArray,
    auc: NDArray,
    x_threshold: float = 1,
    threshold_on: ThresholdOn = "fpr",
) -> int:
    """Index of the curve point reporting the partial AUC.

    Returns the first index whose FPR (``threshold_on="fpr"``) or running AUC
    (``threshold_on="auc"``) is at least ``x_threshold``. When no point
    qualifies the last index is returned, i.e. the full AUC.

    Both sequences are non-decreasing, so a left binary search finds the
    first qualifying point.
    """
    if threshold_on == "fpr":
        values = fpr
    elif threshold_on == "auc":
        values = auc
    else:
        raise ValueError(f"Unknown threshold_on: {threshold_on}")

    idx = int(np.searchsorted(values, x_threshold, side="left"))
    return min(idx, len(values) - 1)
