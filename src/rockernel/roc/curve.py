"""ROC curve construction from tied rank groups."""

from dataclasses import dataclass

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from .integrate import cumulative_auc
from .ranking import RankGroups

#  y-axis: sensitivity, TPR = TP / (TP + FN)
#  x-axis: 1 - specificity, FPR = FP / (TN + FP)


@dataclass(frozen=True)
class RocCurve:
    """Empirical ROC curve with its running AUC.

    One entry per curve point after duplicate-FPR collapsing. The curve
    starts at (0, 0) and ends at (1, 1).

    Attributes:
        fpr: False positive rate (x-axis) at each point.
        tpr: True positive rate (y-axis) at each point.
        auc: Area under the uncollapsed curve from the origin up to each
            point. A vertical step folded into a kept point adds no area, so
            this is not always the trapezoid of the listed ``fpr``/``tpr``.
        tp: Cumulative true-positive count at each point.
        fp: Cumulative false-positive count at each point.
        tp_entry: Cumulative true-positive count when the curve first reached
            each point's FPR, used to integrate vertical steps exactly.
        n_pos: Total number of positive samples.
        n_neg: Total number of negative samples.
    """

    fpr: NDArray
    tpr: NDArray
    auc: NDArray
    tp: NDArray
    fp: NDArray
    tp_entry: NDArray
    n_pos: int
    n_neg: int

    def __len__(self) -> int:
        return len(self.fpr)

    @property
    def full_auc(self) -> float:
        return float(self.auc[-1])

    def as_array(self) -> NDArray:
        """Curve as an ``(n_points, 3)`` array of FPR, TPR and running AUC."""
        return np.column_stack([self.fpr, self.tpr, self.auc])

    def to_frame(self) -> pd.DataFrame:
        """Curve as a DataFrame with ``fpr``, ``tpr`` and ``auc`` columns."""
        return pd.DataFrame({"fpr": self.fpr, "tpr": self.tpr, "auc": self.auc})


def collapse_duplicate_fpr(fpr: NDArray) -> NDArray:
    """Keep-mask retaining only the last point of each run of equal FPR.

    The sequence is traversed from the high-FPR end: the first point seen is
    kept, and every further point is kept only when its FPR differs from the
    point that follows it in forward order. Within a run of equal FPR the
    surviving point is therefore the last one, which carries the highest TPR.

    Args:
        fpr: Non-decreasing FPR values of the uncollapsed curve.

    Returns:
        Boolean mask aligned with ``fpr``.
    """
    fpr = np.asarray(fpr)
    rev_fpr = fpr[::-1]
    keep_rev = np.empty(len(rev_fpr), dtype=bool)
    keep_rev[:1] = True
    keep_rev[1:] = rev_fpr[1:] != rev_fpr[:-1]
    return keep_rev[::-1]


def build_curve(groups: RankGroups) -> RocCurve:
    """Build the collapsed ROC curve from rank groups.

    The running TP/FP counts are taken after each group, with the origin
    prepended. Points sharing an FPR are collapsed with
    :func:`collapse_duplicate_fpr`; the origin itself is always retained so
    that the curve is anchored at (0, 0) even when the highest-ranked groups
    contain no negatives.

    The running AUC is the exact area under the uncollapsed curve; see
    :mod:`rockernel.roc.integrate`.

    Args:
        groups: Rank groups ordered from most to least positive.

    Returns:
        RocCurve with the running AUC attached.
    """
    n_pos = groups.total_pos
    n_neg = groups.total_neg

    tp = np.concatenate([[0], np.cumsum(groups.n_pos)]).astype(np.int64)
    fp = np.concatenate([[0], np.cumsum(groups.n_neg)]).astype(np.int64)

    keep = collapse_duplicate_fpr(fp)
    keep[0] = True
    # fp is non-decreasing, so the left insertion point is the start of its run
    tp_entry = tp[np.searchsorted(fp, fp[keep], side="left")]
    tp = tp[keep]
    fp = fp[keep]

    return RocCurve(
        fpr=fp / n_neg,
        tpr=tp / n_pos,
        auc=cumulative_auc(tp, fp, n_pos, n_neg, tp_entry=tp_entry),
        tp=tp,
        fp=fp,
        tp_entry=tp_entry,
        n_pos=n_pos,
        n_neg=n_neg,
    )
