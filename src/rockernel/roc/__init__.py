"""ROC curve and AUC engine."""

from .curve import RocCurve, build_curve, collapse_duplicate_fpr
from .integrate import cumulative_auc, select_threshold_index, trapezoid_increments
from .kernel import compute_roc, compute_roc_batch
from .ranking import RankGroups, dense_ranks, group_by_score

__all__ = [
    "RankGroups",
    "RocCurve",
    "build_curve",
    "collapse_duplicate_fpr",
    "compute_roc",
    "compute_roc_batch",
    "cumulative_auc",
    "dense_ranks",
    "group_by_score",
    "select_threshold_index",
    "trapezoid_increments",
]
