"""ROC curves and AUC statistics for scored classification results.

This package computes empirical ROC curves with exact handling of tied
scores, running and partial AUCs, and AUCs for many scoring columns evaluated
against one shared ground truth.
"""

from . import datagen, roc
from .errors import DegenerateLabelSet, DimensionMismatch, RocInputError
from .roc import RocCurve, compute_roc, compute_roc_batch

__all__ = [
    "DegenerateLabelSet",
    "DimensionMismatch",
    "RocCurve",
    "RocInputError",
    "compute_roc",
    "compute_roc_batch",
    "datagen",
    "roc",
]
