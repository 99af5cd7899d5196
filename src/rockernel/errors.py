"""Exceptions raised by the ROC engine."""


class RocInputError(ValueError):
    """Invalid scores or labels passed to the ROC engine."""


class DimensionMismatch(RocInputError):
    """Scores and labels disagree in length or shape."""


class DegenerateLabelSet(RocInputError):
    """Labels contain no positives or no negatives.

    Either TPR or FPR would be normalised by zero, so no curve exists.
    """
