"""Input conversion shared by the ROC engine stages."""

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from torch import Tensor

from ..errors import DegenerateLabelSet, DimensionMismatch, RocInputError

ArrayLike = NDArray | Tensor | Sequence


def torch_to_numpy(tensor: ArrayLike) -> NDArray:
    """Convert tensor, numpy array or sequence to a numpy array.

    Args:
        tensor: Input PyTorch tensor (any device), numpy array or sequence.

    Returns:
        Numpy array with preserved dtype.
    """
    if isinstance(tensor, np.ndarray):
        return tensor

    # Tensors may live on CUDA; detach and move before conversion
    if isinstance(tensor, Tensor):
        return tensor.detach().cpu().numpy()

    return np.asarray(tensor)


def as_scores(scores: ArrayLike, ndim: int = 1) -> NDArray:
    """Convert scores to a numeric array of the expected dimensionality.

    Integer and boolean scores keep their dtype, so distinct integers beyond
    float precision stay distinct.

    Raises:
        RocInputError: If scores are not numeric or any score is NaN.
        DimensionMismatch: If the array does not have ``ndim`` dimensions.
    """
    arr = torch_to_numpy(scores)

    if arr.dtype.kind not in "biuf":
        raise RocInputError(f"'scores' must be numeric, got dtype {arr.dtype}.")
    if arr.ndim != ndim:
        raise DimensionMismatch(
            f"'scores' must be {ndim}-dimensional, got shape {arr.shape}."
        )
    if arr.dtype.kind == "f" and np.isnan(arr).any():
        raise RocInputError("'scores' contains NaN values.")
    return arr


def as_labels(labels: ArrayLike) -> NDArray:
    """Convert ground-truth labels to a 1-D boolean array.

    Boolean input is used as-is; numeric input must only contain 0 and 1.

    Raises:
        DimensionMismatch: If labels are not 1-dimensional.
        RocInputError: If numeric labels contain values other than 0 or 1.
    """
    arr = torch_to_numpy(labels)
    if arr.ndim != 1:
        raise DimensionMismatch(
            f"'labels' must be 1-dimensional, got shape {arr.shape}."
        )
    if arr.dtype == bool:
        return arr

    if arr.dtype.kind not in "iuf":
        raise RocInputError(f"'labels' must be boolean or 0/1, got dtype {arr.dtype}.")
    if not np.isin(arr, (0, 1)).all():
        raise RocInputError("'labels' must only contain 0 and 1.")
    return arr.astype(bool)


def check_lengths(n_scores: int, n_labels: int) -> None:
    """Fail fast when scores and labels have different numbers of rows."""
    if n_scores != n_labels:
        raise DimensionMismatch(
            f"'scores' and 'labels' do not have equal number of rows "
            f"({n_scores} != {n_labels})."
        )


def count_classes(labels: NDArray) -> tuple[int, int]:
    """Return ``(n_pos, n_neg)`` for a boolean label vector.

    Raises:
        DegenerateLabelSet: If either class is absent.
    """
    n_pos = int(np.count_nonzero(labels))
    n_neg = int(labels.size - n_pos)
    if n_pos == 0 or n_neg == 0:
        raise DegenerateLabelSet(
            f"ROC is undefined without both classes (positives={n_pos}, "
            f"negatives={n_neg})."
        )
    return n_pos, n_neg
