from typing import Any, Sequence, Tuple

from rank_one_update.config import UpdateConfig
from rank_one_update.errors import DimensionMismatchError, InvalidArgumentError
from rank_one_update.scalar_field.base import ScalarField


def check_lower_factor_shape(lower_shape: Sequence[int]) -> int:
    """
    Checks that a factor has shape [..., N, N] with N > 0.

    Returns:
        int: The matrix size N.
    """
    if len(lower_shape) < 2:
        raise DimensionMismatchError(
            f"Factor must have at least 2 dimensions, got shape {tuple(lower_shape)}"
        )
    if lower_shape[-1] != lower_shape[-2]:
        raise DimensionMismatchError(
            f"Factor must be square, got shape {tuple(lower_shape)}"
        )
    return lower_shape[-1]


def check_vector_shape(
    vector_shape: Sequence[int], lower_shape: Sequence[int], name: str = "x"
) -> None:
    """Checks that a vector of shape [..., N] matches a factor of shape [..., N, N]."""
    if len(vector_shape) < 1 or vector_shape[-1] != lower_shape[-1]:
        raise DimensionMismatchError(
            f"Length of {name} must match factor size {lower_shape[-1]}, "
            f"got shapes {name}={tuple(vector_shape)} and L={tuple(lower_shape)}"
        )
    if tuple(vector_shape[:-1]) != tuple(lower_shape[:-2]):
        raise DimensionMismatchError(
            f"Batch dimensions of {name} {tuple(vector_shape[:-1])} do not match "
            f"those of L {tuple(lower_shape[:-2])}"
        )


def check_cholesky_shapes(
    chol_shape: Sequence[int], update_vector_shape: Sequence[int]
) -> int:
    """
    Checks the shapes of a Cholesky update: L [..., N, N], x [..., N], N > 0.

    Returns:
        int: The matrix size N.
    """
    dim = check_lower_factor_shape(chol_shape)
    check_vector_shape(update_vector_shape, chol_shape)
    if dim == 0:
        raise InvalidArgumentError("Cannot update an empty (0 x 0) factorization")
    return dim


def check_ldl_shapes(
    lower_shape: Sequence[int],
    diag_shape: Sequence[int],
    update_vector_shape: Sequence[int],
) -> Tuple[int, bool]:
    """
    Checks the shapes of an LDL update.

    `D` is accepted either as a vector [..., N] of diagonal entries or as a
    diagonal matrix [..., N, N].

    Returns:
        Tuple[int, bool]:
            1. The matrix size N.
            2. Whether `D` is given in matrix form.
    """
    dim = check_lower_factor_shape(lower_shape)
    check_vector_shape(update_vector_shape, lower_shape)

    diag_is_matrix = len(diag_shape) == len(lower_shape)
    if diag_is_matrix:
        if tuple(diag_shape) != tuple(lower_shape):
            raise DimensionMismatchError(
                f"Diagonal factor in matrix form must have the shape of L "
                f"{tuple(lower_shape)}, got {tuple(diag_shape)}"
            )
    else:
        check_vector_shape(diag_shape, lower_shape, name="D")

    if dim == 0:
        raise InvalidArgumentError("Cannot update an empty (0 x 0) factorization")
    return dim, diag_is_matrix


def check_dtypes(field: ScalarField, lower: Any, update_vector: Any) -> None:
    if not field.is_inexact(lower):
        raise InvalidArgumentError(
            f"Factor must hold real or complex floating values, got {lower.dtype}"
        )
    if update_vector.dtype != lower.dtype:
        raise InvalidArgumentError(
            f"Update vector dtype {update_vector.dtype} does not match factor dtype {lower.dtype}"
        )


def check_finite(config: UpdateConfig, field: ScalarField, **arrays: Any) -> None:
    if not config.check_finite:
        return
    for name, array in arrays.items():
        if not field.all_finite(array):
            raise InvalidArgumentError(f"{name} contains non-finite values")


def check_lower_triangular(config: UpdateConfig, field: ScalarField, lower: Any) -> None:
    if config.check_structure and field.any_nonzero(field.triu(lower, offset=1)):
        raise InvalidArgumentError(
            "Factor is not lower triangular: entries above the diagonal are nonzero"
        )
