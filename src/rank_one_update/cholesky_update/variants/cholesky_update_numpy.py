import numpy as np

from rank_one_update.cholesky_update.cholesky_update_base import CholeskyUpdateBase
from rank_one_update.errors import InvalidArgumentError
from rank_one_update.scalar_field.numpy_field import NumpyField


class CholeskyUpdateNumpy(CholeskyUpdateBase):
    """NumPy implementation of the in-place rank-1 Cholesky update."""

    field = NumpyField()

    def check_provider(self, chol: np.ndarray, update_vector: np.ndarray) -> None:
        for name, array in (("L", chol), ("x", update_vector)):
            if not isinstance(array, np.ndarray):
                raise InvalidArgumentError(
                    f"{name} must be a numpy.ndarray, got {type(array).__name__}"
                )
            if not array.flags.writeable:
                raise InvalidArgumentError(f"{name} is read-only and cannot be updated in place")
