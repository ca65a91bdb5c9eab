import numpy as np

from rank_one_update.errors import InvalidArgumentError
from rank_one_update.ldl_update.ldl_update_base import LDLUpdateBase
from rank_one_update.scalar_field.numpy_field import NumpyField


class LDLUpdateNumpy(LDLUpdateBase):
    """NumPy implementation of the in-place rank-1 $LDL^H$ update."""

    field = NumpyField()

    def check_provider(
        self, lower: np.ndarray, diag: np.ndarray, update_vector: np.ndarray
    ) -> None:
        for name, array in (("L", lower), ("D", diag), ("x", update_vector)):
            if not isinstance(array, np.ndarray):
                raise InvalidArgumentError(
                    f"{name} must be a numpy.ndarray, got {type(array).__name__}"
                )
            if not array.flags.writeable:
                raise InvalidArgumentError(f"{name} is read-only and cannot be updated in place")
