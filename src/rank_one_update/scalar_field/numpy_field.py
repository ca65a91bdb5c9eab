from typing import Any

import numpy as np

from rank_one_update.scalar_field.base import ScalarField


class NumpyField(ScalarField):
    """Scalar field backed by numpy arrays."""

    name = "numpy"

    def is_array(self, value: Any) -> bool:
        return isinstance(value, np.ndarray)

    def is_inexact(self, array: np.ndarray) -> bool:
        return np.issubdtype(array.dtype, np.inexact)

    def is_complex(self, array: np.ndarray) -> bool:
        return np.iscomplexobj(array)

    def real_dtype(self, array: np.ndarray) -> np.dtype:
        return np.finfo(array.dtype).dtype

    def conj(self, array: Any) -> Any:
        return np.conj(array)

    def abs(self, array: Any) -> Any:
        return np.abs(array)

    def sqrt(self, array: Any) -> Any:
        return np.sqrt(array)

    def hypot(self, first: Any, second: Any) -> Any:
        return np.hypot(first, second)

    def unsqueeze(self, array: Any) -> np.ndarray:
        return np.expand_dims(array, axis=-1)

    def diagonal(self, array: np.ndarray) -> np.ndarray:
        # np.diagonal returns a read-only view, einsum a writable one
        return np.einsum("...ii->...i", array)

    def tril(self, array: np.ndarray, offset: int = 0) -> np.ndarray:
        return np.tril(array, k=offset)

    def triu(self, array: np.ndarray, offset: int = 0) -> np.ndarray:
        return np.triu(array, k=offset)

    def eye_like(self, array: np.ndarray) -> np.ndarray:
        return np.eye(array.shape[-1], dtype=array.dtype)

    def conj_transpose(self, array: np.ndarray) -> np.ndarray:
        return np.conj(np.swapaxes(array, -1, -2))

    def all_finite(self, array: Any) -> bool:
        return bool(np.all(np.isfinite(array)))

    def all_positive(self, array: Any) -> bool:
        return bool(np.all(np.asarray(array) > 0))

    def any_nonzero(self, array: Any) -> bool:
        return bool(np.any(np.asarray(array) != 0))

    def any_zero(self, array: Any) -> bool:
        return bool(np.any(np.asarray(array) == 0))
