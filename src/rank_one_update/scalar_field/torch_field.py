from typing import Any

import torch
from torch import Tensor

from rank_one_update.scalar_field.base import ScalarField

_REAL_DTYPES = {
    torch.complex32: torch.float16,
    torch.complex64: torch.float32,
    torch.complex128: torch.float64,
}


class TorchField(ScalarField):
    """Scalar field backed by PyTorch tensors, on whatever device holds them."""

    name = "torch"

    def is_array(self, value: Any) -> bool:
        return isinstance(value, Tensor)

    def is_inexact(self, array: Tensor) -> bool:
        return torch.is_floating_point(array) or torch.is_complex(array)

    def is_complex(self, array: Tensor) -> bool:
        return torch.is_complex(array)

    def real_dtype(self, array: Tensor) -> torch.dtype:
        return _REAL_DTYPES.get(array.dtype, array.dtype)

    def conj(self, array: Tensor) -> Tensor:
        # resolve_conj materializes the lazy conjugation view
        return torch.conj(array).resolve_conj()

    def abs(self, array: Tensor) -> Tensor:
        return torch.abs(array)

    def sqrt(self, array: Tensor) -> Tensor:
        return torch.sqrt(array)

    def hypot(self, first: Tensor, second: Tensor) -> Tensor:
        return torch.hypot(first, second)

    def unsqueeze(self, array: Tensor) -> Tensor:
        return torch.unsqueeze(array, dim=-1)

    def diagonal(self, array: Tensor) -> Tensor:
        return array.diagonal(dim1=-2, dim2=-1)

    def tril(self, array: Tensor, offset: int = 0) -> Tensor:
        return torch.tril(array, diagonal=offset)

    def triu(self, array: Tensor, offset: int = 0) -> Tensor:
        return torch.triu(array, diagonal=offset)

    def eye_like(self, array: Tensor) -> Tensor:
        return torch.eye(array.shape[-1], dtype=array.dtype, device=array.device)

    def conj_transpose(self, array: Tensor) -> Tensor:
        return array.mH

    def all_finite(self, array: Tensor) -> bool:
        return bool(torch.isfinite(array).all())

    def all_positive(self, array: Tensor) -> bool:
        return bool((array > 0).all())

    def any_nonzero(self, array: Tensor) -> bool:
        return bool((array != 0).any())

    def any_zero(self, array: Tensor) -> bool:
        return bool((array == 0).any())
