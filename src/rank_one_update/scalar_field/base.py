from abc import ABC, abstractmethod
from typing import Any


class ScalarField(ABC):
    """
    Arithmetic primitives over a real or complex floating scalar field.

    The rank-one updaters are written once against this interface; each array
    provider (torch, numpy) supplies the element-wise operations and the few
    reductions the updaters need. Plain `+ - * /` and slicing are used directly
    on the arrays since both providers share that syntax.
    """

    name: str

    @abstractmethod
    def is_array(self, value: Any) -> bool:
        """Whether `value` is an array of this provider."""

    @abstractmethod
    def is_inexact(self, array: Any) -> bool:
        """Whether `array` holds real or complex floating point values."""

    @abstractmethod
    def is_complex(self, array: Any) -> bool: ...

    @abstractmethod
    def real_dtype(self, array: Any) -> Any:
        """The real dtype matching the precision of `array` (float64 for complex128)."""

    @abstractmethod
    def conj(self, array: Any) -> Any: ...

    @abstractmethod
    def abs(self, array: Any) -> Any: ...

    def abs_squared(self, array: Any) -> Any:
        return self.abs(array) ** 2

    @abstractmethod
    def sqrt(self, array: Any) -> Any: ...

    @abstractmethod
    def hypot(self, first: Any, second: Any) -> Any:
        r"""Element-wise $\sqrt{a^2 + b^2}$ for real `first` and `second`, without overflow."""

    @abstractmethod
    def unsqueeze(self, array: Any) -> Any:
        """Appends a trailing axis of size one, for broadcasting a per-matrix scalar over a column."""

    @abstractmethod
    def diagonal(self, array: Any) -> Any:
        """Writable view of the diagonal of the last two axes."""

    @abstractmethod
    def tril(self, array: Any, offset: int = 0) -> Any: ...

    @abstractmethod
    def triu(self, array: Any, offset: int = 0) -> Any: ...

    @abstractmethod
    def eye_like(self, array: Any) -> Any:
        """Identity matrix with the size, dtype and device of the last axis of `array`."""

    @abstractmethod
    def conj_transpose(self, array: Any) -> Any: ...

    @abstractmethod
    def all_finite(self, array: Any) -> bool: ...

    @abstractmethod
    def all_positive(self, array: Any) -> bool: ...

    @abstractmethod
    def any_nonzero(self, array: Any) -> bool: ...

    @abstractmethod
    def any_zero(self, array: Any) -> bool: ...

    def is_valid_pivot(self, pivot: Any) -> bool:
        return self.all_finite(pivot) and self.all_positive(pivot)
