from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from loguru import logger

from rank_one_update.config import DEFAULT_CONFIG, UpdateConfig
from rank_one_update.errors import InvalidArgumentError, NumericalDegeneracyError
from rank_one_update.scalar_field.base import ScalarField
from rank_one_update.validation import (
    check_dtypes,
    check_finite,
    check_ldl_shapes,
    check_lower_triangular,
)


class LDLUpdateBase(ABC):
    r"""
    Base class for in-place rank-1 updates of an $LDL^H$ factorization.

    $L$ is unit lower triangular (its diagonal is implied to be 1 and is never
    read nor written) and $D$ is a strictly positive diagonal. The update
    rewrites both so that $L'D'L'^H = LDL^H + xx^H$. At column $i$, with
    $d = D_i$ and $a = x_i$:

    $$ g = d + |a|^2, \quad
       L'_{ji} = (d L_{ji} + \bar{a} x_j) / g, \quad
       x'_j = \sqrt{d / g} \, (a L_{ji} - x_j) \quad (j > i), \quad D'_i = g $$

    Forming $L'$ and $D'$ needs no square root; the one per column only
    rescales the residual vector.
    """

    field: ScalarField

    def __init__(self, config: Optional[UpdateConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

    @abstractmethod
    def check_provider(self, lower: Any, diag: Any, update_vector: Any) -> None:
        """
        Checks that the arguments are arrays this updater can mutate.

        Raises:
            InvalidArgumentError: If an argument has the wrong type or lives on
                the wrong device.
        """

    def validate(self, lower: Any, diag: Any, update_vector: Any) -> Tuple[int, Any]:
        """
        Runs every argument check before any mutation happens.

        Returns:
            Tuple[int, Any]:
                1. The matrix size N.
                2. A writable view of the diagonal entries of `diag`, shape [..., N].
        """
        field = self.field
        self.check_provider(lower, diag, update_vector)
        dim, diag_is_matrix = check_ldl_shapes(
            lower.shape, diag.shape, update_vector.shape
        )
        check_dtypes(field, lower, update_vector)
        if field.is_complex(diag) or diag.dtype != field.real_dtype(lower):
            raise InvalidArgumentError(
                f"Diagonal factor must be real with dtype {field.real_dtype(lower)}, got {diag.dtype}"
            )
        # the stored diagonal of L is implied to be 1 and never read
        check_finite(
            self.config, field, L=field.tril(lower, offset=-1), D=diag, x=update_vector
        )
        check_lower_triangular(self.config, field, lower)

        diag_entries = field.diagonal(diag) if diag_is_matrix else diag
        if self.config.check_structure:
            if diag_is_matrix and field.any_nonzero(
                diag - field.tril(field.triu(diag))
            ):
                raise InvalidArgumentError("Diagonal factor has nonzero off-diagonal entries")
            if not field.all_positive(diag_entries):
                raise InvalidArgumentError("Diagonal factor must be strictly positive")
        return dim, diag_entries

    def calculate_new_column(
        self, curr_i: int, lower: Any, diag_entries: Any, update_vector: Any
    ) -> None:
        r"""
        Rewrites column `curr_i` of $L$, the entry $D_i$ and the trailing part of $x$.

        Args:
            curr_i (int): The index of the current column ($0 \le i < N$).
            lower (Any): The unit lower triangular factor. Shape: $[..., N, N]$.
            diag_entries (Any): Writable diagonal entries of $D$. Shape: $[..., N]$.
            update_vector (Any): The residual update vector. Shape: $[..., N]$.

        Raises:
            NumericalDegeneracyError: If the new pivot $g$ is non-positive or non-finite.
        """
        field = self.field
        diag_at_i = diag_entries[..., curr_i]
        x_at_i = update_vector[..., curr_i]

        new_diag = diag_at_i + field.abs_squared(x_at_i)
        if not field.is_valid_pivot(new_diag):
            logger.warning(f"LDL update degenerated at column {curr_i}")
            raise NumericalDegeneracyError(column=curr_i, pivot=new_diag)

        k = curr_i + 1
        if k < lower.shape[-1]:
            lower_from_k = lower[..., k:, curr_i]
            x_from_k = update_vector[..., k:]
            g = field.unsqueeze(new_diag)
            d = field.unsqueeze(diag_at_i)
            a = field.unsqueeze(x_at_i)

            new_lower_from_k = (d * lower_from_k + field.conj(a) * x_from_k) / g
            new_x_from_k = field.sqrt(d / g) * (a * lower_from_k - x_from_k)

            lower[..., k:, curr_i] = new_lower_from_k
            update_vector[..., k:] = new_x_from_k

        diag_entries[..., curr_i] = new_diag

    def ldl_update(self, lower: Any, diag: Any, update_vector: Any) -> Tuple[Any, Any]:
        r"""
        Performs the rank-1 update of a (batch of) $LDL^H$ factorization(s) in place.

        Computes $L', D'$ such that:
        $$ L' D' L'^H = L D L^H + x x^H $$

        All argument checks run before the first write. A
        `NumericalDegeneracyError` aborts the sweep at the failing column and
        leaves the preceding columns (and entries of $D$) updated.

        Args:
            lower (Any): Unit lower triangular factor $L$. Shape: $[..., N, N]$.
                Its diagonal is ignored. Overwritten with $L'$.
            diag (Any): Strictly positive real diagonal $D$, either as entries
                of shape $[..., N]$ or as a diagonal matrix of shape $[..., N, N]$.
                Overwritten with $D'$ in the same form.
            update_vector (Any): The vector $x$. Shape: $[..., N]$, same dtype as
                `lower`. Overwritten with scratch values.

        Returns:
            Tuple[Any, Any]: `lower` and `diag`, holding $L'$ and $D'$.
        """
        dim, diag_entries = self.validate(lower, diag, update_vector)
        for i in range(dim):
            self.calculate_new_column(i, lower, diag_entries, update_vector)
        return lower, diag
