from abc import ABC, abstractmethod
from typing import Any, Optional

from loguru import logger

from rank_one_update.config import DEFAULT_CONFIG, UpdateConfig
from rank_one_update.errors import InvalidArgumentError, NumericalDegeneracyError
from rank_one_update.scalar_field.base import ScalarField
from rank_one_update.validation import (
    check_cholesky_shapes,
    check_dtypes,
    check_finite,
    check_lower_triangular,
)


class CholeskyUpdateBase(ABC):
    r"""
    Base class for in-place rank-1 Cholesky updates.

    Given a lower triangular $L$ with $LL^H = A$ and a vector $x$, the update
    rewrites $L$ so that $L'L'^H = A + xx^H$, sweeping the columns left to right.
    At column $i$, with $l = L_{ii}$ and $a = x_i$:

    $$ r = \sqrt{|l|^2 + |a|^2}, \quad
       L'_{ji} = (\bar{l} L_{ji} + \bar{a} x_j) / r, \quad
       x'_j = (l x_j - a L_{ji}) / r \quad (j > i) $$

    which is a unitary rotation of the pair $(L_{:,i}, x)$ zeroing $x_i$.

    The update vector is used as scratch: after the call it holds rotation
    residues, neither the original vector nor zeros.

    Subclasses provide the scalar field of their array provider and check that
    the arguments belong to it.
    """

    field: ScalarField

    def __init__(self, config: Optional[UpdateConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

    @abstractmethod
    def check_provider(self, chol: Any, update_vector: Any) -> None:
        """
        Checks that the arguments are arrays this updater can mutate.

        Raises:
            InvalidArgumentError: If an argument has the wrong type or lives on
                the wrong device.
        """

    def validate(self, chol: Any, update_vector: Any) -> int:
        """
        Runs every argument check before any mutation happens.

        Returns:
            int: The matrix size N.
        """
        self.check_provider(chol, update_vector)
        dim = check_cholesky_shapes(chol.shape, update_vector.shape)
        check_dtypes(self.field, chol, update_vector)
        check_finite(self.config, self.field, L=chol, x=update_vector)
        check_lower_triangular(self.config, self.field, chol)
        if self.config.check_structure and self.field.any_zero(
            self.field.diagonal(chol)
        ):
            raise InvalidArgumentError("Cholesky factor has a zero on its diagonal")
        return dim

    def calculate_new_column(self, curr_i: int, chol: Any, update_vector: Any) -> None:
        r"""
        Rewrites column `curr_i` of $L$ and the trailing part of $x$ in place.

        Only the sub-column $L_{i+1:, i}$ and the slice $x_{i+1:}$ are written,
        besides the pivot $L_{ii}$.

        Args:
            curr_i (int): The index of the current column ($0 \le i < N$).
            chol (Any): The factor being updated. Shape: $[..., N, N]$.
            update_vector (Any): The residual update vector. Shape: $[..., N]$.

        Raises:
            NumericalDegeneracyError: If the new pivot is zero or non-finite.
        """
        field = self.field
        chol_at_i = chol[..., curr_i, curr_i]
        x_at_i = update_vector[..., curr_i]

        new_diag = field.hypot(field.abs(chol_at_i), field.abs(x_at_i))
        if not field.is_valid_pivot(new_diag):
            logger.warning(f"Cholesky update degenerated at column {curr_i}")
            raise NumericalDegeneracyError(column=curr_i, pivot=new_diag)

        k = curr_i + 1
        if k < chol.shape[-1]:
            chol_from_k = chol[..., k:, curr_i]
            x_from_k = update_vector[..., k:]
            r = field.unsqueeze(new_diag)
            l = field.unsqueeze(chol_at_i)
            a = field.unsqueeze(x_at_i)

            # both right-hand sides read the pre-step column
            new_chol_from_k = (field.conj(l) * chol_from_k + field.conj(a) * x_from_k) / r
            new_x_from_k = (l * x_from_k - a * chol_from_k) / r

            chol[..., k:, curr_i] = new_chol_from_k
            update_vector[..., k:] = new_x_from_k

        chol[..., curr_i, curr_i] = new_diag

    def cholesky_update(self, chol: Any, update_vector: Any) -> Any:
        r"""
        Performs the rank-1 update of a (batch of) Cholesky factor(s) in place.

        Computes $L'$ such that:
        $$ L' L'^H = L L^H + x x^H $$

        All argument checks run before the first write, so a rejected call leaves
        `chol` and `update_vector` untouched. A `NumericalDegeneracyError` aborts
        the sweep at the failing column and leaves the preceding columns updated.

        Args:
            chol (Any): Lower triangular factor $L$ with nonzero diagonal.
                Shape: $[..., N, N]$. Overwritten with $L'$.
            update_vector (Any): The vector $x$. Shape: $[..., N]$, same dtype
                as `chol`. Overwritten with scratch values.

        Returns:
            Any: `chol`, holding $L'$ with a real positive diagonal.
        """
        dim = self.validate(chol, update_vector)
        for i in range(dim):
            self.calculate_new_column(i, chol, update_vector)
        return chol
