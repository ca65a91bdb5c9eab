from typing import Any, Optional


class RankOneUpdateError(Exception):
    """Base class for every error raised by the rank-one updaters."""


class DimensionMismatchError(RankOneUpdateError, ValueError):
    """Raised when the shapes of the factors and the update vector are inconsistent."""


class InvalidArgumentError(RankOneUpdateError, ValueError):
    """Raised when an argument is malformed (empty, wrong dtype, wrong structure, ...)."""


class NumericalDegeneracyError(RankOneUpdateError, ArithmeticError):
    """
    Raised when a pivot is non-positive or non-finite during the column sweep.

    The columns preceding `column` have already been rewritten when this error
    is raised, so the factor is left in a partially updated state. Callers that
    need atomicity should run the update on a copy.

    Attributes:
        column (int): Zero-based index of the column whose pivot degenerated.
        pivot (Any): The offending pivot value(s), as computed by the provider.
    """

    def __init__(self, column: int, pivot: Optional[Any] = None):
        self.column = column
        self.pivot = pivot
        super().__init__(
            f"Degenerate pivot at column {column}: {pivot} "
            "(the updated matrix is not numerically positive-definite)"
        )
