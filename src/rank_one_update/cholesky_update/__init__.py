from rank_one_update.cholesky_update.cholesky_update_base import CholeskyUpdateBase
from rank_one_update.cholesky_update.variants.cholesky_update_numpy import (
    CholeskyUpdateNumpy,
)
from rank_one_update.cholesky_update.variants.cholesky_update_torch import (
    CholeskyUpdateTorch,
)

__all__ = ["CholeskyUpdateBase", "CholeskyUpdateNumpy", "CholeskyUpdateTorch"]
