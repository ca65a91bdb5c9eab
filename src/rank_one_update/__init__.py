from rank_one_update.api import cholesky_rank_one_update, ldl_rank_one_update
from rank_one_update.cholesky_update import (
    CholeskyUpdateBase,
    CholeskyUpdateNumpy,
    CholeskyUpdateTorch,
)
from rank_one_update.config import UpdateConfig
from rank_one_update.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    NumericalDegeneracyError,
    RankOneUpdateError,
)
from rank_one_update.ldl_update import LDLUpdateBase, LDLUpdateNumpy, LDLUpdateTorch
from rank_one_update.rank_one_update_adapter import RankOneUpdateAdapter
from rank_one_update.utils.reconstruct import reconstruct_cholesky, reconstruct_ldl

__all__ = [
    "cholesky_rank_one_update",
    "ldl_rank_one_update",
    "CholeskyUpdateBase",
    "CholeskyUpdateNumpy",
    "CholeskyUpdateTorch",
    "LDLUpdateBase",
    "LDLUpdateNumpy",
    "LDLUpdateTorch",
    "RankOneUpdateAdapter",
    "UpdateConfig",
    "RankOneUpdateError",
    "DimensionMismatchError",
    "InvalidArgumentError",
    "NumericalDegeneracyError",
    "reconstruct_cholesky",
    "reconstruct_ldl",
]
