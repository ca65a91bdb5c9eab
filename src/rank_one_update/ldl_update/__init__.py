from rank_one_update.ldl_update.ldl_update_base import LDLUpdateBase
from rank_one_update.ldl_update.variants.ldl_update_numpy import LDLUpdateNumpy
from rank_one_update.ldl_update.variants.ldl_update_torch import LDLUpdateTorch

__all__ = ["LDLUpdateBase", "LDLUpdateNumpy", "LDLUpdateTorch"]
