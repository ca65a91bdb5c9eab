from typing import Optional

import torch
from torch import Tensor

from rank_one_update.config import UpdateConfig
from rank_one_update.errors import InvalidArgumentError
from rank_one_update.ldl_update.ldl_update_base import LDLUpdateBase
from rank_one_update.scalar_field.torch_field import TorchField
from rank_one_update.utils.device import same_device


class LDLUpdateTorch(LDLUpdateBase):
    """
    PyTorch implementation of the in-place rank-1 $LDL^H$ update.

    Works on a single factorization or on a batch sharing the leading
    dimensions of `lower`, `diag` and `update_vector`.
    """

    field = TorchField()

    def __init__(self, device: torch.device, config: Optional[UpdateConfig] = None):
        super().__init__(config=config)
        self.device = device

    def check_provider(self, lower: Tensor, diag: Tensor, update_vector: Tensor) -> None:
        for name, tensor in (("L", lower), ("D", diag), ("x", update_vector)):
            if not isinstance(tensor, Tensor):
                raise InvalidArgumentError(
                    f"{name} must be a torch.Tensor, got {type(tensor).__name__}"
                )
            if not same_device(tensor.device, self.device):
                raise InvalidArgumentError(
                    f"Device mismatch: {name} is on {tensor.device}, but updater is on {self.device}"
                )
