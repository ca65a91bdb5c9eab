from typing import Optional

import torch
from torch import Tensor

from rank_one_update.cholesky_update.cholesky_update_base import CholeskyUpdateBase
from rank_one_update.config import UpdateConfig
from rank_one_update.errors import InvalidArgumentError
from rank_one_update.scalar_field.torch_field import TorchField
from rank_one_update.utils.device import same_device


class CholeskyUpdateTorch(CholeskyUpdateBase):
    """
    PyTorch implementation of the in-place rank-1 Cholesky update.

    Each column step is a handful of vectorized tensor operations over the
    trailing sub-column, applied to every matrix of the batch at once, on the
    device the updater was created for.
    """

    field = TorchField()

    def __init__(self, device: torch.device, config: Optional[UpdateConfig] = None):
        super().__init__(config=config)
        self.device = device

    def check_provider(self, chol: Tensor, update_vector: Tensor) -> None:
        for name, tensor in (("L", chol), ("x", update_vector)):
            if not isinstance(tensor, Tensor):
                raise InvalidArgumentError(
                    f"{name} must be a torch.Tensor, got {type(tensor).__name__}"
                )
            if not same_device(tensor.device, self.device):
                raise InvalidArgumentError(
                    f"Device mismatch: {name} is on {tensor.device}, but updater is on {self.device}"
                )
