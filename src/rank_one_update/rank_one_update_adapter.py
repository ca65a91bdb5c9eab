from typing import Any, Optional

import torch
from loguru import logger

from rank_one_update.cholesky_update.cholesky_update_base import CholeskyUpdateBase
from rank_one_update.cholesky_update.variants.cholesky_update_numpy import (
    CholeskyUpdateNumpy,
)
from rank_one_update.cholesky_update.variants.cholesky_update_torch import (
    CholeskyUpdateTorch,
)
from rank_one_update.config import UpdateConfig
from rank_one_update.errors import InvalidArgumentError
from rank_one_update.ldl_update.ldl_update_base import LDLUpdateBase
from rank_one_update.ldl_update.variants.ldl_update_numpy import LDLUpdateNumpy
from rank_one_update.ldl_update.variants.ldl_update_torch import LDLUpdateTorch
from rank_one_update.scalar_field.base import ScalarField
from rank_one_update.scalar_field.numpy_field import NumpyField
from rank_one_update.scalar_field.torch_field import TorchField


class RankOneUpdateAdapter:
    """
    An adapter class selecting the rank-1 updater matching the caller's arrays.

    Torch tensors are handled by the PyTorch variants, created for the device
    holding the tensor; numpy arrays by the NumPy variants. Any other array type
    is rejected.
    """

    _fields = (TorchField(), NumpyField())

    @classmethod
    def get_scalar_field(cls, array: Any) -> ScalarField:
        """
        Retrieves the scalar field of the provider `array` belongs to.

        Raises:
            InvalidArgumentError: If `array` is neither a torch tensor nor a numpy array.
        """
        for field in cls._fields:
            if field.is_array(array):
                return field
        raise InvalidArgumentError(
            f"Unsupported array type {type(array).__name__}, expected torch.Tensor or numpy.ndarray"
        )

    @classmethod
    def get_cholesky_updater(
        cls, chol: Any, config: Optional[UpdateConfig] = None
    ) -> CholeskyUpdateBase:
        """
        Retrieves a Cholesky updater able to mutate `chol` in place.

        Returns:
            CholeskyUpdateBase: `CholeskyUpdateTorch` on the device of `chol`
                for tensors, `CholeskyUpdateNumpy` for numpy arrays.
        """
        field = cls.get_scalar_field(chol)
        if isinstance(chol, torch.Tensor):
            updater: CholeskyUpdateBase = CholeskyUpdateTorch(
                device=chol.device, config=config
            )
        else:
            updater = CholeskyUpdateNumpy(config=config)
        logger.debug(f"Selected {type(updater).__name__} for {field.name} arrays")
        return updater

    @classmethod
    def get_ldl_updater(
        cls, lower: Any, config: Optional[UpdateConfig] = None
    ) -> LDLUpdateBase:
        """
        Retrieves an LDL updater able to mutate `lower` in place.

        Returns:
            LDLUpdateBase: `LDLUpdateTorch` on the device of `lower` for
                tensors, `LDLUpdateNumpy` for numpy arrays.
        """
        field = cls.get_scalar_field(lower)
        if isinstance(lower, torch.Tensor):
            updater: LDLUpdateBase = LDLUpdateTorch(
                device=lower.device, config=config
            )
        else:
            updater = LDLUpdateNumpy(config=config)
        logger.debug(f"Selected {type(updater).__name__} for {field.name} arrays")
        return updater
