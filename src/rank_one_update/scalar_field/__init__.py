from rank_one_update.scalar_field.base import ScalarField
from rank_one_update.scalar_field.numpy_field import NumpyField
from rank_one_update.scalar_field.torch_field import TorchField

__all__ = ["ScalarField", "NumpyField", "TorchField"]
