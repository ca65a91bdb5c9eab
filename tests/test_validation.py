import numpy as np
import pytest
import torch

from rank_one_update.cholesky_update.variants.cholesky_update_numpy import (
    CholeskyUpdateNumpy,
)
from rank_one_update.cholesky_update.variants.cholesky_update_torch import (
    CholeskyUpdateTorch,
)
from rank_one_update.config import UpdateConfig
from rank_one_update.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    RankOneUpdateError,
)
from rank_one_update.ldl_update.variants.ldl_update_numpy import LDLUpdateNumpy
from rank_one_update.ldl_update.variants.ldl_update_torch import LDLUpdateTorch
from rank_one_update.utils.device import get_device

device = get_device()


def test_cholesky_dimension_mismatch_leaves_arguments_unchanged():
    chol = torch.tensor([[2.0, 0.0], [1.0, 3.0]], dtype=torch.float64, device=device)
    x = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64, device=device)
    chol_before, x_before = chol.clone(), x.clone()

    with pytest.raises(DimensionMismatchError):
        CholeskyUpdateTorch(device=device).cholesky_update(chol, x)

    assert torch.equal(chol, chol_before)
    assert torch.equal(x, x_before)


@pytest.mark.parametrize(
    "chol_shape, x_shape",
    [
        ((2, 3), (3,)),  # rectangular factor
        ((3,), (3,)),  # not a matrix
        ((2, 2), ()),  # scalar update vector
        ((2, 3, 3), (3, 3)),  # batch dimensions differ
        ((3, 3), (2, 3)),  # batched vector, single factor
    ],
)
def test_cholesky_rejects_inconsistent_shapes(chol_shape, x_shape):
    chol = np.zeros(chol_shape)
    x = np.zeros(x_shape)
    with pytest.raises(DimensionMismatchError):
        CholeskyUpdateNumpy().cholesky_update(chol, x)


def test_cholesky_rejects_empty_factorization():
    with pytest.raises(InvalidArgumentError):
        CholeskyUpdateNumpy().cholesky_update(np.zeros((0, 0)), np.zeros(0))


def test_cholesky_rejects_upper_entries():
    chol = np.array([[2.0, 1.0], [1.0, 3.0]])
    x = np.ones(2)
    with pytest.raises(InvalidArgumentError):
        CholeskyUpdateNumpy().cholesky_update(chol, x)
    np.testing.assert_array_equal(x, np.ones(2))


def test_cholesky_rejects_zero_diagonal():
    chol = np.array([[2.0, 0.0], [1.0, 0.0]])
    with pytest.raises(InvalidArgumentError):
        CholeskyUpdateNumpy().cholesky_update(chol, np.ones(2))


def test_cholesky_structure_check_can_be_disabled():
    """With structure checks off the strictly-upper triangle is simply never touched."""
    chol = np.array([[2.0, 5.0], [1.0, 3.0]])
    config = UpdateConfig(check_structure=False)

    CholeskyUpdateNumpy(config=config).cholesky_update(chol, np.array([1.0, 1.0]))

    assert chol[0, 1] == 5.0
    assert chol[0, 0] == pytest.approx(np.sqrt(5.0))


def test_cholesky_rejects_non_finite_input():
    chol = np.eye(3)
    x = np.array([1.0, np.inf, 0.0])
    with pytest.raises(InvalidArgumentError):
        CholeskyUpdateNumpy().cholesky_update(chol, x)
    np.testing.assert_array_equal(chol, np.eye(3))


@pytest.mark.parametrize(
    "chol_dtype, x_dtype",
    [
        (torch.int64, torch.int64),
        (torch.float64, torch.float32),
        (torch.complex128, torch.float64),
    ],
)
def test_cholesky_rejects_bad_dtypes(chol_dtype, x_dtype):
    chol = torch.eye(2, dtype=chol_dtype, device=device)
    x = torch.ones(2, dtype=x_dtype, device=device)
    with pytest.raises(InvalidArgumentError):
        CholeskyUpdateTorch(device=device).cholesky_update(chol, x)


def test_cholesky_rejects_device_mismatch():
    updater = CholeskyUpdateTorch(device=torch.device("meta"))
    with pytest.raises(InvalidArgumentError, match="Device mismatch"):
        updater.cholesky_update(torch.eye(2), torch.ones(2))


def test_cholesky_rejects_foreign_array_types():
    with pytest.raises(InvalidArgumentError):
        CholeskyUpdateTorch(device=device).cholesky_update(np.eye(2), np.ones(2))
    with pytest.raises(InvalidArgumentError):
        CholeskyUpdateNumpy().cholesky_update(torch.eye(2), torch.ones(2))


@pytest.mark.parametrize(
    "lower_shape, diag_shape, x_shape",
    [
        ((3, 3), (2,), (3,)),
        ((3, 3), (3,), (2,)),
        ((3, 3), (2, 2), (3,)),
        ((2, 3, 3), (3,), (2, 3)),
        ((2, 3, 3), (4, 3), (2, 3)),
    ],
)
def test_ldl_rejects_inconsistent_shapes(lower_shape, diag_shape, x_shape):
    lower = np.zeros(lower_shape)
    diag = np.ones(diag_shape)
    x = np.zeros(x_shape)
    with pytest.raises(DimensionMismatchError):
        LDLUpdateNumpy().ldl_update(lower, diag, x)
    np.testing.assert_array_equal(diag, np.ones(diag_shape))


def test_ldl_rejects_upper_entries():
    lower = np.array([[1.0, 2.0], [0.0, 1.0]])
    diag = np.ones(2)
    x = np.ones(2)

    with pytest.raises(InvalidArgumentError):
        LDLUpdateNumpy().ldl_update(lower, diag, x)

    np.testing.assert_array_equal(lower, [[1.0, 2.0], [0.0, 1.0]])
    np.testing.assert_array_equal(diag, np.ones(2))
    np.testing.assert_array_equal(x, np.ones(2))


@pytest.mark.parametrize("bad", ["L", "D", "x"])
def test_ldl_rejects_non_finite_input(bad):
    lower = torch.tensor([[1.0, 0.0], [0.5, 1.0]], dtype=torch.float64, device=device)
    diag = torch.tensor([4.0, 9.0], dtype=torch.float64, device=device)
    x = torch.ones(2, dtype=torch.float64, device=device)
    {"L": lower[1], "D": diag, "x": x}[bad][0] = float("nan")
    before = [lower.clone(), diag.clone(), x.clone()]

    with pytest.raises(InvalidArgumentError, match="non-finite"):
        LDLUpdateTorch(device=device).ldl_update(lower, diag, x)

    for tensor, expected in zip((lower, diag, x), before):
        assert torch.equal(tensor.isnan(), expected.isnan())
        assert torch.equal(tensor.nan_to_num(), expected.nan_to_num())


def test_ldl_rejects_empty_factorization():
    with pytest.raises(InvalidArgumentError):
        LDLUpdateNumpy().ldl_update(np.zeros((0, 0)), np.zeros(0), np.zeros(0))


def test_ldl_rejects_non_diagonal_matrix_form():
    diag = np.array([[1.0, 0.5], [0.0, 1.0]])
    with pytest.raises(InvalidArgumentError):
        LDLUpdateNumpy().ldl_update(np.eye(2), diag, np.ones(2))


def test_ldl_rejects_diagonal_precision_mismatch():
    lower = torch.eye(2, dtype=torch.float64, device=device)
    diag = torch.ones(2, dtype=torch.float32, device=device)
    x = torch.ones(2, dtype=torch.float64, device=device)
    with pytest.raises(InvalidArgumentError):
        LDLUpdateTorch(device=device).ldl_update(lower, diag, x)


def test_errors_share_a_common_base():
    assert issubclass(DimensionMismatchError, RankOneUpdateError)
    assert issubclass(DimensionMismatchError, ValueError)
    assert issubclass(InvalidArgumentError, ValueError)


def test_update_config_is_frozen():
    config = UpdateConfig()
    with pytest.raises(Exception):
        config.check_finite = False
