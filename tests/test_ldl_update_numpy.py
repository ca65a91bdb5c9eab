import numpy as np
import pytest
import scipy.linalg

from rank_one_update.config import UpdateConfig
from rank_one_update.errors import NumericalDegeneracyError
from rank_one_update.ldl_update.variants.ldl_update_numpy import LDLUpdateNumpy
from rank_one_update.utils.reconstruct import reconstruct_ldl


def random_ldl(dim: int, complex_valued: bool, rng: np.random.Generator):
    M = rng.standard_normal((dim, dim))
    if complex_valued:
        M = M + 1j * rng.standard_normal((dim, dim))
    A = M @ M.conj().T / dim + np.eye(dim)
    chol = scipy.linalg.cholesky(A, lower=True)
    chol_diag = np.diagonal(chol)
    return A, chol / chol_diag[None, :], np.abs(chol_diag) ** 2


@pytest.mark.parametrize("dim", [1, 3, 8, 50, 100])
@pytest.mark.parametrize("complex_valued", [False, True])
def test_ldl_update_numpy_reconstructs_updated_matrix(dim, complex_valued):
    rng = np.random.default_rng(100 + dim)
    A, lower, diag = random_ldl(dim, complex_valued, rng)
    x = rng.standard_normal(dim) + (1j * rng.standard_normal(dim) if complex_valued else 0)
    A_new = A + np.outer(x, x.conj())

    LDLUpdateNumpy().ldl_update(lower, diag, x.copy())

    assert np.max(np.abs(reconstruct_ldl(lower, diag) - A_new)) < 1e-10 * dim
    assert np.all(diag > 0)
    assert np.all(np.triu(lower, k=1) == 0)


def test_ldl_update_numpy_with_fixed_data():
    lower = np.array([[1.0, 0.0], [0.5, 1.0]])
    diag = np.array([4.0, 9.0])

    LDLUpdateNumpy().ldl_update(lower, diag, np.array([1.0, 1.0]))

    np.testing.assert_allclose(lower, [[1.0, 0.0], [0.6, 1.0]])
    np.testing.assert_allclose(diag, [5.0, 9.2])


def test_ldl_update_numpy_diagonal_in_matrix_form():
    rng = np.random.default_rng(7)
    A, lower, diag_entries = random_ldl(4, False, rng)
    diag = np.diag(diag_entries)
    x = rng.standard_normal(4)
    A_new = A + np.outer(x, x)

    LDLUpdateNumpy().ldl_update(lower, diag, x)

    np.testing.assert_allclose(diag, np.diag(np.diagonal(diag)))
    np.testing.assert_allclose(reconstruct_ldl(lower, diag), A_new, atol=1e-12)


def test_ldl_update_numpy_single_entry():
    lower = np.ones((1, 1))
    diag = np.array([2.0])

    LDLUpdateNumpy().ldl_update(lower, diag, np.array([3.0]))

    assert diag[0] == pytest.approx(11.0)


def test_ldl_update_numpy_accepts_nan_on_stored_diagonal():
    lower = np.array([[np.nan, 0.0], [0.5, np.nan]])
    diag = np.array([4.0, 9.0])

    LDLUpdateNumpy().ldl_update(lower, diag, np.array([1.0, 1.0]))

    assert lower[1, 0] == pytest.approx(0.6)
    assert np.all(np.isnan(np.diagonal(lower)))
    np.testing.assert_allclose(diag, [5.0, 9.2])


def test_ldl_update_numpy_degeneracy_leaves_partial_update():
    lower = np.eye(3)
    diag = np.ones(3)
    x = np.array([1.0, np.nan, 1.0])
    updater = LDLUpdateNumpy(config=UpdateConfig(check_finite=False))

    with pytest.raises(NumericalDegeneracyError) as exc_info:
        updater.ldl_update(lower, diag, x)

    assert exc_info.value.column == 1
    assert diag[0] == 2.0
    assert diag[2] == 1.0
    assert lower[2, 0] == pytest.approx(0.5)


def test_ldl_update_numpy_overflowing_pivot_is_degenerate():
    lower = np.ones((1, 1))
    diag = np.array([1.5e308])

    with pytest.raises(NumericalDegeneracyError) as exc_info:
        LDLUpdateNumpy().ldl_update(lower, diag, np.array([1.5e308]))

    assert exc_info.value.column == 0
    assert diag[0] == 1.5e308
