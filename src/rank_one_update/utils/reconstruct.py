from typing import Any

from rank_one_update.rank_one_update_adapter import RankOneUpdateAdapter


def reconstruct_cholesky(chol: Any) -> Any:
    r"""
    Computes $LL^H$ from the lower triangle of `chol`.

    Args:
        chol (Any): Cholesky factor(s). Shape: $[..., N, N]$.

    Returns:
        Any: The Hermitian matrix (or batch) the factor represents.
    """
    field = RankOneUpdateAdapter.get_scalar_field(chol)
    lower = field.tril(chol)
    return lower @ field.conj_transpose(lower)


def reconstruct_ldl(lower: Any, diag: Any) -> Any:
    r"""
    Computes $LDL^H$, taking the diagonal of $L$ as 1 whatever is stored there.

    Args:
        lower (Any): Unit lower triangular factor(s). Shape: $[..., N, N]$.
        diag (Any): Diagonal entries $[..., N]$ or diagonal matrix $[..., N, N]$.

    Returns:
        Any: The Hermitian matrix (or batch) the factorization represents.
    """
    field = RankOneUpdateAdapter.get_scalar_field(lower)
    unit_lower = field.tril(lower, offset=-1) + field.eye_like(lower)
    diag_entries = field.diagonal(diag) if diag.ndim == lower.ndim else diag
    # scales column j of L by D_j
    scaled = unit_lower * diag_entries[..., None, :]
    return scaled @ field.conj_transpose(unit_lower)
