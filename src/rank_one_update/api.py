from typing import Any, Optional, Tuple

from rank_one_update.config import UpdateConfig
from rank_one_update.rank_one_update_adapter import RankOneUpdateAdapter


def cholesky_rank_one_update(
    chol: Any, update_vector: Any, config: Optional[UpdateConfig] = None
) -> Any:
    r"""
    Updates a Cholesky factor in place so that $L'L'^H = LL^H + xx^H$.

    Args:
        chol (Any): Lower triangular factor $L$ (torch tensor or numpy array).
            Shape: $[..., N, N]$.
        update_vector (Any): The vector $x$, same provider and dtype as `chol`.
            Shape: $[..., N]$. Its contents are meaningless after the call.
        config (UpdateConfig, optional): Pre-update checks. Defaults to all enabled.

    Returns:
        Any: `chol`, now holding $L'$.
    """
    updater = RankOneUpdateAdapter.get_cholesky_updater(chol, config=config)
    return updater.cholesky_update(chol, update_vector)


def ldl_rank_one_update(
    lower: Any, diag: Any, update_vector: Any, config: Optional[UpdateConfig] = None
) -> Tuple[Any, Any]:
    r"""
    Updates an $LDL^H$ factorization in place so that $L'D'L'^H = LDL^H + xx^H$.

    Args:
        lower (Any): Unit lower triangular factor $L$. Shape: $[..., N, N]$.
        diag (Any): Positive diagonal $D$, as entries $[..., N]$ or matrix $[..., N, N]$.
        update_vector (Any): The vector $x$. Shape: $[..., N]$. Its contents are
            meaningless after the call.
        config (UpdateConfig, optional): Pre-update checks. Defaults to all enabled.

    Returns:
        Tuple[Any, Any]: `lower` and `diag`, now holding $L'$ and $D'$.
    """
    updater = RankOneUpdateAdapter.get_ldl_updater(lower, config=config)
    return updater.ldl_update(lower, diag, update_vector)
