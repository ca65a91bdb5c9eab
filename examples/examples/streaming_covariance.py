import torch
from loguru import logger

from rank_one_update import (
    cholesky_rank_one_update,
    ldl_rank_one_update,
    reconstruct_cholesky,
    reconstruct_ldl,
)
from rank_one_update.utils.device import get_device

device = get_device(verbose=True)
data_dim = 8
n_points = 200

torch.manual_seed(0)
data = torch.randn(n_points, data_dim, dtype=torch.float64, device=device)

# prior scatter matrix A = I, factorized once
chol = torch.eye(data_dim, dtype=torch.float64, device=device)
lower = torch.eye(data_dim, dtype=torch.float64, device=device)
diag = torch.ones(data_dim, dtype=torch.float64, device=device)

# fold in one observation at a time: A <- A + x x^T
for point in data:
    cholesky_rank_one_update(chol, point.clone())
    ldl_rank_one_update(lower, diag, point.clone())

scatter = torch.eye(data_dim, dtype=torch.float64, device=device) + data.T @ data
chol_error = (reconstruct_cholesky(chol) - scatter).abs().max().item()
ldl_error = (reconstruct_ldl(lower, diag) - scatter).abs().max().item()
logger.info(f"Max abs error of L L^T: {chol_error:.3e}")
logger.info(f"Max abs error of L D L^T: {ldl_error:.3e}")
