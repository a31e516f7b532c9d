"""
Cross-Sector Correlation
Pairwise Pearson correlation over trailing-aligned return series.
"""
import logging
from typing import List, Sequence

import numpy as np

from ..contracts.analytics import CorrelationMatrix
from .alignment import right_align_all

logger = logging.getLogger(__name__)

VARIANCE_EPSILON = 1e-15


def pearson_correlation(a, b) -> float:
    """Pearson coefficient over the first min(len(a), len(b)) points; 0.0 when undefined."""
    n = min(len(a), len(b))
    if n < 2:
        return 0.0
    x = np.asarray(a[:n], dtype=float)
    y = np.asarray(b[:n], dtype=float)
    dx = x - x.mean()
    dy = y - y.mean()

    denom = np.sqrt(np.dot(dx, dx) * np.dot(dy, dy))
    if not np.isfinite(denom) or denom < VARIANCE_EPSILON:
        return 0.0
    return float(np.clip(np.dot(dx, dy) / denom, -1.0, 1.0))


def compute_correlation_matrix(symbols: List[str], returns: Sequence[Sequence[float]]) -> CorrelationMatrix:
    """
    Symmetric correlation matrix of `returns`, ordered like `symbols`.

    Series are right-aligned to the shortest one first. With fewer than two
    aligned points the off-diagonal entries are all 0.0.
    """
    n = len(symbols)
    if len(returns) != n:
        raise ValueError(f"{len(returns)} return series for {n} symbols")

    matrix = np.eye(n, dtype=float)
    aligned, min_len = right_align_all(returns)
    if min_len < 2:
        logger.debug(f"Correlation matrix: only {min_len} aligned points, returning neutral matrix")
        return CorrelationMatrix(symbols=list(symbols), matrix=matrix)

    for i in range(n):
        for j in range(i + 1, n):
            corr = pearson_correlation(aligned[i], aligned[j])
            matrix[i, j] = corr
            matrix[j, i] = corr

    return CorrelationMatrix(symbols=list(symbols), matrix=matrix)


def average_cross_correlation(matrix: CorrelationMatrix) -> float:
    """Mean of the strict upper triangle; 0.0 below two symbols."""
    n = len(matrix.symbols)
    if n < 2:
        return 0.0
    upper = matrix.matrix[np.triu_indices(n, k=1)]
    return float(upper.mean())
