"""
Feature Vector Schema
Ordered, named feature slots of one model input row.

Layout (default max_sectors=11, width 26):
    0-10   sector short-window volatility, in sector order
    11-21  sector log return, same order
    22     average cross-sector correlation
    23     10Y - 2Y spread
    24     30Y - 3M curve slope
    25     benchmark short-window volatility

Sectors beyond those supplied are zero-padded; any group switched off in
FeatureFlags keeps its slots and is zero-filled, so the width never changes.
"""
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

from ..contracts.config import FeatureFlags

SECTOR_VOLATILITY = 'sector_volatility'
SECTOR_RETURNS = 'sector_returns'
CROSS_CORRELATION = 'cross_correlation'
BOND_CURVE = 'bond_curve'
BENCHMARK_VOLATILITY = 'benchmark_volatility'

GROUPS = (SECTOR_VOLATILITY, SECTOR_RETURNS, CROSS_CORRELATION, BOND_CURVE, BENCHMARK_VOLATILITY)


class FeatureSlot(NamedTuple):
    name: str
    group: str


class FeatureSchema:
    """Explicit column layout with a zero-padding policy for missing sectors."""

    def __init__(self, max_sectors: int = 11):
        if max_sectors < 1:
            raise ValueError("max_sectors must be >= 1")
        self.max_sectors = max_sectors
        self.slots: List[FeatureSlot] = (
            [FeatureSlot(f"sector_vol_{i}", SECTOR_VOLATILITY) for i in range(max_sectors)]
            + [FeatureSlot(f"sector_ret_{i}", SECTOR_RETURNS) for i in range(max_sectors)]
            + [
                FeatureSlot("avg_cross_correlation", CROSS_CORRELATION),
                FeatureSlot("spread_10y_2y", BOND_CURVE),
                FeatureSlot("curve_slope_30y_3m", BOND_CURVE),
                FeatureSlot("benchmark_vol", BENCHMARK_VOLATILITY),
            ]
        )

    @property
    def width(self) -> int:
        return len(self.slots)

    @property
    def names(self) -> List[str]:
        return [s.name for s in self.slots]

    def index(self, name: str) -> int:
        return self.names.index(name)

    def mask(self, flags: Optional[FeatureFlags] = None) -> np.ndarray:
        """1.0 for active slots, 0.0 for slots of disabled groups."""
        flags = flags or FeatureFlags()
        return np.array([1.0 if getattr(flags, s.group) else 0.0 for s in self.slots])

    def build_table(self, sector_vols: Sequence[np.ndarray], sector_returns: Sequence[np.ndarray],
                    avg_correlation: float, spread: np.ndarray, slope: np.ndarray,
                    benchmark_vol: np.ndarray, flags: Optional[FeatureFlags] = None) -> np.ndarray:
        """
        One row per time step, shape [T, width].

        All series must already be trailing-aligned to the same length T.
        """
        n_sectors = len(sector_vols)
        if n_sectors > self.max_sectors or len(sector_returns) != n_sectors:
            raise ValueError(
                f"Expected matching vol/return series for at most {self.max_sectors} sectors, "
                f"got {n_sectors} and {len(sector_returns)}"
            )
        length = len(spread)
        table = np.zeros((length, self.width), dtype=float)

        for k in range(n_sectors):
            table[:, k] = sector_vols[k]
            table[:, self.max_sectors + k] = sector_returns[k]

        base = 2 * self.max_sectors
        table[:, base] = avg_correlation
        table[:, base + 1] = spread
        table[:, base + 2] = slope
        table[:, base + 3] = benchmark_vol

        return table * self.mask(flags)

    def validate_matrix(self, matrix: np.ndarray, lookback: Optional[int] = None) -> None:
        if matrix.ndim != 2 or matrix.shape[1] != self.width:
            raise ValueError(f"Feature matrix shape {matrix.shape} does not match width {self.width}")
        if lookback is not None and matrix.shape[0] != lookback:
            raise ValueError(f"Feature matrix has {matrix.shape[0]} rows, expected {lookback}")


DEFAULT_SCHEMA = FeatureSchema()
