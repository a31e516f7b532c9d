"""
Volatility Dataset
Fuses sector returns/volatility, cross-sector correlation and treasury curve
scalars into trailing-aligned sliding windows for the forecasting model.
"""
import logging
from typing import List, Optional, Sequence

import numpy as np
import torch

from ..analysis.alignment import right_align, right_align_all, right_align_padded
from ..analysis.bond_spreads import compute_term_spreads
from ..analysis.cross_sector import average_cross_correlation, compute_correlation_matrix
from ..analysis.volatility import rolling_volatility
from ..contracts.config import AnalyticsConfig, FeatureFlags
from ..contracts.data import MarketData
from ..contracts.pipeline import Sample
from ..features.schema import DEFAULT_SCHEMA, FeatureSchema

logger = logging.getLogger(__name__)


class VolDataset(torch.utils.data.Dataset):
    """
    Ordered, read-only sequence of Samples.

    Items are (X, y) tensors: X is [lookback, width] float32, y is [1].
    Samples keep chronological order; shuffling is left to the DataLoader.
    """

    def __init__(self, samples: Sequence[Sample], symbols: Sequence[str] = (),
                 schema: FeatureSchema = DEFAULT_SCHEMA):
        self.samples = tuple(samples)
        self.symbols = list(symbols)
        self.schema = schema

    def __len__(self):
        return len(self.samples)

    def __getitem__(self, idx):
        sample = self.samples[idx]
        X = torch.from_numpy(np.asarray(sample.features, dtype=np.float32))
        y = torch.tensor([sample.target], dtype=torch.float32)
        return X, y

    def subset(self, start: int, stop: int) -> 'VolDataset':
        """Contiguous slice that keeps symbols and schema."""
        return VolDataset(self.samples[start:stop], self.symbols, self.schema)

    def last(self) -> Optional[Sample]:
        return self.samples[-1] if self.samples else None

    @property
    def lookback(self) -> int:
        return self.samples[0].lookback if self.samples else 0


def _empty(symbols: Sequence[str], schema: FeatureSchema, reason: str) -> VolDataset:
    logger.warning(f"Empty dataset: {reason}")
    return VolDataset([], symbols, schema)


def build_dataset(data: MarketData, lookback: int = 60, forward: int = 5,
                  analytics: Optional[AnalyticsConfig] = None,
                  flags: Optional[FeatureFlags] = None,
                  schema: FeatureSchema = DEFAULT_SCHEMA) -> VolDataset:
    """
    Build sliding-window samples from market data.

    Window t covers aligned steps [t, t + lookback); its target is the mean
    sector volatility over [t + lookback, t + lookback + forward). Windows
    are emitted for t in [0, vol_len - forward - lookback). Insufficient
    history yields an empty dataset, never an exception.
    """
    analytics = analytics or AnalyticsConfig()
    short_window = analytics.short_vol_window
    trading_days = analytics.trading_days_per_year

    sectors = list(data.sectors)
    if len(sectors) > schema.max_sectors:
        logger.warning(f"{len(sectors)} sectors supplied, using the first {schema.max_sectors}")
        sectors = sectors[:schema.max_sectors]
    symbols = [s.symbol for s in sectors]

    if not sectors:
        return _empty(symbols, schema, "no sector series")

    # 1. Returns, aligned to the shortest history
    aligned_returns, min_len = right_align_all([s.log_returns() for s in sectors])
    required = lookback + forward + analytics.long_vol_window
    if min_len < required:
        return _empty(symbols, schema, f"{min_len} aligned returns < {required} required")

    # 2. Short-window volatility per sector
    sector_vols = [rolling_volatility(r, short_window, trading_days) for r in aligned_returns]
    vol_len = min(len(v) for v in sector_vols)
    if vol_len < lookback + forward:
        return _empty(symbols, schema, f"{vol_len} volatility points < {lookback + forward} required")

    # 3. One correlation scalar for the whole period
    corr_matrix = compute_correlation_matrix(symbols, aligned_returns)
    avg_corr = average_cross_correlation(corr_matrix)

    # 4. Curve and benchmark series, zero-filled where history is missing
    spreads = sorted(compute_term_spreads(data.treasury_rates), key=lambda s: s.date)
    spread_vals = right_align_padded([s.spread_10y_2y for s in spreads], vol_len)
    slope_vals = right_align_padded([s.curve_slope for s in spreads], vol_len)

    if data.benchmark is not None:
        bench = rolling_volatility(data.benchmark.log_returns(), short_window, trading_days)
        bench_vals = right_align_padded(bench, vol_len)
    else:
        bench_vals = np.zeros(vol_len)

    aligned_vols = [right_align(v, vol_len) for v in sector_vols]
    aligned_rets = [right_align(r, vol_len) for r in aligned_returns]

    table = schema.build_table(
        aligned_vols, aligned_rets, avg_corr,
        spread_vals, slope_vals, bench_vals, flags,
    )
    vol_matrix = np.vstack(aligned_vols)

    # 5-7. Windows in increasing t
    samples: List[Sample] = []
    for start in range(vol_len - forward - lookback):
        end = start + lookback
        horizon = vol_matrix[:, end:min(end + forward, vol_len)]
        target = float(horizon.mean()) if horizon.size else 0.0
        samples.append(Sample(features=table[start:end], target=target))

    logger.info(
        f"Built dataset: {len(samples)} samples x {lookback} steps x {schema.width} features "
        f"from {len(symbols)} sectors (vol_len={vol_len}, avg_corr={avg_corr:.4f})"
    )
    return VolDataset(samples, symbols, schema)
