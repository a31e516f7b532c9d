"""
Volatility Estimators
Close-to-close rolling volatility, Parkinson range volatility and their ratio.
All estimators are annualized with sqrt(trading days per year).
"""
import logging
import math
from typing import List, Optional

import numpy as np
import pandas as pd

from ..contracts.analytics import VolatilityMetrics
from ..contracts.config import AnalyticsConfig
from ..contracts.data import MarketData
from .alignment import right_align

logger = logging.getLogger(__name__)

TRADING_DAYS_PER_YEAR = 252
RATIO_EPSILON = 1e-10


def _empty() -> np.ndarray:
    return np.array([], dtype=float)


def rolling_volatility(log_returns, window: int,
                       trading_days: int = TRADING_DAYS_PER_YEAR) -> np.ndarray:
    """
    Annualized sample standard deviation over every contiguous window.

    Returns len(log_returns) - window + 1 values, or an empty array when
    window < 2 or there are fewer returns than the window.
    """
    returns = np.asarray(log_returns, dtype=float)
    if window < 2 or len(returns) < window:
        logger.debug(f"rolling_volatility: {len(returns)} returns, window {window} -> empty")
        return _empty()

    std = pd.Series(returns).rolling(window=window).std(ddof=1)
    return std.to_numpy()[window - 1:] * math.sqrt(trading_days)


def parkinson_volatility(highs, lows, window: int,
                         trading_days: int = TRADING_DAYS_PER_YEAR) -> np.ndarray:
    """
    Parkinson high/low range estimator.

    sqrt(mean(ln(H/L)^2) / (4 ln 2)) per window, annualized. Bars with a
    non-positive bound contribute 0 to the mean.
    """
    highs = np.asarray(highs, dtype=float)
    lows = np.asarray(lows, dtype=float)
    if len(highs) != len(lows) or window < 1 or len(highs) < window:
        logger.debug("parkinson_volatility: mismatched or short input -> empty")
        return _empty()

    valid = (highs > 0) & (lows > 0)
    with np.errstate(divide='ignore', invalid='ignore'):
        hl_log_sq = np.where(valid, np.log(np.where(valid, highs / lows, 1.0)) ** 2, 0.0)

    factor = 1.0 / (4.0 * math.log(2.0))
    avg = pd.Series(hl_log_sq).rolling(window=window).mean().to_numpy()[window - 1:]
    return np.sqrt(factor * avg) * math.sqrt(trading_days)


def volatility_ratio(short_vol, long_vol) -> np.ndarray:
    """Short / long volatility on trailing-aligned series; 1.0 where long is ~0."""
    length = min(len(short_vol), len(long_vol))
    sv = right_align(short_vol, length)
    lv = right_align(long_vol, length)
    safe = np.abs(lv) > RATIO_EPSILON
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.where(safe, sv / np.where(safe, lv, 1.0), 1.0)


def compute_sector_volatility(symbol: str, log_returns, highs, lows,
                              short_window: int, long_window: int,
                              trading_days: int = TRADING_DAYS_PER_YEAR) -> VolatilityMetrics:
    """Bundle all estimators, trimmed (oldest first) to the long-window length."""
    short_vol = rolling_volatility(log_returns, short_window, trading_days)
    long_vol = rolling_volatility(log_returns, long_window, trading_days)
    park_vol = parkinson_volatility(highs, lows, short_window, trading_days)
    vol_rat = volatility_ratio(short_vol, long_vol)

    n = len(long_vol)
    return VolatilityMetrics(
        symbol=symbol,
        short_window_vol=right_align(short_vol, n),
        long_window_vol=long_vol,
        parkinson_vol=right_align(park_vol, n),
        vol_ratio=right_align(vol_rat, n),
    )


def compute_all_sector_volatility(data: MarketData,
                                  config: Optional[AnalyticsConfig] = None) -> List[VolatilityMetrics]:
    config = config or AnalyticsConfig()
    return [
        compute_sector_volatility(
            s.symbol, s.log_returns(), s.highs, s.lows,
            config.short_vol_window, config.long_vol_window,
            config.trading_days_per_year,
        )
        for s in data.sectors
    ]
