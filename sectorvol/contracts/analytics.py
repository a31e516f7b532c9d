"""
Analytics Contracts
"""
from datetime import date
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, field_validator


class VolatilityMetrics(BaseModel):
    """Per-sector volatility series, trailing-aligned to the long window"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    symbol: str
    short_window_vol: np.ndarray
    long_window_vol: np.ndarray
    parkinson_vol: np.ndarray
    vol_ratio: np.ndarray

    def latest(self) -> Tuple[Optional[float], Optional[float], Optional[float]]:
        """Most recent (short, long, ratio); None where a series is empty."""
        def last(v):
            return float(v[-1]) if len(v) else None
        return last(self.short_window_vol), last(self.long_window_vol), last(self.vol_ratio)


class CorrelationMatrix(BaseModel):
    """Symmetric pairwise correlation matrix with unit diagonal"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    symbols: List[str]
    matrix: np.ndarray

    @field_validator('matrix')
    @classmethod
    def square(cls, v, info):
        symbols = info.data.get('symbols', [])
        n = len(symbols)
        if v.shape != (n, n):
            raise ValueError(f'matrix shape {v.shape} does not match {n} symbols')
        return v

    def get(self, a: str, b: str) -> float:
        i = self.symbols.index(a)
        j = self.symbols.index(b)
        return float(self.matrix[i, j])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.matrix, index=self.symbols, columns=self.symbols)


class BondSpread(BaseModel):
    """Term spread and curve slope for one curve observation"""
    model_config = ConfigDict(frozen=True)

    date: date
    spread_10y_2y: float
    curve_slope: float
