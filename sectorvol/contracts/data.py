"""
Market Data Contracts
"""
from datetime import date
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Canonical presentation order of the treasury curve: (label, field)
TENORS: Tuple[Tuple[str, str], ...] = (
    ("1M", "month1"),
    ("2M", "month2"),
    ("3M", "month3"),
    ("6M", "month6"),
    ("1Y", "year1"),
    ("2Y", "year2"),
    ("3Y", "year3"),
    ("5Y", "year5"),
    ("7Y", "year7"),
    ("10Y", "year10"),
    ("20Y", "year20"),
    ("30Y", "year30"),
)


class Bar(BaseModel):
    """Single daily OHLCV bar - boundary contract"""
    model_config = ConfigDict(frozen=True)

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(ge=0)

    @model_validator(mode='after')
    def high_gte_low(self):
        if self.high < self.low:
            raise ValueError('high must be >= low')
        return self


class InstrumentSeries(BaseModel):
    """Daily bar history of one instrument, ascending by date"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str
    display_name: str = Field(default="", alias="name")
    bars: List[Bar] = Field(default_factory=list)

    @field_validator('bars')
    @classmethod
    def bars_ascending(cls, v):
        for prev, cur in zip(v, v[1:]):
            if cur.date <= prev.date:
                raise ValueError(f'bars must be strictly ascending by date ({prev.date} -> {cur.date})')
        return v

    @property
    def closes(self) -> np.ndarray:
        return np.array([b.close for b in self.bars], dtype=float)

    @property
    def highs(self) -> np.ndarray:
        return np.array([b.high for b in self.bars], dtype=float)

    @property
    def lows(self) -> np.ndarray:
        return np.array([b.low for b in self.bars], dtype=float)

    def log_returns(self) -> np.ndarray:
        """ln(close_t / close_{t-1}); length is len(bars) - 1 (empty below two bars)."""
        closes = self.closes
        if len(closes) < 2:
            return np.array([], dtype=float)
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.log(closes[1:] / closes[:-1])

    def to_frame(self) -> pd.DataFrame:
        """Bars as a DataFrame indexed by date."""
        df = pd.DataFrame(
            [b.model_dump() for b in self.bars],
            columns=['date', 'open', 'high', 'low', 'close', 'volume'],
        )
        return df.set_index('date')


class YieldCurvePoint(BaseModel):
    """Treasury curve observation; absent tenors stay None"""
    model_config = ConfigDict(frozen=True)

    date: date
    month1: Optional[float] = None
    month2: Optional[float] = None
    month3: Optional[float] = None
    month6: Optional[float] = None
    year1: Optional[float] = None
    year2: Optional[float] = None
    year3: Optional[float] = None
    year5: Optional[float] = None
    year7: Optional[float] = None
    year10: Optional[float] = None
    year20: Optional[float] = None
    year30: Optional[float] = None

    def rate(self, tenor: str) -> Optional[float]:
        """Rate for a maturity label such as '10Y'; None when unavailable."""
        for label, field in TENORS:
            if label == tenor:
                return getattr(self, field)
        raise KeyError(f"Unknown tenor: {tenor}")


class MarketData(BaseModel):
    """Everything one analysis pass consumes"""
    model_config = ConfigDict(frozen=True)

    sectors: List[InstrumentSeries] = Field(default_factory=list)
    benchmark: Optional[InstrumentSeries] = None
    treasury_rates: List[YieldCurvePoint] = Field(default_factory=list)

    @property
    def symbols(self) -> List[str]:
        return [s.symbol for s in self.sectors]
