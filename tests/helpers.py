"""Synthetic market data shared by the test modules."""
from datetime import date, timedelta

import numpy as np

from sectorvol.contracts import Bar, InstrumentSeries, MarketData, YieldCurvePoint


def make_series(symbol: str, n_bars: int, seed: int = 0, start: date = date(2023, 1, 2),
                vol: float = 0.01) -> InstrumentSeries:
    rng = np.random.default_rng(seed)
    closes = 100 * np.exp(np.cumsum(rng.normal(0, vol, n_bars)))
    bars = []
    for i, c in enumerate(closes):
        spread = abs(rng.normal(0, vol)) * c + 0.01
        bars.append(Bar(
            date=start + timedelta(days=i),
            open=float(c),
            high=float(c + spread),
            low=float(c - spread),
            close=float(c),
            volume=float(rng.integers(1000, 10000)),
        ))
    return InstrumentSeries(symbol=symbol, display_name=symbol, bars=bars)


def make_rates(n: int, start: date = date(2023, 1, 2)):
    return [
        YieldCurvePoint(
            date=start + timedelta(days=i),
            month3=3.6 + 0.001 * i,
            year2=3.5 + 0.001 * i,
            year10=4.2,
            year30=4.8,
        )
        for i in range(n)
    ]


def make_market(n_sectors: int, n_bars: int, with_benchmark: bool = True,
                n_rates: int = 0) -> MarketData:
    sectors = [make_series(f"S{i}", n_bars, seed=i + 1) for i in range(n_sectors)]
    benchmark = make_series("SPY", n_bars, seed=99) if with_benchmark else None
    return MarketData(sectors=sectors, benchmark=benchmark, treasury_rates=make_rates(n_rates))
