"""
Treasury Curve Analytics
Term spread (10Y - 2Y), curve slope (30Y - 3M) and inversion dates.
"""
from datetime import date
from typing import List, Sequence, Tuple

from ..contracts.analytics import BondSpread
from ..contracts.data import TENORS, YieldCurvePoint


def compute_term_spreads(rates: Sequence[YieldCurvePoint]) -> List[BondSpread]:
    """
    One BondSpread per observation carrying both 2Y and 10Y.

    30Y falls back to 10Y and 3M falls back to 2Y when missing; observations
    without 2Y or 10Y are dropped.
    """
    spreads = []
    for r in rates:
        if r.year10 is None or r.year2 is None:
            continue
        y30 = r.year30 if r.year30 is not None else r.year10
        m3 = r.month3 if r.month3 is not None else r.year2
        spreads.append(BondSpread(
            date=r.date,
            spread_10y_2y=r.year10 - r.year2,
            curve_slope=y30 - m3,
        ))
    return spreads


def detect_inversions(rates: Sequence[YieldCurvePoint]) -> List[date]:
    """Dates where 10Y < 2Y."""
    return [
        r.date for r in rates
        if r.year10 is not None and r.year2 is not None and r.year10 < r.year2
    ]


def yield_curve_for_date(rate: YieldCurvePoint) -> List[Tuple[str, float]]:
    """(label, rate) pairs in increasing tenor order, skipping unavailable tenors."""
    curve = []
    for label, field in TENORS:
        value = getattr(rate, field)
        if value is not None:
            curve.append((label, value))
    return curve
