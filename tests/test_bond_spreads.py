import unittest
from datetime import date

from sectorvol.analysis.bond_spreads import (
    compute_term_spreads, detect_inversions, yield_curve_for_date,
)
from sectorvol.contracts import YieldCurvePoint


def make_rate(d, y2, y10, y30, m3):
    return YieldCurvePoint(date=d, month3=m3, year2=y2, year10=y10, year30=y30)


class TestTermSpreads(unittest.TestCase):

    def test_spread_and_slope(self):
        rates = [
            make_rate(date(2025, 1, 1), 3.5, 4.2, 4.8, 3.6),
            make_rate(date(2025, 1, 2), 3.4, 4.1, 4.7, 3.5),
        ]
        spreads = compute_term_spreads(rates)
        self.assertEqual(len(spreads), 2)
        self.assertAlmostEqual(spreads[0].spread_10y_2y, 0.7, delta=1e-10)
        self.assertAlmostEqual(spreads[0].curve_slope, 1.2, delta=1e-10)
        self.assertEqual(spreads[0].date, date(2025, 1, 1))

    def test_fallback_tenors(self):
        rates = [YieldCurvePoint(date=date(2025, 1, 1), year2=3.5, year10=4.2)]
        spread = compute_term_spreads(rates)[0]
        # 30Y <- 10Y and 3M <- 2Y, so slope equals the spread
        self.assertAlmostEqual(spread.curve_slope, 0.7, delta=1e-10)

    def test_missing_core_tenor_dropped(self):
        rates = [
            YieldCurvePoint(date=date(2025, 1, 1), year2=3.5),
            YieldCurvePoint(date=date(2025, 1, 2), year10=4.2),
            make_rate(date(2025, 1, 3), 3.5, 4.2, 4.8, 3.6),
        ]
        spreads = compute_term_spreads(rates)
        self.assertEqual([s.date for s in spreads], [date(2025, 1, 3)])


class TestInversions(unittest.TestCase):

    def test_detects_only_inverted_dates(self):
        rates = [
            make_rate(date(2025, 1, 1), 4.5, 4.2, 4.8, 3.6),
            make_rate(date(2025, 1, 2), 3.4, 4.1, 4.7, 3.5),
        ]
        self.assertEqual(detect_inversions(rates), [date(2025, 1, 1)])


class TestYieldCurve(unittest.TestCase):

    def test_ordered_and_sparse(self):
        curve = yield_curve_for_date(make_rate(date(2025, 1, 1), 3.5, 4.2, 4.8, 3.6))
        self.assertEqual([label for label, _ in curve], ["3M", "2Y", "10Y", "30Y"])
        self.assertEqual(curve[0], ("3M", 3.6))

    def test_full_curve_order(self):
        point = YieldCurvePoint(
            date=date(2025, 1, 1),
            month1=1, month2=2, month3=3, month6=4, year1=5, year2=6,
            year3=7, year5=8, year7=9, year10=10, year20=11, year30=12,
        )
        labels = [label for label, _ in yield_curve_for_date(point)]
        self.assertEqual(labels, ["1M", "2M", "3M", "6M", "1Y", "2Y", "3Y", "5Y", "7Y", "10Y", "20Y", "30Y"])
        self.assertEqual(point.rate("7Y"), 9)


if __name__ == '__main__':
    unittest.main()
