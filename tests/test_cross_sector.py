import unittest

import numpy as np

from sectorvol.analysis.cross_sector import (
    average_cross_correlation, compute_correlation_matrix, pearson_correlation,
)
from sectorvol.contracts import CorrelationMatrix


class TestPearson(unittest.TestCase):

    def test_perfect_positive(self):
        a = [1.0, 2.0, 3.0, 4.0, 5.0]
        b = [2.0, 4.0, 6.0, 8.0, 10.0]
        self.assertAlmostEqual(pearson_correlation(a, b), 1.0, delta=1e-10)

    def test_perfect_negative(self):
        a = [1.0, 2.0, 3.0, 4.0, 5.0]
        b = [-3.0 * x for x in a]
        self.assertAlmostEqual(pearson_correlation(a, b), -1.0, delta=1e-10)

    def test_zero_variance_is_neutral(self):
        self.assertEqual(pearson_correlation([1.0, 1.0, 1.0], [1.0, 2.0, 3.0]), 0.0)

    def test_too_few_points(self):
        self.assertEqual(pearson_correlation([1.0], [2.0]), 0.0)
        self.assertEqual(pearson_correlation([], []), 0.0)


class TestCorrelationMatrix(unittest.TestCase):

    def setUp(self):
        self.symbols = ["A", "B", "C"]
        self.returns = [
            [0.01, -0.02, 0.03, 0.01, -0.01],
            [0.02, -0.01, 0.02, 0.015, -0.005],
            [-0.01, 0.03, -0.02, 0.005, 0.01],
        ]

    def test_diagonal_is_one(self):
        cm = compute_correlation_matrix(self.symbols, self.returns)
        np.testing.assert_array_equal(np.diag(cm.matrix), [1.0, 1.0, 1.0])

    def test_symmetric(self):
        cm = compute_correlation_matrix(self.symbols, self.returns)
        np.testing.assert_allclose(cm.matrix, cm.matrix.T, atol=1e-12)
        self.assertEqual(cm.get("A", "B"), cm.get("B", "A"))

    def test_trailing_alignment(self):
        # Extra leading points on one series must be ignored
        longer = [[0.5, -0.7] + self.returns[0], self.returns[1]]
        cm = compute_correlation_matrix(["A", "B"], longer)
        expected = pearson_correlation(self.returns[0], self.returns[1])
        self.assertAlmostEqual(cm.get("A", "B"), expected, places=12)

    def test_short_series_neutral(self):
        cm = compute_correlation_matrix(["A", "B"], [[0.01], [0.02, 0.03]])
        self.assertEqual(cm.get("A", "B"), 0.0)
        self.assertEqual(cm.get("B", "A"), 0.0)

    def test_mismatched_inputs_raise(self):
        with self.assertRaises(ValueError):
            compute_correlation_matrix(["A", "B"], [[0.01, 0.02]])

    def test_to_frame(self):
        df = compute_correlation_matrix(self.symbols, self.returns).to_frame()
        self.assertEqual(list(df.columns), self.symbols)
        self.assertEqual(df.loc["C", "C"], 1.0)


class TestAverageCrossCorrelation(unittest.TestCase):

    def test_upper_triangle_mean(self):
        cm = CorrelationMatrix(
            symbols=["A", "B", "C"],
            matrix=np.array([
                [1.0, 0.8, 0.6],
                [0.8, 1.0, 0.7],
                [0.6, 0.7, 1.0],
            ]),
        )
        self.assertAlmostEqual(average_cross_correlation(cm), (0.8 + 0.6 + 0.7) / 3, delta=1e-10)

    def test_single_symbol(self):
        cm = CorrelationMatrix(symbols=["A"], matrix=np.array([[1.0]]))
        self.assertEqual(average_cross_correlation(cm), 0.0)


if __name__ == '__main__':
    unittest.main()
