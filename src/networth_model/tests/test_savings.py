# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for savings rate inference.
"""

import unittest
from datetime import date

from ..savings import HistoryEntry, SavingsRateInferencer, as_history


class TestSavingsRateInferencer(unittest.TestCase):
    """Tests for SavingsRateInferencer."""

    def setUp(self):
        self.inferencer = SavingsRateInferencer()

    def test_two_point_estimate(self):
        """Test the rate implied by growth beyond investment returns."""
        rate = self.inferencer.infer([("2020-01-01", 100000), ("2023-01-01", 205000)],
                                     estimated_annual_income=150000)
        self.assertAlmostEqual(rate, 0.1833, places=3)

    def test_order_does_not_matter(self):
        """Test that entries are sorted before inference."""
        entries = [("2023-01-01", 205000), ("2021-06-01", 150000), ("2020-01-01", 100000)]
        self.assertAlmostEqual(self.inferencer.infer(entries, 150000),
                               self.inferencer.infer(sorted(entries), 150000))

    def test_fewer_than_two_entries(self):
        """Test the default for empty and single-entry histories."""
        self.assertEqual(self.inferencer.infer([], 100000), 0.25)
        self.assertEqual(self.inferencer.infer([("2020-01-01", 5000)], 100000), 0.25)

    def test_zero_income(self):
        """Test the default when income is zero."""
        entries = [("2020-01-01", 100000), ("2021-01-01", 150000)]
        self.assertEqual(self.inferencer.infer(entries, 0), 0.25)

    def test_negative_rate(self):
        """Test the default when wealth fell."""
        entries = [("2020-01-01", 100000), ("2021-01-01", 50000)]
        self.assertEqual(self.inferencer.infer(entries, 100000), 0.25)

    def test_rate_above_cap(self):
        """Test the default when the raw rate exceeds 90%."""
        entries = [("2020-01-01", 0), ("2021-01-01", 500000)]
        self.assertEqual(self.inferencer.infer(entries, 100000), 0.25)

    def test_nan_rate(self):
        """Test the default when the computation yields NaN."""
        entries = [("2020-01-01", float("nan")), ("2021-01-01", 100000)]
        self.assertEqual(self.inferencer.infer(entries, 100000), 0.25)

    def test_same_day_entries(self):
        """Test the default when no time has elapsed."""
        entries = [("2020-01-01", 100000), ("2020-01-01", 150000)]
        self.assertEqual(self.inferencer.infer(entries, 100000), 0.25)

    def test_custom_default(self):
        """Test that the fallback rate is configurable."""
        self.assertEqual(SavingsRateInferencer(default_rate=0.1).infer([], 100000), 0.1)

    def test_history_entries(self):
        """Test HistoryEntry inputs with date objects."""
        entries = [HistoryEntry(date(2022, 1, 1), 10000), HistoryEntry(date(2023, 1, 1), 30000)]
        rate = self.inferencer.infer(entries, 100000, assumed_return=0.0)
        self.assertAlmostEqual(rate, 20000 / (100000 * 365 / 365.25), places=6)


class TestAsHistory(unittest.TestCase):
    """Tests for as_history."""

    def test_sorted_entries(self):
        """Test tuples become HistoryEntry objects sorted by date."""
        history = as_history([("2021-01-01", 2), ("2020-01-01", 1)])
        self.assertEqual([e.net_worth for e in history], [1, 2])
        self.assertIsInstance(history[0], HistoryEntry)


if __name__ == '__main__':
    unittest.main()
