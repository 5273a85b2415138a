# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for net worth velocity and acceleration.
"""

import math
import unittest

import pandas as pd

from ..trajectory import (
    DECLINING,
    HIGH_GROWTH,
    PEAK,
    TROUGH,
    TrajectoryCalculus,
)


def every_ten_days(values, start="2024-01-01"):
    dates = pd.date_range(start, periods=len(values), freq="10D")
    return list(zip(dates, values))


class TestDerivatives(unittest.TestCase):
    """Tests for velocity and acceleration."""

    def test_linear_growth(self):
        """Test that three equally spaced rising values give constant velocity."""
        calc = TrajectoryCalculus(every_ten_days([100, 200, 300]))

        velocities = [p.velocity for p in calc.velocity()]
        self.assertEqual(velocities, [10.0, 10.0])
        accelerations = calc.acceleration()
        self.assertEqual(len(accelerations), 1)
        self.assertEqual(accelerations[0].acceleration, 0.0)

    def test_annualized_velocity(self):
        """Test dollars per day scaled to a year."""
        calc = TrajectoryCalculus(every_ten_days([0, 10]))
        self.assertAlmostEqual(calc.velocity()[0].annualized, 365.25)

    def test_uneven_spacing(self):
        """Test that velocity divides by the actual gap in days."""
        calc = TrajectoryCalculus([("2024-01-01", 0), ("2024-01-05", 40), ("2024-01-25", 140)])
        self.assertEqual([p.velocity for p in calc.velocity()], [10.0, 5.0])
        self.assertAlmostEqual(calc.acceleration()[0].acceleration, -5.0 / 20)

    def test_too_few_points(self):
        """Test that short series produce no derivatives."""
        self.assertEqual(TrajectoryCalculus([]).velocity(), [])
        self.assertEqual(TrajectoryCalculus([("2024-01-01", 5)]).velocity(), [])
        self.assertEqual(TrajectoryCalculus(every_ten_days([1, 2])).acceleration(), [])

    def test_unsorted_input(self):
        """Test that points are sorted by date."""
        calc = TrajectoryCalculus([("2024-01-21", 300), ("2024-01-01", 100), ("2024-01-11", 200)])
        self.assertEqual(list(calc.series), [100.0, 200.0, 300.0])

    def test_same_day_keeps_last(self):
        """Test that the last value supplied for a day wins."""
        calc = TrajectoryCalculus([("2024-01-01", 100), ("2024-01-11", 150),
                                   ("2024-01-11", 200), ("2024-01-21", 300)])
        self.assertEqual(len(calc), 3)
        self.assertEqual(calc.series.iloc[1], 200.0)

    def test_series_input(self):
        """Test a pandas Series indexed by date."""
        series = pd.Series([300.0, 100.0, 200.0],
                           index=pd.to_datetime(["2024-01-21", "2024-01-01", "2024-01-11"]))
        calc = TrajectoryCalculus(series)
        self.assertEqual([p.velocity for p in calc.velocity()], [10.0, 10.0])

    def test_to_dataframe(self):
        """Test the derivative frame leaves undefined cells empty."""
        df = TrajectoryCalculus(every_ten_days([100, 200, 400])).to_dataframe()
        self.assertEqual(list(df.columns), ["value", "velocity", "acceleration"])
        self.assertTrue(math.isnan(df["velocity"].iloc[0]))
        self.assertTrue(math.isnan(df["acceleration"].iloc[1]))
        self.assertEqual(df["acceleration"].iloc[2], 1.0)


class TestInflectionPoints(unittest.TestCase):
    """Tests for inflection point detection."""

    def test_peak(self):
        """Test that velocity rising then falling is a peak."""
        calc = TrajectoryCalculus(every_ten_days([0, 100, 300, 600, 800, 900]))
        points = calc.inflection_points()

        self.assertEqual(len(points), 1)
        self.assertEqual(points[0].kind, PEAK)
        self.assertEqual(points[0].velocity, 30.0)
        self.assertEqual(points[0].value, 600.0)

    def test_trough(self):
        """Test that velocity falling then rising is a trough."""
        calc = TrajectoryCalculus(every_ten_days([0, 300, 500, 600, 800, 1100]))
        points = calc.inflection_points()

        self.assertEqual([p.kind for p in points], [TROUGH])
        self.assertEqual(points[0].velocity, 10.0)

    def test_small_velocity_ignored(self):
        """Test that extremes below the velocity threshold are ignored."""
        calc = TrajectoryCalculus(every_ten_days([0, 1, 3, 6, 8, 9]))
        self.assertEqual(calc.inflection_points(), [])
        self.assertEqual(len(calc.inflection_points(min_velocity=0.1)), 1)

    def test_needs_four_points(self):
        """Test that three points cannot produce an inflection."""
        self.assertEqual(TrajectoryCalculus(every_ten_days([0, 500, 600])).inflection_points(), [])


class TestSegmentsAndSummary(unittest.TestCase):
    """Tests for segments and summarize."""

    def test_segment_classification(self):
        """Test quartile classification of raw segment velocities."""
        segments = TrajectoryCalculus(every_ten_days([100, 200, 300, 250])).segments(smooth=False)

        self.assertEqual([s.velocity for s in segments], [10.0, 10.0, -5.0])
        self.assertEqual([s.kind for s in segments], [HIGH_GROWTH, HIGH_GROWTH, DECLINING])
        self.assertEqual(segments[0].duration_days, 10.0)
        self.assertEqual(segments[2].start_value, 300.0)

    def test_smoothing_window(self):
        """Test that nearby segments are averaged together."""
        segments = TrajectoryCalculus(every_ten_days([100, 200, 300, 250])).segments()
        for segment in segments:
            self.assertAlmostEqual(segment.velocity, 5.0)

    def test_annualized_rate(self):
        """Test compound annual growth of a segment."""
        calc = TrajectoryCalculus([("2023-01-01", 100000), ("2024-01-01", 110000)])
        segment = calc.segments()[0]
        self.assertAlmostEqual(segment.annualized_rate, 1.1 ** (365.25 / 365) - 1)

    def test_annualized_rate_through_negative_net_worth(self):
        """Test that segments crossing below zero report real rates."""
        calc = TrajectoryCalculus([("2024-01-01", 10000), ("2024-04-01", -5000),
                                   ("2024-07-01", 2000)])
        first, second = calc.segments()
        self.assertIsInstance(first.annualized_rate, float)
        self.assertEqual(first.annualized_rate, -1.0)
        self.assertEqual(second.annualized_rate, 0.0)
        self.assertEqual(first.kind, DECLINING)

    def test_summary_trends(self):
        """Test accelerating, decelerating and stable trends."""
        self.assertEqual(TrajectoryCalculus(every_ten_days([0, 100, 400, 900])).summarize().trend,
                         "accelerating")
        self.assertEqual(TrajectoryCalculus(every_ten_days([0, 500, 800, 900])).summarize().trend,
                         "decelerating")
        self.assertEqual(TrajectoryCalculus(every_ten_days([0, 100, 200, 300])).summarize().trend,
                         "stable")

    def test_summary_values(self):
        """Test average and overall velocity."""
        summary = TrajectoryCalculus(every_ten_days([0, 100, 400, 900])).summarize()
        self.assertAlmostEqual(summary.average_velocity, 30.0)
        self.assertAlmostEqual(summary.average_acceleration, 2.0)
        self.assertAlmostEqual(summary.overall_velocity, 30.0)
        self.assertEqual(summary.inflection_points, ())

    def test_r_squared(self):
        """Test how well each velocity predicts the next observation."""
        self.assertAlmostEqual(TrajectoryCalculus(every_ten_days([0, 100, 200, 300])).r_squared(), 1.0)
        # Only the last step misses, by 5
        self.assertAlmostEqual(TrajectoryCalculus(every_ten_days([0, 10, 20, 25])).r_squared(),
                               1 - 25 / 368.75)
        self.assertEqual(TrajectoryCalculus(every_ten_days([100, 200, 100, 200])).r_squared(), 0.0)
        self.assertEqual(TrajectoryCalculus(every_ten_days([100, 200])).r_squared(), 0.0)
        self.assertEqual(TrajectoryCalculus(every_ten_days([50, 50, 50])).r_squared(), 1.0)

    def test_summary_includes_r_squared(self):
        """Test that the summary carries the fit quality."""
        calc = TrajectoryCalculus(every_ten_days([0, 10, 20, 25]))
        self.assertEqual(calc.summarize().r_squared, calc.r_squared())


if __name__ == '__main__':
    unittest.main()
