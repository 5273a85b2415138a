# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for return scenario bands.
"""

import unittest

import pandas as pd

from ..exceptions import ConfigurationError
from ..montecarlo.scenarios import (
    RETURN_SCENARIOS,
    ReturnScenario,
    ScenarioBands,
    historical_trajectory,
    run_multi_scenario_analysis,
)

FLAT = ReturnScenario("Flat", "12% with no volatility", 0.12, 0.0)


class TestMultiScenarioAnalysis(unittest.TestCase):
    """Tests for run_multi_scenario_analysis."""

    @classmethod
    def setUpClass(cls):
        cls.result = run_multi_scenario_analysis(200000, 24000, years=10, seed=11,
                                                 start="2025-01-15")

    def test_every_scenario_simulated(self):
        """Test one band frame per return scenario."""
        self.assertEqual([b.scenario.name for b in self.result.scenarios],
                         [s.name for s in RETURN_SCENARIOS])
        bands = self.result.scenarios[0].bands
        self.assertEqual(list(bands.columns), ["p5", "p25", "p50", "p75", "p95", "mean"])
        self.assertEqual(len(bands), 121)
        self.assertEqual(bands.index.name, "month")
        self.assertTrue((bands.iloc[0] == 200000).all())

    def test_bands_are_ordered(self):
        """Test that lower percentiles never exceed higher ones."""
        for scenario in self.result.scenarios:
            bands = scenario.bands
            for lower, upper in (("p5", "p25"), ("p25", "p50"), ("p50", "p75"), ("p75", "p95")):
                self.assertTrue((bands[lower] <= bands[upper]).all())

    def test_best_and_worst(self):
        """Test that the highest return has the best median and the lowest the worst."""
        self.assertEqual(self.result.best_case.scenario.name, "Historical Average")
        self.assertEqual(self.result.worst_case.scenario.name, "Conservative")
        self.assertAlmostEqual(self.result.spread,
                               self.result.best_case.final_median
                               - self.result.worst_case.final_median)
        self.assertGreater(self.result.spread, 0)

    def test_dates(self):
        """Test monthly dates from the start date."""
        dates = self.result.dates
        self.assertEqual(len(dates), 121)
        self.assertEqual(dates[0], pd.Timestamp("2025-01-15"))
        self.assertEqual(dates[12], pd.Timestamp("2026-01-15"))

    def test_summary(self):
        """Test the per-scenario summary frame."""
        summary = self.result.summary()
        self.assertEqual(list(summary.index), [s.name for s in RETURN_SCENARIOS])
        self.assertEqual(summary.loc["Moderate", "final_median"],
                         self.result.scenario("Moderate").final_median)
        with self.assertRaises(KeyError):
            self.result.scenario("Moonshot")

    def test_seed_reproducible(self):
        """Test that the same seed gives identical bands."""
        again = run_multi_scenario_analysis(200000, 24000, years=10, seed=11)
        for first, second in zip(self.result.scenarios, again.scenarios):
            pd.testing.assert_frame_equal(first.bands, second.bands)

    def test_zero_volatility_is_exact(self):
        """Test that a scenario without volatility compounds deterministically."""
        result = run_multi_scenario_analysis(100000, 12000, years=1, scenarios=[FLAT],
                                             num_simulations=5, seed=1)
        expected = 100000 * 1.01 ** 12 + 1000 * (1.01 ** 12 - 1) / 0.01
        final = result.scenarios[0].bands.iloc[-1]
        for column in ("p5", "p50", "p95", "mean"):
            self.assertAlmostEqual(final[column], expected, places=6)
        self.assertIsNone(result.historical)
        self.assertIsNone(result.closest_scenario)

    def test_closest_to_history(self):
        """Test that 4% realized growth is matched to the 4% scenario."""
        result = run_multi_scenario_analysis(104000, 0, years=1, num_simulations=10, seed=1,
                                             history=[("2021-01-01", 100000),
                                                      ("2022-01-01", 104000)])
        self.assertAlmostEqual(result.historical.annual_return, 0.04, places=3)
        self.assertEqual(result.closest_scenario, "Below Average")

    def test_invalid_inputs_raise(self):
        """Test that empty horizons, runs or scenario lists raise."""
        with self.assertRaises(ConfigurationError):
            run_multi_scenario_analysis(1000, 0, years=0)
        with self.assertRaises(ConfigurationError):
            run_multi_scenario_analysis(1000, 0, num_simulations=0)
        with self.assertRaises(ConfigurationError):
            run_multi_scenario_analysis(1000, 0, scenarios=[])


class TestTargetProbability(unittest.TestCase):
    """Tests for reading target probabilities off final bands."""

    def test_thresholds(self):
        """Test each band threshold."""
        bands = ScenarioBands(FLAT, pd.DataFrame({
            "p5": [0, 100], "p25": [0, 200], "p50": [0, 300],
            "p75": [0, 400], "p95": [0, 500], "mean": [0, 300],
        }))
        self.assertEqual(bands.target_probability(100), 0.95)
        self.assertEqual(bands.target_probability(150), 0.75)
        self.assertEqual(bands.target_probability(300), 0.50)
        self.assertEqual(bands.target_probability(350), 0.25)
        self.assertEqual(bands.target_probability(500), 0.05)
        self.assertEqual(bands.target_probability(501), 0.01)
        self.assertEqual(bands.final_median, 300.0)


class TestHistoricalTrajectory(unittest.TestCase):
    """Tests for historical_trajectory."""

    def test_needs_two_entries(self):
        """Test that a single observation has no trajectory."""
        self.assertIsNone(historical_trajectory([("2024-01-01", 100000)]))

    def test_negative_end_has_zero_rate(self):
        """Test that a history ending below zero reports a zero rate."""
        trajectory = historical_trajectory([("2023-01-01", -5000), ("2021-01-01", 100000)])
        self.assertEqual(trajectory.annual_return, 0.0)
        self.assertEqual(list(trajectory.values), [100000.0, -5000.0])


if __name__ == '__main__':
    unittest.main()
