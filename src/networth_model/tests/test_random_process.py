# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for the Monte Carlo random processes.
"""

import math
import unittest

import numpy as np

from ..montecarlo.random_process import RandomProcess


class TestRandomProcess(unittest.TestCase):
    """Tests for RandomProcess."""

    def test_seed_is_reproducible(self):
        """Test that equal seeds give equal draws."""
        a = RandomProcess(seed=123).normal_variate(0.0, 1.0, size=50)
        b = RandomProcess(seed=123).normal_variate(0.0, 1.0, size=50)
        np.testing.assert_array_equal(a, b)

    def test_injected_generator(self):
        """Test that an injected generator takes precedence over the seed."""
        rng = np.random.default_rng(5)
        expected = RandomProcess(rng=np.random.default_rng(5)).uniform(10)
        np.testing.assert_array_equal(RandomProcess(rng=rng, seed=999).uniform(10), expected)

    def test_uniform_excludes_zero(self):
        """Test that uniform draws lie in (0, 1]."""
        draws = RandomProcess(seed=1).uniform(100000)
        self.assertTrue(np.all(draws > 0))
        self.assertTrue(np.all(draws <= 1))

    def test_zero_std_returns_mean(self):
        """Test that a zero standard deviation collapses to the mean."""
        process = RandomProcess(seed=1)
        self.assertEqual(process.normal_variate(3.5, 0.0), 3.5)
        np.testing.assert_array_equal(process.normal_variate(3.5, 0.0, size=4), np.full(4, 3.5))

    def test_scalar_draw_is_float(self):
        """Test that a draw without size is a plain float."""
        self.assertIsInstance(RandomProcess(seed=1).normal_variate(0.0, 1.0), float)

    def test_normal_moments(self):
        """Test that Box-Muller samples have the requested mean and std."""
        samples = RandomProcess(seed=42).normal_variate(10.0, 2.0, size=200000)
        self.assertAlmostEqual(float(np.mean(samples)), 10.0, delta=0.02)
        self.assertAlmostEqual(float(np.std(samples)), 2.0, delta=0.02)

    def test_monthly_return_without_volatility(self):
        """Test that zero volatility gives the deterministic monthly growth."""
        growth = RandomProcess(seed=1).monthly_investment_return(0.07, 0.0, size=12)
        np.testing.assert_allclose(growth, np.full(12, math.exp(0.07 / 12)))

    def test_monthly_return_mean(self):
        """Test that the GBM multiplier averages exp(mu * dt)."""
        growth = RandomProcess(seed=7).monthly_investment_return(0.07, 0.15, size=200000)
        self.assertTrue(np.all(growth > 0))
        self.assertAlmostEqual(float(np.mean(growth)), math.exp(0.07 / 12), places=3)

    def test_emergency_probability_bounds(self):
        """Test that probability 0 never triggers and 1 always does."""
        process = RandomProcess(seed=3)
        self.assertFalse(np.any(process.emergency_triggered(0.0, size=1000)))
        self.assertTrue(np.all(process.emergency_triggered(1.0, size=1000)))
        self.assertIsInstance(process.emergency_triggered(0.5), bool)

    def test_emergency_frequency(self):
        """Test that emergencies trigger at roughly the requested rate."""
        triggered = RandomProcess(seed=11).emergency_triggered(0.05, size=100000)
        self.assertAlmostEqual(float(np.mean(triggered)), 0.05, delta=0.005)

    def test_emergency_cost_floored_at_zero(self):
        """Test that emergency costs are never negative."""
        costs = RandomProcess(seed=2).emergency_cost(100.0, 1000.0, size=10000)
        self.assertTrue(np.all(costs >= 0))
        self.assertTrue(np.any(costs == 0))

    def test_spawned_streams_are_independent_and_reproducible(self):
        """Test that spawned children differ from each other but not across runs."""
        first = [child.uniform(5) for child in RandomProcess(seed=9).spawn(3)]
        second = [child.uniform(5) for child in RandomProcess(seed=9).spawn(3)]
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)
        self.assertFalse(np.array_equal(first[0], first[1]))

    def test_integers_range(self):
        """Test that integers fall in [0, high)."""
        draws = RandomProcess(seed=4).integers(20, 1000)
        self.assertEqual(len(draws), 1000)
        self.assertTrue(np.all((draws >= 0) & (draws < 20)))


if __name__ == '__main__':
    unittest.main()
