# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Random processes driving the Monte Carlo runway simulation.

All randomness flows through a :class:`RandomProcess`, which wraps an
injectable ``numpy.random.Generator``. Seeding the generator makes a whole
simulation reproducible, and :meth:`RandomProcess.spawn` hands each path an
independent child stream so paths can run in any order or in parallel.
"""

import math
from typing import List, Optional, Tuple, Union

import numpy as np

ArrayOrFloat = Union[float, np.ndarray]
Size = Optional[Union[int, Tuple[int, ...]]]


class RandomProcess:
    """Normal variates, GBM monthly returns and emergency shocks.

    Example:
        >>> process = RandomProcess(seed=42)
        >>> process.normal_variate(0.0, 1.0, size=3)
        array([...])
        >>> growth = process.monthly_investment_return(0.07, 0.15)
    """

    def __init__(self, rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        """Initialize the process.

        Args:
            rng: Generator to draw from. Takes precedence over ``seed``.
            seed: Seed for a new ``numpy.random.default_rng`` generator
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def spawn(self, n: int) -> List["RandomProcess"]:
        """Create ``n`` statistically independent child processes."""
        return [RandomProcess(child) for child in self.rng.spawn(n)]

    def uniform(self, size: Size = None) -> ArrayOrFloat:
        """Uniform draws on (0, 1]; never exactly zero so log() is safe."""
        return 1.0 - self.rng.random(size)

    def normal_variate(self, mean: float = 0.0, std_dev: float = 1.0,
                       size: Size = None) -> ArrayOrFloat:
        """N(mean, std_dev) samples via the Box-Muller transform.

        Each sample consumes two uniform draws and the companion (sine)
        variate is discarded. A zero standard deviation returns the mean
        without drawing.
        """
        if std_dev == 0:
            return mean if size is None else np.full(size, float(mean))

        u1 = self.uniform(size)
        u2 = self.uniform(size)
        z0 = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * math.pi * u2)
        samples = mean + z0 * std_dev
        return float(samples) if size is None else samples

    def monthly_investment_return(self, annual_return: float, annual_volatility: float,
                                  size: Optional[int] = None) -> ArrayOrFloat:
        """Monthly growth multiplier under Geometric Brownian Motion.

        ``exp(mu*dt - 0.5*sigma_m**2 + shock)`` with ``dt = 1/12``,
        ``sigma_m = sigma*sqrt(dt)`` and ``shock ~ N(0, sigma_m)``. The
        multiplier is always positive so balances cannot go negative from
        returns alone.
        """
        dt = 1.0 / 12.0
        monthly_drift = annual_return * dt
        monthly_vol = annual_volatility * math.sqrt(dt)
        shock = self.normal_variate(0.0, monthly_vol, size)
        return np.exp(monthly_drift - 0.5 * monthly_vol * monthly_vol + shock)

    def emergency_triggered(self, probability_per_month: float,
                            size: Optional[int] = None) -> Union[bool, np.ndarray]:
        """Bernoulli trial(s) for an emergency expense."""
        draws = self.rng.random(size)
        triggered = draws < probability_per_month
        return bool(triggered) if size is None else triggered

    def emergency_cost(self, mean_cost: float, std_dev_cost: float,
                       size: Optional[int] = None) -> ArrayOrFloat:
        """Emergency cost, normally distributed and floored at zero."""
        return np.maximum(0.0, self.normal_variate(mean_cost, std_dev_cost, size))

    def integers(self, high: int, size: int) -> np.ndarray:
        """Uniform integers in [0, high)."""
        return self.rng.integers(0, high, size=size)
