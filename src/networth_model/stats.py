# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Summary statistics shared by the projection and simulation engines.

All functions are pure and accept any sequence of numbers (lists, tuples,
numpy arrays). Percentile helpers expect the input already sorted ascending.
"""

import math
from typing import Sequence

import numpy as np

from .exceptions import EmptyInputError


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Linearly interpolated value at rank ``p`` (0-100).

    The rank is ``p / 100 * (n - 1)``; the result blends the neighbouring
    values by the fractional part of the rank.

    Args:
        sorted_values: Values sorted ascending
        p: Percentile rank between 0 and 100

    Returns:
        Interpolated value

    Raises:
        EmptyInputError: If sorted_values is empty
    """
    n = len(sorted_values)
    if n == 0:
        raise EmptyInputError("Cannot take a percentile of an empty sequence",
                              details={"percentile": p})

    p = min(max(p, 0.0), 100.0)
    index = (p / 100.0) * (n - 1)
    lower = int(math.floor(index))
    upper = int(math.ceil(index))
    if upper >= n:
        return float(sorted_values[n - 1])

    weight = index - lower
    return float(sorted_values[lower]) * (1 - weight) + float(sorted_values[upper]) * weight


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def variance(values: Sequence[float]) -> float:
    """Variance with an n-1 denominator; 0.0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float), ddof=1))


def std_dev(values: Sequence[float]) -> float:
    """Square root of :func:`variance`."""
    return math.sqrt(variance(values))


def value_at_risk(sorted_values: Sequence[float], confidence: float = 0.95) -> float:
    """Lower-tail value at the given confidence (e.g. 5th percentile for 0.95)."""
    return percentile(sorted_values, (1.0 - confidence) * 100.0)


def conditional_value_at_risk(sorted_values: Sequence[float],
                              confidence: float = 0.95) -> float:
    """Mean of the worst ``floor(n * (1 - confidence))`` values.

    When the tail is too small to hold a single value (fewer than 20 values
    at 95%), the worst value is returned instead.

    Raises:
        EmptyInputError: If sorted_values is empty
    """
    n = len(sorted_values)
    if n == 0:
        raise EmptyInputError("Cannot compute CVaR of an empty sequence")

    tail_size = int(math.floor(n * (1.0 - confidence) + 1e-9))
    if tail_size == 0:
        return float(sorted_values[0])
    return mean(sorted_values[:tail_size])
