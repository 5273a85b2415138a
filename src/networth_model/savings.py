# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Savings rate inference from a net worth history.

The estimate attributes any wealth growth beyond what the starting balance
would have earned on its own to new savings:

    savings_rate = (actual_growth - investment_growth) / (income * years)

It is a two-point approximation over the first and last entries, not a
regression over the whole series; intermediate entries do not affect it.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence, Tuple, Union

import pandas as pd

from .constants import DAYS_PER_YEAR, DEFAULT_SAVINGS_RATE, MAX_SAVINGS_RATE, REAL_RETURN_INVESTMENT
from .log import get_logger

logger = get_logger(__name__)

DateLike = Union[str, date, datetime, pd.Timestamp]


@dataclass(frozen=True)
class HistoryEntry:
    """One net worth observation."""
    date: DateLike
    net_worth: float

    @property
    def timestamp(self) -> pd.Timestamp:
        return pd.Timestamp(self.date)


def as_history(entries: Iterable[Union[HistoryEntry, Tuple[DateLike, float]]]) -> Tuple[HistoryEntry, ...]:
    """Normalize entries to HistoryEntry objects sorted by date."""
    normalized = [e if isinstance(e, HistoryEntry) else HistoryEntry(*e) for e in entries]
    return tuple(sorted(normalized, key=lambda e: e.timestamp))


class SavingsRateInferencer:
    """Backs out an implied historical savings rate.

    Example:
        >>> inferencer = SavingsRateInferencer()
        >>> inferencer.infer([("2020-01-01", 100000), ("2023-01-01", 205000)],
        ...                  estimated_annual_income=150000)
        0.18...
    """

    def __init__(self, default_rate: float = DEFAULT_SAVINGS_RATE,
                 max_rate: float = MAX_SAVINGS_RATE):
        self.default_rate = default_rate
        self.max_rate = max_rate

    def infer(self,
              entries: Sequence[Union[HistoryEntry, Tuple[DateLike, float]]],
              estimated_annual_income: float,
              assumed_return: float = REAL_RETURN_INVESTMENT) -> float:
        """Infer the savings rate implied by the history.

        Args:
            entries: Net worth observations (any order)
            estimated_annual_income: After-tax income over the period
            assumed_return: Annual return the starting balance earned

        Returns:
            Inferred rate in [0, 0.9], or the default (0.25) when there are
            fewer than two entries, no income, no elapsed time, or the raw
            estimate is NaN, negative, or above 0.9
        """
        if len(entries) < 2 or not estimated_annual_income:
            return self._fallback("insufficient_data", entries=len(entries))

        history = as_history(entries)
        first, last = history[0], history[-1]
        elapsed_days = (last.timestamp - first.timestamp).total_seconds() / 86400.0
        years = elapsed_days / DAYS_PER_YEAR
        if years <= 0:
            return self._fallback("no_elapsed_time")

        actual_growth = last.net_worth - first.net_worth
        investment_growth = first.net_worth * ((1 + assumed_return) ** years - 1)
        savings_growth = actual_growth - investment_growth
        rate = savings_growth / (estimated_annual_income * years)

        if math.isnan(rate) or rate < 0 or rate > self.max_rate:
            return self._fallback("out_of_range", raw_rate=rate)

        logger.debug("savings_rate_inferred", rate=rate, years=years)
        return rate

    def _fallback(self, reason: str, **context) -> float:
        logger.debug("savings_rate_fallback", reason=reason,
                     default=self.default_rate, **context)
        return self.default_rate
