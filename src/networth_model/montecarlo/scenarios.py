# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Net worth percentile bands across a ladder of return assumptions.

Each scenario grows a balance by a normally distributed monthly return
plus a fixed monthly contribution, and reports the 5th to 95th percentile
and mean balance at every month. An optional net worth history is reduced
to its realized annual growth rate and matched to the closest scenario.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..constants import DAYS_PER_YEAR, SCENARIO_SIMULATIONS, SCENARIO_YEARS
from ..exceptions import ConfigurationError
from ..log import get_logger
from ..savings import DateLike, HistoryEntry, as_history
from .random_process import RandomProcess

logger = get_logger(__name__)

BAND_PERCENTILES = (5, 25, 50, 75, 95)

# Probability of finishing at or above a band's final value
_TARGET_PROBABILITIES = (("p5", 0.95), ("p25", 0.75), ("p50", 0.50), ("p75", 0.25), ("p95", 0.05))
_UNLIKELY = 0.01


@dataclass(frozen=True)
class ReturnScenario:
    name: str
    description: str
    annual_return: float
    volatility: float


RETURN_SCENARIOS: Tuple[ReturnScenario, ...] = (
    ReturnScenario("Conservative", "3% annual return (recession or bonds)", 0.03, 0.08),
    ReturnScenario("Below Average", "4% annual return (mixed bonds/stocks)", 0.04, 0.10),
    ReturnScenario("Moderate", "5% annual return (conservative stocks)", 0.05, 0.12),
    ReturnScenario("Above Average", "6% annual return (balanced portfolio)", 0.06, 0.14),
    ReturnScenario("Historical Average", "7% annual return (S&P 500 real return)", 0.07, 0.15),
)


@dataclass(frozen=True, eq=False)
class ScenarioBands:
    """Simulated balance bands for one return scenario.

    Attributes:
        scenario: The return assumption simulated
        bands: DataFrame indexed by month (0..months) with columns
               p5, p25, p50, p75, p95 and mean
    """
    scenario: ReturnScenario
    bands: pd.DataFrame

    @property
    def final_median(self) -> float:
        return float(self.bands["p50"].iloc[-1])

    @property
    def final_mean(self) -> float:
        return float(self.bands["mean"].iloc[-1])

    def target_probability(self, target_amount: float) -> float:
        """Rough chance of ending at or above ``target_amount``, read off the final bands."""
        final = self.bands.iloc[-1]
        for column, probability in _TARGET_PROBABILITIES:
            if target_amount <= final[column]:
                return probability
        return _UNLIKELY


@dataclass(frozen=True, eq=False)
class HistoricalTrajectory:
    """Realized growth of a net worth history."""
    annual_return: float
    values: pd.Series


@dataclass(frozen=True, eq=False)
class MultiScenarioResult:
    scenarios: Tuple[ScenarioBands, ...]
    dates: pd.DatetimeIndex
    best_case: ScenarioBands
    worst_case: ScenarioBands
    historical: Optional[HistoricalTrajectory] = None
    closest_scenario: Optional[str] = None

    @property
    def spread(self) -> float:
        """Gap between the best and worst final medians."""
        return self.best_case.final_median - self.worst_case.final_median

    def scenario(self, name: str) -> ScenarioBands:
        for bands in self.scenarios:
            if bands.scenario.name == name:
                return bands
        raise KeyError(name)

    def summary(self) -> pd.DataFrame:
        """Final median and mean per scenario, indexed by name."""
        return pd.DataFrame([{
            "name": b.scenario.name,
            "annual_return": b.scenario.annual_return,
            "volatility": b.scenario.volatility,
            "final_median": b.final_median,
            "final_mean": b.final_mean,
        } for b in self.scenarios]).set_index("name")


def simulate_return_bands(initial_value: float,
                          annual_contribution: float,
                          scenario: ReturnScenario,
                          years: int,
                          num_simulations: int,
                          process: RandomProcess) -> pd.DataFrame:
    """Percentile and mean balances per month for one scenario.

    Percentiles use the nearest-rank value at ``floor(n * p / 100)`` of
    the sorted balances, so every band value is an actual simulated
    balance.
    """
    months = years * 12
    monthly_rate = scenario.annual_return / 12
    monthly_vol = scenario.volatility / math.sqrt(12)
    contribution = annual_contribution / 12

    returns = process.normal_variate(monthly_rate, monthly_vol, (num_simulations, months))
    paths = np.empty((num_simulations, months + 1))
    paths[:, 0] = initial_value
    for month in range(months):
        paths[:, month + 1] = paths[:, month] * (1 + returns[:, month]) + contribution

    ranked = np.sort(paths, axis=0)
    columns = {
        f"p{p}": ranked[min(num_simulations * p // 100, num_simulations - 1)]
        for p in BAND_PERCENTILES
    }
    columns["mean"] = paths.mean(axis=0)

    df = pd.DataFrame(columns)
    df.index.name = "month"
    return df


def historical_trajectory(
        history: Iterable[Union[HistoryEntry, Tuple[DateLike, float]]]) -> Optional[HistoricalTrajectory]:
    """Annualized growth between the first and last entries of a history.

    Returns None with fewer than two entries. The rate is 0 when the span
    is zero or the history starts at or crosses below zero, where a
    compound rate is undefined.
    """
    entries = as_history(history)
    if len(entries) < 2:
        return None

    values = pd.Series([e.net_worth for e in entries],
                       index=pd.DatetimeIndex([e.timestamp for e in entries]), dtype=float)
    first, last = values.iloc[0], values.iloc[-1]
    years = (values.index[-1] - values.index[0]).total_seconds() / 86400.0 / DAYS_PER_YEAR

    annual_return = 0.0
    if years > 0 and first > 0 and last > 0:
        annual_return = float((last / first) ** (1 / years) - 1)
    return HistoricalTrajectory(annual_return, values)


def run_multi_scenario_analysis(current_net_worth: float,
                                annual_savings: float,
                                years: int = SCENARIO_YEARS,
                                history: Optional[Iterable[Union[HistoryEntry, Tuple[DateLike, float]]]] = None,
                                scenarios: Sequence[ReturnScenario] = RETURN_SCENARIOS,
                                num_simulations: int = SCENARIO_SIMULATIONS,
                                seed: Optional[int] = None,
                                rng: Optional[np.random.Generator] = None,
                                start: Optional[DateLike] = None) -> MultiScenarioResult:
    """Simulate every return scenario and compare their final medians.

    Args:
        current_net_worth: Starting balance
        annual_savings: Contribution per year, added in equal monthly parts
        years: Horizon in whole years
        history: Optional (date, net worth) history to match to a scenario
        scenarios: Return assumptions to simulate
        num_simulations: Paths per scenario
        seed: Root seed; each scenario draws from its own spawned stream
        rng: Root generator. Takes precedence over ``seed``.
        start: Date of month 0. Defaults to today.

    Returns:
        MultiScenarioResult

    Raises:
        ConfigurationError: If years or num_simulations is below 1, or no
                            scenarios are given
    """
    if years < 1:
        raise ConfigurationError("years must be at least 1", field="years", value=years)
    if num_simulations < 1:
        raise ConfigurationError("num_simulations must be at least 1",
                                 field="num_simulations", value=num_simulations)
    if not scenarios:
        raise ConfigurationError("At least one return scenario is required", field="scenarios")

    root = RandomProcess(rng=rng, seed=seed)
    results = tuple(
        ScenarioBands(scenario, simulate_return_bands(current_net_worth, annual_savings, scenario,
                                                      years, num_simulations, stream))
        for scenario, stream in zip(scenarios, root.spawn(len(scenarios)))
    )

    start_date = pd.Timestamp(start if start is not None else pd.Timestamp.today()).normalize()
    dates = pd.DatetimeIndex([start_date + pd.DateOffset(months=m) for m in range(years * 12 + 1)])

    # max/min keep the first scenario on ties
    best = max(results, key=lambda b: b.final_median)
    worst = min(results, key=lambda b: b.final_median)

    historical = historical_trajectory(history) if history is not None else None
    closest = None
    if historical is not None:
        closest = min(results, key=lambda b: abs(b.scenario.annual_return
                                                 - historical.annual_return)).scenario.name

    logger.info("return_scenarios_completed", scenarios=len(results), years=years,
                num_simulations=num_simulations, best=best.scenario.name,
                worst=worst.scenario.name)
    return MultiScenarioResult(
        scenarios=results,
        dates=dates,
        best_case=best,
        worst_case=worst,
        historical=historical,
        closest_scenario=closest,
    )
