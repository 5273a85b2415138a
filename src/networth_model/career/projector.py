# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Deterministic, career-aware net worth projections.

Each simulated year the projector:

1. Resolves the career level from years in the workforce and prices it with
   the wage table, interpolating toward the next level.
2. Saves a fixed share of after-tax income.
3. Splits the existing balance by the target allocation (a full rebalance
   every year, ignoring realized-gains drag from rebalancing) and grows
   each bucket at its own rate. Tax drag only applies to the taxable share
   of investment growth.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd
from scipy.optimize import brentq

from ..constants import (
    DEFAULT_SAVINGS_RATE,
    MAX_PROJECTION_YEARS,
    REAL_RETURN_CASH,
    REAL_RETURN_OTHER,
)
from ..log import get_logger
from ..reference_data import WageLookup, WageTable, WealthPercentileLookup, WealthPercentileTable
from ..savings import HistoryEntry, SavingsRateInferencer
from .profile import CareerProfile, split_net_worth
from .wages import level_for_years, position_for_years, wage_with_progression, years_range_for_level

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectionScenario:
    """Named what-if applied on top of a profile.

    Attributes:
        name: Display name
        description: Short explanation of the scenario
        annual_return: Equity return override; None keeps the profile's
        savings_rate_modifier: Multiplier on the profile's savings rate
        level_progression_boost: Years added to the career clock
    """
    name: str
    description: str = ""
    annual_return: Optional[float] = None
    savings_rate_modifier: float = 1.0
    level_progression_boost: int = 0


PROJECTION_SCENARIOS: Dict[str, ProjectionScenario] = {
    "current": ProjectionScenario("Current Path", "Based on your historical growth rate", 0.07),
    "conservative": ProjectionScenario("Conservative", "5% real return, standard progression", 0.05),
    "optimistic": ProjectionScenario("Optimistic", "9% real return, faster progression", 0.09,
                                     level_progression_boost=1),
    "fast_track": ProjectionScenario("Fast Track", "Promoted 2 years early at each level", 0.07,
                                     level_progression_boost=2),
    "frugal": ProjectionScenario("High Savings", "40% savings rate", 0.07,
                                 savings_rate_modifier=1.6),
}


@dataclass(frozen=True)
class YearRecord:
    """Projected state at the end of one year of age."""
    age: int
    expected_nw: float
    income: float
    savings: float
    investment_growth: float
    level: str


@dataclass(frozen=True)
class GrowthBreakdown:
    """One year of growth on a balance, by bucket."""
    cash: float
    investments: float
    other: float

    @property
    def total(self) -> float:
        return self.cash + self.investments + self.other


@dataclass(frozen=True)
class ProjectionAssumptions:
    avg_savings_rate: float
    avg_return: float
    portfolio_return: float
    effective_return: float
    tax_drag: float
    avg_income_growth: float
    total_income: float
    total_savings: float
    total_investment_growth: float


@dataclass(frozen=True)
class Comparison:
    actual_net_worth: float
    delta: float
    delta_percent: float
    is_ahead: bool


@dataclass(frozen=True)
class WealthModelOutput:
    """Result of a deterministic projection."""
    expected_net_worth: float
    year_by_year: Tuple[YearRecord, ...]
    scf_percentile: float
    assumptions: ProjectionAssumptions
    comparison: Optional[Comparison] = None

    def to_dataframe(self) -> pd.DataFrame:
        """Year-by-year records as a DataFrame indexed by age."""
        df = pd.DataFrame([vars(record) for record in self.year_by_year],
                          columns=["age", "expected_nw", "income", "savings",
                                   "investment_growth", "level"])
        return df.set_index("age")


@dataclass(frozen=True)
class WealthComparison:
    """Actual net worth against the profile's expectation and age cohort."""
    actual_net_worth: float
    expected_net_worth: float
    delta: float
    delta_percent: float
    is_ahead: bool
    percentile: float
    median_for_age: float
    vs_median: float


@dataclass(frozen=True)
class Milestone:
    amount: float
    years: Optional[int]


DEFAULT_MILESTONES = (100000, 250000, 500000, 750000, 1000000, 2000000, 3000000, 5000000)


def milestones(current_net_worth: float,
               annual_savings: float,
               annual_return: float = 0.07,
               amounts: Sequence[float] = DEFAULT_MILESTONES) -> List[Milestone]:
    """Years until each milestone is reached with steady savings.

    ``years`` is 0 for milestones already reached and None for those that
    are unreachable (no savings) or more than 100 years away.
    """
    results = []
    for amount in amounts:
        if current_net_worth >= amount:
            results.append(Milestone(amount, 0))
            continue
        if annual_savings <= 0:
            results.append(Milestone(amount, None))
            continue

        wealth, years = current_net_worth, 0
        while wealth < amount and years < MAX_PROJECTION_YEARS:
            wealth = wealth * (1 + annual_return) + annual_savings
            years += 1
        results.append(Milestone(amount, years if wealth >= amount else None))
    return results


class CareerProjector:
    """Projects net worth year by year from a career profile.

    Example:
        >>> projector = CareerProjector()
        >>> profile = CareerProfile(current_age=30, occupation="software_engineer",
        ...                         metro="seattle", savings_rate=0.25)
        >>> output = projector.project(profile, target_age=45)
        >>> print(f"{output.expected_net_worth:,.0f}")
    """

    def __init__(self,
                 wages: Optional[WageLookup] = None,
                 wealth_percentiles: Optional[WealthPercentileLookup] = None,
                 inferencer: Optional[SavingsRateInferencer] = None,
                 cash_return: float = REAL_RETURN_CASH,
                 other_return: float = REAL_RETURN_OTHER):
        """Initialize the projector.

        Args:
            wages: Wage lookup. Defaults to the bundled national table.
            wealth_percentiles: Age-cohort net worth table for percentile ranks
            inferencer: Used when a profile has no savings rate but a history
            cash_return: Real return on the cash bucket
            other_return: Real return on the other bucket
        """
        self.wages = wages or WageTable()
        self.wealth_percentiles = wealth_percentiles or WealthPercentileTable()
        self.inferencer = inferencer or SavingsRateInferencer()
        self.cash_return = cash_return
        self.other_return = other_return

    # ----- returns -----

    def investment_tax_factor(self, profile: CareerProfile) -> float:
        """Share of investment growth kept after tax drag."""
        return 1 - profile.tax_drag * profile.target_allocation.taxable_fraction

    def portfolio_return(self, profile: CareerProfile,
                         annual_return: Optional[float] = None) -> float:
        """Allocation-weighted pre-tax return."""
        equity = profile.annual_return if annual_return is None else annual_return
        alloc = profile.target_allocation
        return (alloc.cash_percent * self.cash_return
                + alloc.investment_percent * equity
                + alloc.other_percent * self.other_return)

    def effective_return(self, profile: CareerProfile,
                         annual_return: Optional[float] = None) -> float:
        """Allocation-weighted return after tax drag."""
        equity = profile.annual_return if annual_return is None else annual_return
        alloc = profile.target_allocation
        return (alloc.cash_percent * self.cash_return
                + alloc.investment_percent * equity * self.investment_tax_factor(profile)
                + alloc.other_percent * self.other_return)

    def annual_growth(self, balance: float, profile: CareerProfile,
                      annual_return: Optional[float] = None) -> GrowthBreakdown:
        """One year of growth on ``balance`` after rebalancing to target."""
        equity = profile.annual_return if annual_return is None else annual_return
        split = split_net_worth(balance, profile.target_allocation)
        return GrowthBreakdown(
            cash=split.cash * self.cash_return,
            investments=split.investments * equity * self.investment_tax_factor(profile),
            other=split.other * self.other_return,
        )

    # ----- savings -----

    def resolve_savings_rate(self, profile: CareerProfile,
                             history: Optional[Sequence[HistoryEntry]] = None) -> float:
        """Explicit savings rate, else inferred from history, else the default."""
        if profile.savings_rate is not None:
            return profile.savings_rate
        if history:
            level, years_in_level = self._position(profile, profile.current_age)
            income = wage_with_progression(self.wages, profile.occupation, level,
                                           profile.metro, years_in_level).after_tax_comp
            return self.inferencer.infer(history, income, profile.annual_return)
        return DEFAULT_SAVINGS_RATE

    # ----- projections -----

    def expected_wealth(self, profile: CareerProfile,
                        history: Optional[Sequence[HistoryEntry]] = None) -> WealthModelOutput:
        """Net worth the career should have produced by the current age.

        Accumulates from zero at ``start_age`` through ``current_age``. When
        the profile carries ``current_net_worth`` the output includes a
        comparison against it.
        """
        savings_rate = self.resolve_savings_rate(profile, history)
        records, totals = self._accumulate(
            profile, profile.start_age, profile.current_age, opening_balance=0.0,
            savings_rate=savings_rate, annual_return=profile.annual_return,
            level_boost=0, grow_first_year=True,
        )
        output = self._build_output(profile, records, totals, savings_rate,
                                    profile.annual_return, profile.current_age)

        if profile.current_net_worth is not None:
            expected = output.expected_net_worth
            delta = profile.current_net_worth - expected
            output = replace(output, comparison=Comparison(
                actual_net_worth=profile.current_net_worth,
                delta=delta,
                delta_percent=delta / expected if expected > 0 else 0.0,
                is_ahead=delta >= 0,
            ))
        return output

    def project(self, profile: CareerProfile,
                target_age: Optional[int] = None,
                scenario: Optional[ProjectionScenario] = None,
                history: Optional[Sequence[HistoryEntry]] = None) -> WealthModelOutput:
        """Project from the current age to ``target_age``.

        Starts from ``profile.current_net_worth`` when known, otherwise from
        :meth:`expected_wealth`. A target equal to the current age yields a
        single-point series.
        """
        if profile.current_net_worth is not None:
            opening = profile.current_net_worth
        else:
            opening = self.expected_wealth(profile, history).expected_net_worth
        return self.scenario_projection(profile, opening, target_age, scenario, history)

    def scenario_projection(self, profile: CareerProfile,
                            current_net_worth: float,
                            target_age: Optional[int] = None,
                            scenario: Optional[ProjectionScenario] = None,
                            history: Optional[Sequence[HistoryEntry]] = None) -> WealthModelOutput:
        """Project forward from a supplied net worth under a scenario.

        Args:
            profile: Career profile
            current_net_worth: Balance at the current age
            target_age: Last age to project (defaults to the current age)
            scenario: Optional return/savings/progression adjustments
            history: Net worth history used to infer a missing savings rate

        Returns:
            WealthModelOutput with one record per age, current age included
        """
        target_age = profile.current_age if target_age is None else target_age
        if target_age < profile.current_age:
            raise ValueError(f"target_age {target_age} precedes current age {profile.current_age}")

        scenario = scenario or ProjectionScenario("Baseline")
        annual_return = profile.annual_return if scenario.annual_return is None else scenario.annual_return
        savings_rate = self.resolve_savings_rate(profile, history) * scenario.savings_rate_modifier

        records, totals = self._accumulate(
            profile, profile.current_age, target_age, opening_balance=current_net_worth,
            savings_rate=savings_rate, annual_return=annual_return,
            level_boost=scenario.level_progression_boost, grow_first_year=False,
        )
        logger.debug("scenario_projected", scenario=scenario.name,
                     target_age=target_age, final=records[-1].expected_nw)
        return self._build_output(profile, records, totals, savings_rate, annual_return, target_age)

    def generate_scenarios(self, profile: CareerProfile,
                           current_net_worth: float,
                           target_age: int = 65,
                           scenarios: Optional[Dict[str, ProjectionScenario]] = None
                           ) -> Dict[str, WealthModelOutput]:
        """Project every named scenario from the same starting point."""
        scenarios = PROJECTION_SCENARIOS if scenarios is None else scenarios
        return {
            key: self.scenario_projection(profile, current_net_worth, target_age, scenario)
            for key, scenario in scenarios.items()
        }

    # ----- comparisons and targets -----

    def compare_to_expected(self, profile: CareerProfile,
                            actual_net_worth: float) -> WealthComparison:
        """Compare an actual net worth to the profile's expectation and cohort."""
        model = self.expected_wealth(replace(profile, current_net_worth=actual_net_worth))
        median = self.wealth_percentiles.median_for_age(profile.current_age)
        return WealthComparison(
            actual_net_worth=actual_net_worth,
            expected_net_worth=model.expected_net_worth,
            delta=model.comparison.delta,
            delta_percent=model.comparison.delta_percent,
            is_ahead=model.comparison.is_ahead,
            percentile=self.wealth_percentiles.percentile_for_age(actual_net_worth,
                                                                  profile.current_age),
            median_for_age=median,
            vs_median=actual_net_worth - median,
        )

    def age_to_target(self, profile: CareerProfile, target_net_worth: float,
                      max_age: int = 80) -> Optional[Tuple[int, int]]:
        """(age, years from now) when the projection first reaches a target.

        Returns None when the target is not reached by ``max_age``.
        """
        if (profile.current_net_worth or 0) >= target_net_worth:
            return profile.current_age, 0

        projection = self.project(profile, max(max_age, profile.current_age))
        for record in projection.year_by_year:
            if record.expected_nw >= target_net_worth:
                return record.age, record.age - profile.current_age
        return None

    def required_savings_rate(self, profile: CareerProfile,
                              target_net_worth: float,
                              target_age: int,
                              tolerance: float = 0.001) -> Optional[float]:
        """Smallest savings rate (1%-80%) reaching a target by an age.

        Solves for the rate with Brent's method. Returns 0.0 when the target
        is already met, and None when even 80% falls more than 5% short
        (80% when it is short by less).
        """
        current = profile.current_net_worth or 0.0
        if current >= target_net_worth:
            return 0.0

        def final_net_worth(rate: float) -> float:
            trial = replace(profile, savings_rate=rate)
            return self.scenario_projection(trial, current, target_age).expected_net_worth

        low, high = 0.01, 0.80
        shortfall_at_max = final_net_worth(high) - target_net_worth
        if shortfall_at_max < 0:
            return None if shortfall_at_max < -0.05 * target_net_worth else high
        if final_net_worth(low) >= target_net_worth:
            return low

        rate = brentq(lambda r: final_net_worth(r) - target_net_worth, low, high, xtol=tolerance)
        return min(float(rate), high)

    # ----- internals -----

    def _career_offset(self, profile: CareerProfile) -> int:
        """Years to shift the career clock so an explicit level holds today."""
        if profile.level is None:
            return 0
        if level_for_years(profile.years_worked) == profile.level:
            return 0
        return years_range_for_level(profile.level)[0] - profile.years_worked

    def _position(self, profile: CareerProfile, age: int, boost: int = 0) -> Tuple[str, float]:
        years = age - profile.start_age + self._career_offset(profile) + boost
        return position_for_years(years)

    def _accumulate(self, profile: CareerProfile, first_age: int, last_age: int,
                    opening_balance: float, savings_rate: float, annual_return: float,
                    level_boost: int, grow_first_year: bool):
        balance = opening_balance
        records: List[YearRecord] = []
        totals = {"income": 0.0, "savings": 0.0, "growth": 0.0}

        for age in range(first_age, last_age + 1):
            level, years_in_level = self._position(profile, age, level_boost)
            wage = wage_with_progression(self.wages, profile.occupation, level,
                                         profile.metro, years_in_level)
            income = wage.after_tax_comp
            annual_savings = income * savings_rate

            growth = 0.0
            if grow_first_year or age > first_age:
                growth = self.annual_growth(balance, profile, annual_return).total
                balance = balance + annual_savings + growth
                totals["income"] += income
                totals["savings"] += annual_savings
                totals["growth"] += growth

            records.append(YearRecord(
                age=age,
                expected_nw=balance,
                income=wage.total_comp,
                savings=annual_savings,
                investment_growth=growth,
                level=level,
            ))
        return records, totals

    def _build_output(self, profile: CareerProfile, records: List[YearRecord],
                      totals: Dict[str, float], savings_rate: float,
                      annual_return: float, percentile_age: int) -> WealthModelOutput:
        first_income = records[0].income
        last_income = records[-1].income
        if len(records) > 1 and first_income > 0:
            income_growth = (last_income / first_income) ** (1 / (len(records) - 1)) - 1
        else:
            income_growth = 0.0

        final = records[-1].expected_nw
        return WealthModelOutput(
            expected_net_worth=final,
            year_by_year=tuple(records),
            scf_percentile=self.wealth_percentiles.percentile_for_age(final, percentile_age),
            assumptions=ProjectionAssumptions(
                avg_savings_rate=savings_rate,
                avg_return=annual_return,
                portfolio_return=self.portfolio_return(profile, annual_return),
                effective_return=self.effective_return(profile, annual_return),
                tax_drag=profile.tax_drag,
                avg_income_growth=income_growth,
                total_income=totals["income"],
                total_savings=totals["savings"],
                total_investment_growth=totals["growth"],
            ),
        )
