# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Deterministic runway: how long money lasts at the current burn rate.

The single path walks month by month with geometric compounding of the
expected return and of inflation on spending. Surplus cash above a year of
spending is reinvested. Deficits draw on cash first and then on
investments, paying tax on the share of each sale that is this month's
gain. It complements the stochastic engine in :mod:`.simulator` with a
fast, explainable baseline and withdrawal-rate guardrails.
"""

from dataclasses import dataclass, fields
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from .. import stats
from ..constants import (
    CAUTION_WITHDRAWAL_RATE,
    DAYS_PER_MONTH,
    LIQUIDITY_WARNING_MONTHS,
    MAX_BURN_INTERVAL_MONTHS,
    REAL_RETURN_INVESTMENT,
    RUNWAY_INFLATION,
    RUNWAY_MAX_MONTHS,
    RUNWAY_RESERVE_MONTHS,
    RUNWAY_TAX_RATE,
    SAFE_WITHDRAWAL_RATE,
)
from ..exceptions import ConfigurationError
from ..log import get_logger
from ..savings import DateLike

logger = get_logger(__name__)

SUSTAINABLE = "sustainable"
DEPLETING = "depleting"
UNAFFORDABLE = "unaffordable"


@dataclass(frozen=True)
class RunwayParams:
    """Inputs for a deterministic runway.

    Attributes:
        liquid_assets: Cash and equivalents
        invested_assets: Market-exposed investments
        monthly_income: Ongoing income (salary, pension, ...)
        monthly_burn: Monthly spending in today's dollars
        annual_return: Expected annual investment return
        max_months: Horizon. Default 600 (50 years).
        tax_rate: Tax on realized investment gains. Default 20%.
        inflation_rate: Annual growth of spending. Default 3%.
    """
    liquid_assets: float
    invested_assets: float
    monthly_income: float
    monthly_burn: float
    annual_return: float = REAL_RETURN_INVESTMENT
    max_months: int = RUNWAY_MAX_MONTHS
    tax_rate: float = RUNWAY_TAX_RATE
    inflation_rate: float = RUNWAY_INFLATION

    def __post_init__(self):
        if self.max_months < 1:
            raise ConfigurationError("max_months must be at least 1",
                                     field="max_months", value=self.max_months)
        for name in ("liquid_assets", "invested_assets", "monthly_income", "monthly_burn"):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(f"{name} cannot be negative", field=name, value=value)
        if not 0 <= self.tax_rate <= 1:
            raise ConfigurationError("tax_rate must be between 0 and 1",
                                     field="tax_rate", value=self.tax_rate)
        for name in ("annual_return", "inflation_rate"):
            value = getattr(self, name)
            if value <= -1:
                raise ConfigurationError(f"{name} must be greater than -100%", field=name, value=value)


@dataclass(frozen=True)
class MonthSnapshot:
    month: int
    liquid_balance: float
    invested_balance: float
    total_balance: float
    monthly_income: float
    monthly_burn: float
    net_cash_flow: float
    investment_gains: float
    taxes_paid: float
    withdrawal_rate: float
    status: str


@dataclass(frozen=True)
class Guardrails:
    """Warnings derived from a runway.

    Attributes:
        liquidity_warning: Ending cash is below six months of today's burn
        withdrawal_rate_warning: Average withdrawal rate is above 4%
        depletion_risk: Money ran out within the horizon
        years_until_depletion: Years until it ran out, None if it never did
    """
    liquidity_warning: bool
    withdrawal_rate_warning: bool
    depletion_risk: bool
    years_until_depletion: Optional[float]


@dataclass(frozen=True)
class RunwayResult:
    total_months: int
    final_balance: float
    snapshots: Tuple[MonthSnapshot, ...]
    status: str
    average_withdrawal_rate: float
    guardrails: Guardrails
    average_monthly_burn: float
    total_investment_gains: float
    total_taxes_paid: float
    depleted: bool

    def to_dataframe(self) -> pd.DataFrame:
        """One row per simulated month, indexed by month."""
        columns = [f.name for f in fields(MonthSnapshot)]
        df = pd.DataFrame([[getattr(s, c) for c in columns] for s in self.snapshots],
                          columns=columns)
        return df.set_index("month")


def withdrawal_rate(monthly_burn: float, total_assets: float) -> float:
    """Annual spending as a share of assets; infinite with no assets."""
    if total_assets <= 0:
        return float("inf")
    return monthly_burn * 12 / total_assets


def withdrawal_status(rate: float) -> str:
    """Classify a withdrawal rate against the 4% rule."""
    if rate <= SAFE_WITHDRAWAL_RATE:
        return SUSTAINABLE
    if rate <= CAUTION_WITHDRAWAL_RATE:
        return DEPLETING
    return UNAFFORDABLE


def simulate_runway(params: RunwayParams) -> RunwayResult:
    """Walk a single deterministic path until money runs out or the horizon ends.

    Args:
        params: Runway inputs

    Returns:
        RunwayResult with one snapshot per simulated month

    Example:
        >>> simulate_runway(RunwayParams(12_000, 0, 0, 1_000, inflation_rate=0.0)).total_months
        12
    """
    monthly_return = (1 + params.annual_return) ** (1 / 12) - 1
    monthly_inflation = (1 + params.inflation_rate) ** (1 / 12) - 1

    liquid = float(params.liquid_assets)
    invested = float(params.invested_assets)
    burn = float(params.monthly_burn)

    snapshots: List[MonthSnapshot] = []
    total_gains = 0.0
    total_taxes = 0.0
    depleted = False

    for month in range(1, params.max_months + 1):
        if month > 1:
            burn *= 1 + monthly_inflation

        gains = invested * monthly_return
        invested += gains
        total_gains += gains

        net_cash_flow = params.monthly_income - burn
        total_assets = liquid + invested
        taxes = 0.0

        if net_cash_flow >= 0:
            liquid += net_cash_flow
            reserve = burn * RUNWAY_RESERVE_MONTHS
            if liquid > reserve:
                invested += liquid - reserve
                liquid = reserve
        elif liquid >= -net_cash_flow:
            liquid += net_cash_flow
        else:
            shortfall = -net_cash_flow - liquid
            liquid = 0.0
            if invested >= shortfall:
                # Only this month's growth counts as realized gain
                taxes = shortfall * max(0.0, gains) / invested * params.tax_rate
                total_taxes += taxes
                invested = max(0.0, invested - shortfall - taxes)
            else:
                invested = 0.0

        rate = withdrawal_rate(burn, total_assets)
        snapshots.append(MonthSnapshot(
            month=month,
            liquid_balance=liquid,
            invested_balance=invested,
            total_balance=liquid + invested,
            monthly_income=params.monthly_income,
            monthly_burn=burn,
            net_cash_flow=net_cash_flow,
            investment_gains=gains,
            taxes_paid=taxes,
            withdrawal_rate=rate,
            status=withdrawal_status(rate),
        ))

        if liquid <= 0 and invested <= 0:
            depleted = True
            break

    total_months = len(snapshots)
    average_rate = stats.mean([s.withdrawal_rate for s in snapshots])
    if depleted:
        status = UNAFFORDABLE
    elif average_rate <= SAFE_WITHDRAWAL_RATE:
        status = SUSTAINABLE
    else:
        status = DEPLETING

    guardrails = Guardrails(
        liquidity_warning=liquid < params.monthly_burn * LIQUIDITY_WARNING_MONTHS,
        withdrawal_rate_warning=average_rate > SAFE_WITHDRAWAL_RATE,
        depletion_risk=depleted,
        years_until_depletion=total_months / 12 if depleted else None,
    )

    logger.debug("runway_simulated", total_months=total_months, depleted=depleted, status=status)
    return RunwayResult(
        total_months=total_months,
        final_balance=snapshots[-1].total_balance,
        snapshots=tuple(snapshots),
        status=status,
        average_withdrawal_rate=average_rate,
        guardrails=guardrails,
        average_monthly_burn=stats.mean([s.monthly_burn for s in snapshots]),
        total_investment_gains=total_gains,
        total_taxes_paid=total_taxes,
        depleted=depleted,
    )


@dataclass(frozen=True)
class BalanceEntry:
    """Net worth observation with its cash component."""
    date: DateLike
    net_worth: float
    cash: float

    @property
    def timestamp(self) -> pd.Timestamp:
        return pd.Timestamp(self.date)


def infer_monthly_burn(entries: Iterable[Union[BalanceEntry, Tuple[DateLike, float, float]]],
                       annual_return: float = REAL_RETURN_INVESTMENT) -> float:
    """Average monthly net spending implied by a balance history.

    Between consecutive entries, growth beyond what the invested part
    (net worth less cash) should have earned is new savings. Intervals
    where it is negative count as spending; gaps of more than 12 months
    are skipped. Returns 0 when no interval shows net spending.
    """
    history = sorted((e if isinstance(e, BalanceEntry) else BalanceEntry(*e) for e in entries),
                     key=lambda e: e.timestamp)
    monthly_return = (1 + annual_return) ** (1 / 12) - 1

    burns = []
    for prev, cur in zip(history, history[1:]):
        months = (cur.timestamp - prev.timestamp).total_seconds() / 86400.0 / DAYS_PER_MONTH
        if months <= 0 or months > MAX_BURN_INTERVAL_MONTHS:
            continue
        expected_growth = (prev.net_worth - prev.cash) * monthly_return * months
        inferred_savings = (cur.net_worth - prev.net_worth) - expected_growth
        if inferred_savings < 0:
            burns.append(-inferred_savings / months)

    return stats.mean(burns)


def break_even_income(monthly_burn: float, total_assets: float,
                      target_rate: float = SAFE_WITHDRAWAL_RATE) -> float:
    """Monthly income needed so withdrawals stay at ``target_rate``; 0 if already there."""
    sustainable_monthly = total_assets * target_rate / 12
    return max(0.0, monthly_burn - sustainable_monthly)
