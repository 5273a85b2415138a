# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Financial independence (FIRE) targets.

A FIRE number is annual expenses divided by a safe withdrawal rate. Coast
FIRE is the balance that grows into the regular FIRE number by age 65
without further contributions. Barista FIRE is the smaller balance that
suffices when part-time income still covers some of the spending.
"""

from dataclasses import dataclass
from typing import Optional

from ..constants import (
    BARISTA_WITHDRAWAL_RATE,
    COAST_FIRE_TARGET_AGE,
    COUPLE_EXPENSE_MULTIPLIER,
    DEFAULT_PART_TIME_INCOME,
    FAT_FIRE_WITHDRAWAL_RATE,
    LEAN_FIRE_WITHDRAWAL_RATE,
    MAX_PROJECTION_YEARS,
    MAX_SPEND_INCOME_SHARE,
    MAX_SPEND_TOLERANCE,
    REAL_RETURN_INVESTMENT,
    REGULAR_FIRE_WITHDRAWAL_RATE,
)


@dataclass(frozen=True)
class FireTarget:
    amount: float
    years_away: Optional[int]


@dataclass(frozen=True)
class CoastFire:
    amount: float
    target_age: int
    achieved: bool


@dataclass(frozen=True)
class FireNumbers:
    lean: FireTarget
    regular: FireTarget
    fat: FireTarget
    coast: CoastFire


@dataclass(frozen=True)
class BaristaFire:
    """Portfolio target when part-time work covers part of spending.

    Attributes:
        amount: Balance whose 3% withdrawals cover the remaining expenses
        years_away: Years to reach it; 0 if reached, None if unreachable
        achieved: Whether the current balance already covers it
        part_time_income_needed: Income that would close the gap today
    """
    amount: float
    years_away: Optional[int]
    achieved: bool
    part_time_income_needed: float


@dataclass(frozen=True)
class MaxSpend:
    max_annual_expenses: float
    max_monthly_spend: float
    fire_number: float


def fire_number(annual_expenses: float, withdrawal_rate: float = LEAN_FIRE_WITHDRAWAL_RATE) -> float:
    """Net worth needed to sustain ``annual_expenses`` at a withdrawal rate."""
    if withdrawal_rate <= 0:
        raise ValueError("withdrawal_rate must be positive")
    return annual_expenses / withdrawal_rate


def years_to_target(current_net_worth: float, annual_savings: float, target: float,
                    annual_return: float = REAL_RETURN_INVESTMENT) -> Optional[int]:
    """Whole years of compounding plus savings until ``target`` is reached.

    Returns 0 when already there and None when unreachable within 100 years.
    """
    if current_net_worth >= target:
        return 0
    if annual_savings <= 0 and (current_net_worth <= 0 or annual_return <= 0):
        return None

    wealth, years = current_net_worth, 0
    while wealth < target and years < MAX_PROJECTION_YEARS:
        wealth = wealth * (1 + annual_return) + annual_savings
        years += 1
    return years if wealth >= target else None


def coast_fire_number(target_amount: float, current_age: int,
                      target_age: int = COAST_FIRE_TARGET_AGE,
                      annual_return: float = REAL_RETURN_INVESTMENT) -> float:
    """Balance today that compounds into ``target_amount`` by ``target_age``."""
    years = max(0, target_age - current_age)
    return target_amount / (1 + annual_return) ** years


def fire_numbers(current_net_worth: float, annual_expenses: float, annual_savings: float,
                 current_age: int, annual_return: float = REAL_RETURN_INVESTMENT) -> FireNumbers:
    """Lean, regular, fat and coast FIRE targets with time to reach each."""
    def target(rate: float) -> FireTarget:
        amount = fire_number(annual_expenses, rate)
        return FireTarget(amount, years_to_target(current_net_worth, annual_savings,
                                                  amount, annual_return))

    regular = target(REGULAR_FIRE_WITHDRAWAL_RATE)
    coast_amount = coast_fire_number(regular.amount, current_age, annual_return=annual_return)
    return FireNumbers(
        lean=target(LEAN_FIRE_WITHDRAWAL_RATE),
        regular=regular,
        fat=target(FAT_FIRE_WITHDRAWAL_RATE),
        coast=CoastFire(coast_amount, COAST_FIRE_TARGET_AGE, current_net_worth >= coast_amount),
    )


def required_monthly_contribution(current_net_worth: float, target: float, years: float,
                                  annual_return: float = REAL_RETURN_INVESTMENT) -> float:
    """Level monthly contribution that reaches ``target`` in ``years``.

    Compounds monthly at ``annual_return / 12`` and solves the future
    value of an annuity for the payment. Returns 0 when growth alone gets
    there or the horizon is not positive.
    """
    if years <= 0 or current_net_worth >= target:
        return 0.0

    monthly_rate = annual_return / 12
    months = years * 12
    growth = (1 + monthly_rate) ** months
    remaining = target - current_net_worth * growth
    if remaining <= 0:
        return 0.0
    if monthly_rate == 0:
        return remaining / months
    return max(0.0, remaining * monthly_rate / (growth - 1))


def barista_fire(current_net_worth: float, annual_savings: float, annual_expenses: float,
                 part_time_income: float = DEFAULT_PART_TIME_INCOME,
                 annual_return: float = REAL_RETURN_INVESTMENT) -> BaristaFire:
    """Target when part-time income covers some spending, at a 3% withdrawal rate."""
    amount = fire_number(max(0.0, annual_expenses - part_time_income), BARISTA_WITHDRAWAL_RATE)
    achieved = current_net_worth >= amount
    return BaristaFire(
        amount=amount,
        years_away=0 if achieved else years_to_target(current_net_worth, annual_savings,
                                                      amount, annual_return),
        achieved=achieved,
        part_time_income_needed=max(0.0, annual_expenses
                                    - current_net_worth * BARISTA_WITHDRAWAL_RATE),
    )


def max_spend_for_years(current_net_worth: float, annual_income: float, years: int,
                        annual_return: float = REAL_RETURN_INVESTMENT,
                        withdrawal_rate: float = LEAN_FIRE_WITHDRAWAL_RATE,
                        couple: bool = False) -> MaxSpend:
    """Highest annual spending that still reaches FIRE within ``years``.

    Spending both lowers savings and raises the FIRE number, so the
    answer is found by bisection to within $100 a year, searching up to
    95% of income. ``couple`` scales household spending by 1.7 while the
    result stays per person.

    Example:
        >>> max_spend_for_years(2_000_000, 0, years=0).max_annual_expenses
        80000.0
    """
    multiplier = COUPLE_EXPENSE_MULTIPLIER if couple else 1.0

    if years <= 0:
        # Spend only what today's balance sustains
        best = current_net_worth * withdrawal_rate / multiplier
    else:
        low, high, best = 0.0, annual_income * MAX_SPEND_INCOME_SHARE, 0.0
        while high - low > MAX_SPEND_TOLERANCE:
            mid = (low + high) / 2
            household = mid * multiplier
            needed = years_to_target(current_net_worth, annual_income - household,
                                     fire_number(household, withdrawal_rate), annual_return)
            if needed is not None and needed <= years:
                low = best = mid
            else:
                high = mid

    return MaxSpend(
        max_annual_expenses=best,
        max_monthly_spend=best / 12,
        fire_number=fire_number(best * multiplier, withdrawal_rate),
    )
