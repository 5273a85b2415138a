# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Career profile and asset allocation inputs for deterministic projections.

All structures are frozen dataclasses validated on construction, so an
invalid allocation fails where it is built rather than deep inside a
projection loop.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..constants import (
    ALLOCATION_TOLERANCE,
    DEFAULT_CASH_PERCENT,
    DEFAULT_INVESTMENT_PERCENT,
    DEFAULT_OTHER_PERCENT,
    DEFAULT_START_AGE,
    DEFAULT_TAX_DRAG,
    MAX_SAVINGS_RATE,
    REAL_RETURN_INVESTMENT,
)
from ..exceptions import ConfigurationError
from ..reference_data import CAREER_LEVELS


def _check_fraction(name: str, value: float) -> None:
    if value < 0 or value > 1:
        raise ConfigurationError(f"{name} must be between 0 and 1", field=name, value=value)


@dataclass(frozen=True)
class TaxTreatment:
    """Split of invested assets between taxable and tax-advantaged accounts.

    Attributes:
        taxable_percent: Share held in taxable brokerage accounts
        tax_advantage_percent: Share held in 401k/IRA style accounts
    """
    taxable_percent: float
    tax_advantage_percent: float

    def __post_init__(self):
        _check_fraction("taxable_percent", self.taxable_percent)
        _check_fraction("tax_advantage_percent", self.tax_advantage_percent)
        total = self.taxable_percent + self.tax_advantage_percent
        if abs(total - 1.0) > ALLOCATION_TOLERANCE:
            raise ConfigurationError("Tax treatment must sum to 1.0",
                                     field="tax_treatment", value=total)


@dataclass(frozen=True)
class TargetAllocation:
    """Target split of net worth across cash, investments and other assets.

    ``tax_treatment`` is optional. When it is None the projector applies
    the tax drag to all investment growth, which is how profiles saved
    before tax treatment existed are projected.
    """
    cash_percent: float = DEFAULT_CASH_PERCENT
    investment_percent: float = DEFAULT_INVESTMENT_PERCENT
    other_percent: float = DEFAULT_OTHER_PERCENT
    tax_treatment: Optional[TaxTreatment] = None

    def __post_init__(self):
        _check_fraction("cash_percent", self.cash_percent)
        _check_fraction("investment_percent", self.investment_percent)
        _check_fraction("other_percent", self.other_percent)
        total = self.cash_percent + self.investment_percent + self.other_percent
        if abs(total - 1.0) > ALLOCATION_TOLERANCE:
            raise ConfigurationError("Allocation percentages must sum to 1.0",
                                     field="target_allocation", value=total)

    @property
    def taxable_fraction(self) -> float:
        """Fraction of investment growth subject to tax drag."""
        if self.tax_treatment is None:
            return 1.0
        return self.tax_treatment.taxable_percent


@dataclass(frozen=True)
class AssetSplit:
    """Net worth decomposed by a target allocation."""
    cash: float
    investments: float
    other: float

    @property
    def total(self) -> float:
        return self.cash + self.investments + self.other


def split_net_worth(net_worth: float, allocation: TargetAllocation) -> AssetSplit:
    """Decompose a balance using the allocation percentages.

    The investment bucket absorbs any rounding so the three parts always
    add back up to ``net_worth``, even for allocations that are off by up
    to the 1% tolerance.
    """
    total = allocation.cash_percent + allocation.investment_percent + allocation.other_percent
    cash = net_worth * allocation.cash_percent / total
    other = net_worth * allocation.other_percent / total
    return AssetSplit(cash=cash, investments=net_worth - cash - other, other=other)


@dataclass(frozen=True)
class CareerProfile:
    """Inputs for a career-aware wealth projection.

    Attributes:
        current_age: Age today
        occupation: Occupation key in the wage table (unknown keys use "other")
        metro: Metro key in the wage table (unknown keys use "other")
        start_age: Age the career started
        level: Career level override; derived from years worked when None
        savings_rate: Share of after-tax income saved; inferred or defaulted
                      when None, clamped to [0, 0.9] otherwise
        annual_return: Real equity return for the investment bucket
        tax_drag: Share of taxable investment growth lost to tax
        target_allocation: Allocation used to split the balance every year
        current_net_worth: Actual net worth today, if known
    """
    current_age: int
    occupation: str
    metro: str
    start_age: int = DEFAULT_START_AGE
    level: Optional[str] = None
    savings_rate: Optional[float] = None
    annual_return: float = REAL_RETURN_INVESTMENT
    tax_drag: float = DEFAULT_TAX_DRAG
    target_allocation: TargetAllocation = field(default_factory=TargetAllocation)
    current_net_worth: Optional[float] = None

    def __post_init__(self):
        if self.current_age < self.start_age:
            raise ConfigurationError("current_age cannot precede start_age",
                                     field="current_age", value=self.current_age)
        if self.level is not None and self.level not in CAREER_LEVELS:
            raise ConfigurationError(f"Unknown career level: {self.level}",
                                     field="level", value=self.level)
        _check_fraction("tax_drag", self.tax_drag)
        if self.savings_rate is not None:
            clamped = min(max(self.savings_rate, 0.0), MAX_SAVINGS_RATE)
            object.__setattr__(self, "savings_rate", clamped)

    @property
    def years_worked(self) -> int:
        return max(0, self.current_age - self.start_age)


def build_career_profile(current_age: int,
                         occupation: str,
                         metro: str,
                         cash_percent: float = DEFAULT_CASH_PERCENT,
                         investment_percent: float = DEFAULT_INVESTMENT_PERCENT,
                         other_percent: float = DEFAULT_OTHER_PERCENT,
                         taxable_percent: Optional[float] = None,
                         **kwargs) -> CareerProfile:
    """Build a CareerProfile from flat keyword arguments.

    ``taxable_percent`` creates a TaxTreatment with the remainder treated
    as tax-advantaged; leaving it out keeps the flat tax drag behaviour.
    Remaining keyword arguments are passed to CareerProfile.

    Example:
        >>> profile = build_career_profile(
        ...     35, "software_engineer", "seattle",
        ...     cash_percent=0.1, investment_percent=0.9, other_percent=0.0,
        ...     taxable_percent=0.3, savings_rate=0.3)
    """
    tax_treatment = None
    if taxable_percent is not None:
        tax_treatment = TaxTreatment(taxable_percent, 1.0 - taxable_percent)

    allocation = TargetAllocation(
        cash_percent=cash_percent,
        investment_percent=investment_percent,
        other_percent=other_percent,
        tax_treatment=tax_treatment,
    )
    return CareerProfile(
        current_age=current_age,
        occupation=occupation,
        metro=metro,
        target_allocation=allocation,
        **kwargs,
    )
