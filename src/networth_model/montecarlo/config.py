# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Configuration for Monte Carlo runway simulations."""

from dataclasses import dataclass, fields
from typing import Dict, Optional

from ..constants import CASH_BUFFER_MONTHS
from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class SimulationConfig:
    """Inputs for one Monte Carlo batch.

    Monetary values are in today's dollars; rates and volatilities are
    decimals (0.15 for 15%).

    Attributes:
        current_net_worth: Cash plus investments today
        current_cash: Liquid cash today
        current_investments: Invested balance; defaults to net worth - cash
        monthly_income: Expected monthly income
        monthly_expenses: Expected monthly expenses
        savings_rate: Share of income that may be swept into investments
        investment_return_annual: Expected annual investment return
        investment_volatility_annual: Annual volatility of investment returns
        expense_volatility: Std dev of monthly expenses as a fraction
        income_volatility: Std dev of monthly income as a fraction
        emergency_probability_monthly: Chance of an emergency each month
        emergency_mean_cost: Mean emergency cost
        emergency_std_dev: Std dev of emergency cost
        num_simulations: Number of independent paths. Default 10000.
        time_horizon_months: Months to simulate. Default 120.
        inflation_rate: Annual expense inflation; None keeps expenses flat
    """
    current_net_worth: float
    current_cash: float
    monthly_income: float
    monthly_expenses: float
    savings_rate: float = 0.0
    investment_return_annual: float = 0.07
    investment_volatility_annual: float = 0.15
    expense_volatility: float = 0.0
    income_volatility: float = 0.0
    emergency_probability_monthly: float = 0.0
    emergency_mean_cost: float = 0.0
    emergency_std_dev: float = 0.0
    num_simulations: int = 10000
    time_horizon_months: int = 120
    inflation_rate: Optional[float] = None
    current_investments: Optional[float] = None

    def __post_init__(self):
        if self.num_simulations < 1:
            raise ConfigurationError("num_simulations must be at least 1",
                                     field="num_simulations", value=self.num_simulations)
        if self.time_horizon_months < 1:
            raise ConfigurationError("time_horizon_months must be at least 1",
                                     field="time_horizon_months", value=self.time_horizon_months)

        for name in ("investment_volatility_annual", "expense_volatility", "income_volatility",
                     "emergency_probability_monthly", "emergency_mean_cost", "emergency_std_dev",
                     "monthly_expenses"):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(f"{name} cannot be negative", field=name, value=value)

        if self.emergency_probability_monthly > 1:
            raise ConfigurationError("emergency_probability_monthly cannot exceed 1",
                                     field="emergency_probability_monthly",
                                     value=self.emergency_probability_monthly)
        if not 0 <= self.savings_rate <= 1:
            raise ConfigurationError("savings_rate must be between 0 and 1",
                                     field="savings_rate", value=self.savings_rate)

        if self.current_investments is None:
            object.__setattr__(self, "current_investments",
                               self.current_net_worth - self.current_cash)

    @property
    def cash_buffer_target(self) -> float:
        return self.monthly_expenses * CASH_BUFFER_MONTHS

    def to_dict(self) -> Dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class RiskProfile:
    """Volatility assumptions for a risk tolerance."""
    investment_return: float
    investment_volatility: float
    expense_volatility: float
    income_volatility: float
    emergency_probability: float


RISK_PROFILES: Dict[str, RiskProfile] = {
    "conservative": RiskProfile(0.05, 0.10, 0.10, 0.05, 0.03),
    "moderate": RiskProfile(0.07, 0.15, 0.15, 0.10, 0.05),
    "aggressive": RiskProfile(0.09, 0.20, 0.20, 0.15, 0.07),
}


def create_simulation_config(current_net_worth: float,
                             current_cash: float,
                             monthly_income: float,
                             monthly_expenses: float,
                             savings_rate: float,
                             risk_profile: str = "moderate",
                             num_simulations: int = 10000,
                             time_horizon_months: int = 120,
                             inflation_rate: Optional[float] = None) -> SimulationConfig:
    """Build a SimulationConfig from a household snapshot and risk profile.

    Emergencies cost half a month's expenses on average (std dev a quarter
    of a month's expenses).
    Expenses stay flat unless ``inflation_rate`` is given; a 3% rate
    noticeably shortens long runways.

    Raises:
        ConfigurationError: If the risk profile is unknown or the resulting
                            configuration is invalid
    """
    if risk_profile not in RISK_PROFILES:
        raise ConfigurationError(f"Unknown risk profile: {risk_profile}",
                                 field="risk_profile", value=risk_profile)
    profile = RISK_PROFILES[risk_profile]

    return SimulationConfig(
        current_net_worth=current_net_worth,
        current_cash=current_cash,
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        savings_rate=savings_rate,
        investment_return_annual=profile.investment_return,
        investment_volatility_annual=profile.investment_volatility,
        expense_volatility=profile.expense_volatility,
        income_volatility=profile.income_volatility,
        emergency_probability_monthly=profile.emergency_probability,
        emergency_mean_cost=monthly_expenses * 0.5,
        emergency_std_dev=monthly_expenses * 0.25,
        num_simulations=num_simulations,
        time_horizon_months=time_horizon_months,
        inflation_rate=inflation_rate,
    )
