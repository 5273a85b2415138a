# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Read-only reference tables used by the career projector.

The default tables are simplified national figures (BLS OES 2024 total
compensation, BEA regional price parities, SCF 2022 net worth by age).
They are plain lookups with an ``other`` fallback bucket and can be
replaced by any object satisfying the :class:`WageLookup` or
:class:`WealthPercentileLookup` protocols.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

from .constants import FEDERAL_EFFECTIVE_TAX

CAREER_LEVELS: Tuple[str, ...] = ("entry", "mid", "senior", "staff", "principal", "executive")

FALLBACK_KEY = "other"

TECH_OCCUPATIONS = frozenset({"software_engineer", "product_manager", "data_scientist"})


@dataclass(frozen=True)
class MetroData:
    """Cost of living and tax data for a metro area.

    Attributes:
        col_index: Cost of living index (Austin = 100)
        median_rent: Monthly one-bedroom median rent
        median_home: Median home price
        tax_burden: Effective state + local income tax rate
        tech_hub: Whether tech roles earn a location premium
    """
    col_index: float
    median_rent: float
    median_home: float
    tax_burden: float
    tech_hub: bool


@dataclass(frozen=True)
class WageEstimate:
    """Compensation breakdown for one (occupation, level, metro) lookup."""
    base_salary: float
    bonus: float
    equity: float
    total_comp: float
    after_tax_comp: float
    take_home_pay: float  # after_tax_comp in Austin-equivalent dollars

    def scaled(self, total_comp: float) -> "WageEstimate":
        """Rescale every component to a new total, keeping the proportions."""
        if self.total_comp == 0:
            return self
        ratio = total_comp / self.total_comp
        return WageEstimate(
            base_salary=round(self.base_salary * ratio),
            bonus=round(self.bonus * ratio),
            equity=round(self.equity * ratio),
            total_comp=round(total_comp),
            after_tax_comp=round(self.after_tax_comp * ratio),
            take_home_pay=round(self.take_home_pay * ratio),
        )


@runtime_checkable
class WageLookup(Protocol):
    """Anything that can price a career position."""

    def estimate(self, occupation: str, level: str, metro: str) -> WageEstimate:
        ...


@runtime_checkable
class WealthPercentileLookup(Protocol):
    """Anything that can rank a net worth against an age cohort."""

    def percentile_for_age(self, net_worth: float, age: float) -> float:
        ...


DEFAULT_METROS: Dict[str, MetroData] = {
    "san_francisco": MetroData(145, 3200, 1350000, 0.13, True),
    "san_jose": MetroData(142, 2900, 1450000, 0.13, True),
    "new_york": MetroData(138, 3500, 750000, 0.12, True),
    "seattle": MetroData(122, 2200, 850000, 0.00, True),
    "los_angeles": MetroData(125, 2400, 950000, 0.13, True),
    "boston": MetroData(128, 2800, 750000, 0.09, True),
    "washington_dc": MetroData(120, 2200, 650000, 0.09, False),
    "austin": MetroData(100, 1600, 550000, 0.00, True),
    "denver": MetroData(108, 1800, 600000, 0.04, True),
    "chicago": MetroData(105, 1800, 350000, 0.10, False),
    "san_diego": MetroData(118, 2300, 900000, 0.13, False),
    "portland": MetroData(112, 1700, 550000, 0.09, False),
    "atlanta": MetroData(95, 1600, 400000, 0.06, False),
    "dallas": MetroData(95, 1500, 400000, 0.00, False),
    "phoenix": MetroData(98, 1400, 450000, 0.04, False),
    "minneapolis": MetroData(102, 1400, 350000, 0.07, False),
    "philadelphia": MetroData(108, 1600, 350000, 0.06, False),
    "miami": MetroData(110, 2200, 550000, 0.00, False),
    "raleigh": MetroData(95, 1500, 450000, 0.05, True),
    "charlotte": MetroData(92, 1400, 400000, 0.05, False),
    "nashville": MetroData(95, 1600, 450000, 0.00, False),
    "salt_lake_city": MetroData(98, 1400, 550000, 0.05, True),
    "detroit": MetroData(90, 1200, 250000, 0.04, False),
    "houston": MetroData(92, 1300, 350000, 0.00, False),
    "tampa": MetroData(95, 1600, 400000, 0.00, False),
    "pittsburgh": MetroData(88, 1200, 230000, 0.06, False),
    "columbus": MetroData(90, 1200, 300000, 0.04, False),
    "remote": MetroData(100, 1500, 400000, 0.05, False),
    "other": MetroData(100, 1400, 350000, 0.05, False),
}

# National median total compensation by occupation, ordered as CAREER_LEVELS
_COMP_ROWS: Dict[str, Tuple[int, ...]] = {
    "software_engineer": (110000, 160000, 220000, 320000, 420000, 600000),
    "product_manager": (100000, 145000, 200000, 290000, 380000, 550000),
    "data_scientist": (105000, 150000, 210000, 300000, 400000, 580000),
    "finance": (85000, 120000, 180000, 280000, 400000, 700000),
    "healthcare": (60000, 85000, 120000, 160000, 220000, 400000),
    "legal": (90000, 140000, 200000, 300000, 450000, 800000),
    "consulting": (95000, 140000, 200000, 300000, 400000, 600000),
    "marketing": (60000, 85000, 120000, 170000, 230000, 380000),
    "sales": (70000, 110000, 160000, 220000, 300000, 500000),
    "operations": (55000, 75000, 100000, 140000, 190000, 300000),
    "teacher": (45000, 55000, 65000, 80000, 100000, 150000),
    "government": (55000, 70000, 90000, 115000, 145000, 200000),
    "other": (50000, 70000, 95000, 130000, 175000, 260000),
}

DEFAULT_BASE_COMP: Dict[str, Dict[str, int]] = {
    occupation: dict(zip(CAREER_LEVELS, row)) for occupation, row in _COMP_ROWS.items()
}

# Location premium for tech roles in tech hubs
DEFAULT_TECH_HUB_PREMIUMS: Dict[str, float] = {
    "san_francisco": 1.35,
    "san_jose": 1.32,
    "new_york": 1.25,
    "seattle": 1.22,
    "boston": 1.15,
    "los_angeles": 1.12,
    "denver": 1.08,
    "austin": 1.10,
    "raleigh": 1.05,
}


class WageTable:
    """Compensation lookup keyed by (occupation, level, metro).

    Unknown occupations and metros fall back to the ``other`` row; an
    unknown level raises KeyError since levels are a closed set.

    Example:
        >>> table = WageTable()
        >>> table.estimate("software_engineer", "senior", "austin").total_comp
        242000
    """

    def __init__(self,
                 base_comp: Optional[Mapping[str, Mapping[str, float]]] = None,
                 metros: Optional[Mapping[str, MetroData]] = None,
                 tech_hub_premiums: Optional[Mapping[str, float]] = None,
                 federal_tax: float = FEDERAL_EFFECTIVE_TAX):
        self.base_comp = dict(base_comp or DEFAULT_BASE_COMP)
        self.metros = dict(metros or DEFAULT_METROS)
        self.tech_hub_premiums = dict(
            DEFAULT_TECH_HUB_PREMIUMS if tech_hub_premiums is None else tech_hub_premiums
        )
        self.federal_tax = federal_tax

        if FALLBACK_KEY not in self.base_comp or FALLBACK_KEY not in self.metros:
            raise ValueError(f"Reference tables must define an '{FALLBACK_KEY}' bucket")

    def metro_data(self, metro: str) -> MetroData:
        """Metro data with fallback to the ``other`` bucket."""
        return self.metros.get(metro, self.metros[FALLBACK_KEY])

    def cost_of_living_multiplier(self, metro: str) -> float:
        return self.metro_data(metro).col_index / 100.0

    def base_compensation(self, occupation: str, level: str) -> float:
        row = self.base_comp.get(occupation, self.base_comp[FALLBACK_KEY])
        if level not in row:
            raise KeyError(f"Unknown career level: {level}")
        return row[level]

    def estimate(self, occupation: str, level: str, metro: str) -> WageEstimate:
        """Estimate compensation for a position.

        Tech occupations in tech hubs receive the metro premium. Equity is
        25% of total comp for tech roles (5% otherwise); bonus is 30% for
        sales (10% otherwise). Taxes are the federal effective rate plus the
        metro's state/local burden.
        """
        data = self.metro_data(metro)
        is_tech = occupation in TECH_OCCUPATIONS
        premium = self.tech_hub_premiums.get(metro, 1.0) if (is_tech and data.tech_hub) else 1.0

        total_comp = round(self.base_compensation(occupation, level) * premium)
        equity = round(total_comp * (0.25 if is_tech else 0.05))
        bonus = round(total_comp * (0.30 if occupation == "sales" else 0.10))
        after_tax = round(total_comp * (1 - (self.federal_tax + data.tax_burden)))

        return WageEstimate(
            base_salary=total_comp - equity - bonus,
            bonus=bonus,
            equity=equity,
            total_comp=total_comp,
            after_tax_comp=after_tax,
            take_home_pay=round(after_tax / (data.col_index / 100.0)),
        )


# SCF 2022 net worth percentiles by age bracket: (upper age bound, p10..p99)
_PERCENTILE_RANKS: Tuple[int, ...] = (10, 25, 50, 75, 90, 95, 99)
WEALTH_FALLBACK_KEY = "default"

DEFAULT_WEALTH_BY_AGE: Dict[str, Tuple[int, ...]] = {
    "under-25": (-27000, -4800, 9000, 35000, 92000, 155000, 450000),
    "25-29": (-22000, 1500, 25000, 80000, 190000, 340000, 850000),
    "30-34": (-8000, 12000, 55000, 160000, 380000, 620000, 1600000),
    "35-39": (1200, 28000, 105000, 280000, 640000, 1050000, 2800000),
    "40-44": (4500, 45000, 165000, 420000, 950000, 1550000, 4200000),
    "45-49": (8000, 62000, 220000, 550000, 1250000, 2050000, 5500000),
    "50-54": (12000, 78000, 290000, 720000, 1600000, 2650000, 7200000),
    "55-59": (18000, 98000, 365000, 900000, 2000000, 3300000, 9000000),
    "60-64": (25000, 120000, 430000, 1050000, 2350000, 3900000, 10500000),
    "65-69": (38000, 145000, 470000, 1150000, 2550000, 4200000, 11000000),
    "70-74": (42000, 155000, 450000, 1100000, 2400000, 3950000, 10200000),
    "75+": (35000, 130000, 380000, 920000, 2000000, 3300000, 8500000),
    # Used for brackets missing from a custom table
    WEALTH_FALLBACK_KEY: (-8000, 12000, 55000, 160000, 380000, 620000, 1600000),
}

_BRACKET_BOUNDS: List[Tuple[int, str]] = [
    (25, "under-25"), (30, "25-29"), (35, "30-34"), (40, "35-39"),
    (45, "40-44"), (50, "45-49"), (55, "50-54"), (60, "55-59"),
    (65, "60-64"), (70, "65-69"), (75, "70-74"),
]


def bracket_for_age(age: float) -> str:
    """Map an exact age to its SCF age bracket."""
    for upper, bracket in _BRACKET_BOUNDS:
        if age < upper:
            return bracket
    return "75+"


class WealthPercentileTable:
    """Net worth percentiles by age bracket with linear interpolation."""

    def __init__(self, wealth_by_age: Optional[Mapping[str, Tuple[float, ...]]] = None):
        self.wealth_by_age = dict(wealth_by_age or DEFAULT_WEALTH_BY_AGE)
        if WEALTH_FALLBACK_KEY not in self.wealth_by_age:
            raise ValueError(f"Wealth tables must define a '{WEALTH_FALLBACK_KEY}' bracket")
        for bracket, row in self.wealth_by_age.items():
            if len(row) != len(_PERCENTILE_RANKS):
                raise ValueError(f"Wealth bracket '{bracket}' needs {len(_PERCENTILE_RANKS)} percentiles")

    def percentiles_for_age(self, age: float) -> Dict[int, float]:
        """Map of percentile rank (10..99) to net worth for the age's bracket."""
        row = self.wealth_by_age.get(bracket_for_age(age), self.wealth_by_age[WEALTH_FALLBACK_KEY])
        return dict(zip(_PERCENTILE_RANKS, row))

    def median_for_age(self, age: float) -> float:
        return self.percentiles_for_age(age)[50]

    def percentile_for_age(self, net_worth: float, age: float) -> float:
        """Rank a net worth within its age bracket (1..99).

        Between known points the rank is linearly interpolated. Below the
        10th percentile it is scaled toward 1; above the 99th it is 99.
        """
        points = sorted(self.percentiles_for_age(age).items())
        p10 = points[0][1]
        p25 = points[1][1]
        p99 = points[-1][1]

        if net_worth <= p10:
            if p10 <= 0:
                span = p25 - p10
                return max(1, round(10 + ((net_worth - p10) / span) * 15)) if span else 1
            return max(1, round(10 * max(0.0, net_worth / p10)))

        if net_worth >= p99:
            return 99

        for (lower_rank, lower_value), (upper_rank, upper_value) in zip(points, points[1:]):
            if lower_value <= net_worth <= upper_value:
                span = upper_value - lower_value
                if span == 0:
                    return lower_rank
                position = (net_worth - lower_value) / span
                return round(lower_rank + position * (upper_rank - lower_rank))

        return 50
