# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Career level resolution and wage progression within a level."""

from typing import Dict, Tuple

from ..constants import EXECUTIVE_ANNUAL_RAISE, LEVEL_INTERPOLATION_WEIGHT
from ..reference_data import CAREER_LEVELS, WageEstimate, WageLookup

# Inclusive years-in-workforce range for each level
LEVEL_YEAR_RANGES: Dict[str, Tuple[int, int]] = {
    "entry": (0, 2),
    "mid": (3, 5),
    "senior": (6, 10),
    "staff": (11, 15),
    "principal": (16, 20),
    "executive": (21, 40),
}


def level_for_years(years_working: float) -> str:
    """Typical career level for a number of years in the workforce."""
    for level in CAREER_LEVELS[:-1]:
        if years_working <= LEVEL_YEAR_RANGES[level][1]:
            return level
    return "executive"


def years_range_for_level(level: str) -> Tuple[int, int]:
    return LEVEL_YEAR_RANGES[level]


def next_level(level: str):
    index = CAREER_LEVELS.index(level)
    if index + 1 < len(CAREER_LEVELS):
        return CAREER_LEVELS[index + 1]
    return None


def wage_with_progression(wages: WageLookup,
                          occupation: str,
                          level: str,
                          metro: str,
                          years_in_level: float) -> WageEstimate:
    """Wage estimate that rises gradually while in a level.

    Compensation moves from the level's figure toward the next level's,
    covering at most half the gap by the end of the level. Executives have
    no next level and instead grow 3% a year.

    Args:
        wages: Wage lookup table
        occupation: Occupation key
        level: Current career level
        metro: Metro key
        years_in_level: Whole years already spent in ``level``

    Returns:
        WageEstimate with every component scaled to the interpolated total
    """
    base = wages.estimate(occupation, level, metro)
    years_in_level = max(0.0, years_in_level)

    following = next_level(level)
    if following is None:
        return base.scaled(base.total_comp * (1 + EXECUTIVE_ANNUAL_RAISE) ** years_in_level)

    upper = wages.estimate(occupation, following, metro)
    low, high = years_range_for_level(level)
    duration = high - low + 1

    progress = min(years_in_level / duration, 1.0)
    weight = progress * LEVEL_INTERPOLATION_WEIGHT
    total_comp = round(base.total_comp + (upper.total_comp - base.total_comp) * weight)
    return base.scaled(total_comp)


def position_for_years(years_in_workforce: float) -> Tuple[str, float]:
    """Level and years already spent in it for a point in a career."""
    years_in_workforce = max(0.0, years_in_workforce)
    level = level_for_years(years_in_workforce)
    return level, years_in_workforce - years_range_for_level(level)[0]
