# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Deterministic career-aware wealth projections.

Combines a wage table, a career level curve and a tax-aware asset
allocation into year-by-year net worth projections.
"""

from .profile import AssetSplit, CareerProfile, TargetAllocation, TaxTreatment, build_career_profile, split_net_worth
from .wages import level_for_years, wage_with_progression, years_range_for_level
from .projector import (
    PROJECTION_SCENARIOS,
    CareerProjector,
    Comparison,
    Milestone,
    ProjectionAssumptions,
    ProjectionScenario,
    WealthComparison,
    WealthModelOutput,
    YearRecord,
    milestones,
)
from .fire import (
    BaristaFire,
    FireNumbers,
    MaxSpend,
    barista_fire,
    coast_fire_number,
    fire_number,
    fire_numbers,
    max_spend_for_years,
    required_monthly_contribution,
    years_to_target,
)

__all__ = [
    'AssetSplit',
    'CareerProfile',
    'TargetAllocation',
    'TaxTreatment',
    'build_career_profile',
    'split_net_worth',
    'level_for_years',
    'wage_with_progression',
    'years_range_for_level',
    'PROJECTION_SCENARIOS',
    'CareerProjector',
    'Comparison',
    'Milestone',
    'ProjectionAssumptions',
    'ProjectionScenario',
    'WealthComparison',
    'WealthModelOutput',
    'YearRecord',
    'milestones',
    'BaristaFire',
    'FireNumbers',
    'MaxSpend',
    'barista_fire',
    'coast_fire_number',
    'fire_number',
    'fire_numbers',
    'max_spend_for_years',
    'required_monthly_contribution',
    'years_to_target',
]
