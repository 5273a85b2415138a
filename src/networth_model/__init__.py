# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Net Worth Projection Engine

Projects personal net worth with a deterministic career-aware compounding
model and quantifies depletion risk with a Monte Carlo runway simulation.

Example usage:
    from networth_model import CareerProjector, build_career_profile, MonteCarloEngine
    from networth_model import create_simulation_config

    profile = build_career_profile(current_age=30, occupation='software_engineer',
                                   metro='seattle', cash_percent=0.2,
                                   investment_percent=0.7, other_percent=0.1)
    output = CareerProjector().project(profile, target_age=50)
    df = output.to_dataframe()

    config = create_simulation_config(current_net_worth=250_000, current_cash=30_000,
                                      monthly_income=9_000, monthly_expenses=6_000,
                                      savings_rate=0.2)
    results = MonteCarloEngine(seed=42).run(config)
    bands = results.percentile_bands()
"""

from .__meta__ import __version__

# Errors
from .exceptions import ConfigurationError, EmptyInputError, NetWorthModelError, SimulationCancelledError

# Settings and logging
from .settings import EngineSettings, load_settings
from .log import configure_logging

# Reference tables
from .reference_data import MetroData, WageEstimate, WageTable, WealthPercentileTable

# Deterministic projections
from .career import (
    PROJECTION_SCENARIOS,
    CareerProfile,
    CareerProjector,
    ProjectionScenario,
    TargetAllocation,
    TaxTreatment,
    WealthModelOutput,
    build_career_profile,
    fire_numbers,
)
from .savings import HistoryEntry, SavingsRateInferencer

# Stochastic simulation
from .montecarlo import (
    AggregatedResults,
    MonteCarloEngine,
    RandomProcess,
    SimulationConfig,
    SimulationResult,
    RunwayParams,
    create_simulation_config,
    run_multi_scenario_analysis,
    simulate_runway,
)

# History analysis
from .trajectory import TrajectoryCalculus

__all__ = [
    '__version__',
    'ConfigurationError',
    'EmptyInputError',
    'NetWorthModelError',
    'SimulationCancelledError',
    'EngineSettings',
    'load_settings',
    'configure_logging',
    'MetroData',
    'WageEstimate',
    'WageTable',
    'WealthPercentileTable',
    'PROJECTION_SCENARIOS',
    'CareerProfile',
    'CareerProjector',
    'ProjectionScenario',
    'TargetAllocation',
    'TaxTreatment',
    'WealthModelOutput',
    'build_career_profile',
    'fire_numbers',
    'HistoryEntry',
    'SavingsRateInferencer',
    'AggregatedResults',
    'MonteCarloEngine',
    'RandomProcess',
    'SimulationConfig',
    'SimulationResult',
    'RunwayParams',
    'create_simulation_config',
    'run_multi_scenario_analysis',
    'simulate_runway',
    'TrajectoryCalculus',
]
