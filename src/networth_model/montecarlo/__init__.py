# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo runway simulation.

Quantifies how long cash and investments last under random income,
expense, emergency and market shocks, walks a deterministic monthly
runway, and spreads a balance across named return scenarios.
"""

from .config import RISK_PROFILES, RiskProfile, SimulationConfig, create_simulation_config
from .random_process import RandomProcess
from .results import (
    AggregatedResults,
    HistogramBucket,
    SamplePaths,
    ScenarioSummary,
    SimulationResult,
    aggregate_results,
)
from .simulator import MonteCarloEngine, run_simulation, simulate_path
from .runway import (
    BalanceEntry,
    Guardrails,
    MonthSnapshot,
    RunwayParams,
    RunwayResult,
    break_even_income,
    infer_monthly_burn,
    simulate_runway,
)
from .scenarios import (
    RETURN_SCENARIOS,
    MultiScenarioResult,
    ReturnScenario,
    ScenarioBands,
    historical_trajectory,
    run_multi_scenario_analysis,
)

__all__ = [
    'RISK_PROFILES',
    'RiskProfile',
    'SimulationConfig',
    'create_simulation_config',
    'RandomProcess',
    'AggregatedResults',
    'HistogramBucket',
    'SamplePaths',
    'ScenarioSummary',
    'SimulationResult',
    'aggregate_results',
    'MonteCarloEngine',
    'run_simulation',
    'simulate_path',
    'BalanceEntry',
    'Guardrails',
    'MonthSnapshot',
    'RunwayParams',
    'RunwayResult',
    'break_even_income',
    'infer_monthly_burn',
    'simulate_runway',
    'RETURN_SCENARIOS',
    'MultiScenarioResult',
    'ReturnScenario',
    'ScenarioBands',
    'historical_trajectory',
    'run_multi_scenario_analysis',
]
