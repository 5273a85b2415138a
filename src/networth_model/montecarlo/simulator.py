# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo runway simulator.

Each path walks month by month through income and expense shocks, random
emergencies and GBM investment growth, keeping a cash buffer of three
months of expenses topped up from investments. A path ends early when
cash and investments together can no longer cover a month.

Paths share nothing but the (frozen) configuration. Every path draws from
its own child stream spawned from one root generator, so a seeded run gives
the same results inline or across a process pool.
"""

import math
import threading
import time
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from ..constants import GROWING_THRESHOLD
from ..exceptions import SimulationCancelledError
from ..log import get_logger
from ..settings import EngineSettings, load_settings
from .config import SimulationConfig
from .random_process import RandomProcess
from .results import (
    DEPLETED,
    GROWING,
    SUCCESS,
    AggregatedResults,
    SimulationResult,
    aggregate_results,
)

logger = get_logger(__name__)

BATCHES_PER_WORKER = 4


def simulate_path(config: SimulationConfig, run_id: int,
                  process: RandomProcess) -> SimulationResult:
    """Simulate one path over the configured horizon.

    All random draws for the path are made up front so the month loop
    itself is deterministic.

    Args:
        config: Simulation inputs
        run_id: Index of the path within its batch
        process: Random stream owned by this path

    Returns:
        SimulationResult for the path
    """
    horizon = config.time_horizon_months

    income_shocks = process.normal_variate(0.0, config.income_volatility, horizon).tolist()
    expense_shocks = process.normal_variate(0.0, config.expense_volatility, horizon).tolist()
    emergencies = process.emergency_triggered(config.emergency_probability_monthly, horizon).tolist()
    emergency_costs = process.emergency_cost(config.emergency_mean_cost,
                                             config.emergency_std_dev, horizon).tolist()
    growth = process.monthly_investment_return(config.investment_return_annual,
                                               config.investment_volatility_annual,
                                               horizon).tolist()

    if config.inflation_rate is None:
        base_expenses = [config.monthly_expenses] * horizon
    else:
        months = np.arange(horizon)
        base_expenses = (config.monthly_expenses
                         * (1 + config.inflation_rate) ** (months / 12.0)).tolist()

    cash = float(config.current_cash)
    investments = float(config.current_investments)
    buffer_target = config.cash_buffer_target

    monthly_balances = [cash]
    monthly_net_worth = [cash + investments]
    emergency_count = 0
    runway = horizon
    depleted = False

    for i in range(horizon):
        month = i + 1
        income = config.monthly_income * (1 + income_shocks[i])
        expenses = base_expenses[i] * (1 + expense_shocks[i])

        emergency = 0.0
        if emergencies[i]:
            emergency = emergency_costs[i]
            emergency_count += 1

        # Growth applies to the opening balance, before this month's cash flow
        investments *= growth[i]
        savings = income * config.savings_rate
        cash += income - (expenses + emergency)

        if cash < 0:
            deficit = -cash
            if investments < deficit:
                cash = 0.0
                investments = 0.0
                monthly_balances.append(cash)
                monthly_net_worth.append(0.0)
                runway = month
                depleted = True
                break
            investments -= deficit
            cash = 0.0
        elif cash > buffer_target and savings > 0:
            sweep = min(cash - buffer_target, savings)
            cash -= sweep
            investments += sweep

        net_worth = cash + investments
        monthly_balances.append(cash)
        monthly_net_worth.append(net_worth)

        if net_worth <= 0:
            runway = month
            depleted = True
            break

    # Running dry in the final month still counts as depleted
    if depleted:
        trajectory_type = DEPLETED
    elif monthly_net_worth[-1] > config.current_net_worth * GROWING_THRESHOLD:
        trajectory_type = GROWING
    else:
        trajectory_type = SUCCESS

    return SimulationResult(
        run_id=run_id,
        months_of_runway=runway,
        final_balance=cash,
        monthly_balances=tuple(monthly_balances),
        monthly_net_worth=tuple(monthly_net_worth),
        emergency_count=emergency_count,
        trajectory_type=trajectory_type,
    )


def _simulate_batch(config: SimulationConfig, first_run_id: int,
                    processes: Sequence[RandomProcess]) -> List[SimulationResult]:
    return [simulate_path(config, first_run_id + offset, process)
            for offset, process in enumerate(processes)]


class MonteCarloEngine:
    """Runs batches of independent runway paths and aggregates them.

    Example:
        >>> engine = MonteCarloEngine(seed=7)
        >>> results = engine.run(create_simulation_config(250_000, 30_000, 9_000, 6_000, 0.2))
        >>> results.p50_months
    """

    def __init__(self, seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None,
                 workers: Optional[int] = None,
                 settings: Optional[EngineSettings] = None):
        """Initialize the engine.

        Args:
            seed: Root seed. Every run with the same seed is identical.
                  Defaults to the NETWORTH_MC_SEED setting.
            rng: Root generator. Takes precedence over ``seed``; repeated
                 runs continue its stream.
            workers: Worker processes. 1 runs paths inline. Defaults to the
                     NETWORTH_MC_WORKERS setting.
            settings: Engine settings; loaded from the environment if omitted
        """
        settings = settings or load_settings()
        self.seed = seed if seed is not None else settings.mc_seed
        self.rng = rng
        self.workers = max(1, workers if workers is not None else settings.mc_workers)

    def run(self, config: SimulationConfig,
            cancel_event: Optional[threading.Event] = None) -> AggregatedResults:
        """Simulate ``config.num_simulations`` paths and aggregate them.

        Args:
            config: Simulation inputs
            cancel_event: Checked between paths (between batches when using
                          worker processes)

        Returns:
            AggregatedResults for the batch

        Raises:
            SimulationCancelledError: If cancel_event is set before the
                                      batch completes
        """
        root = RandomProcess(rng=self.rng, seed=self.seed)
        streams = root.spawn(config.num_simulations)

        logger.info("monte_carlo_started",
                    num_simulations=config.num_simulations,
                    time_horizon_months=config.time_horizon_months,
                    workers=self.workers)
        started = time.perf_counter()

        if self.workers > 1 and config.num_simulations > 1:
            results = self._run_parallel(config, streams, cancel_event)
        else:
            results = self._run_inline(config, streams, cancel_event)

        aggregated = aggregate_results(results, config.time_horizon_months, root)
        logger.info("monte_carlo_completed",
                    num_simulations=config.num_simulations,
                    median_months=aggregated.median_months,
                    probability_depleted_by_12mo=aggregated.probability_depleted_by_12mo,
                    elapsed_seconds=round(time.perf_counter() - started, 3))
        return aggregated

    def _run_inline(self, config: SimulationConfig, streams: Sequence[RandomProcess],
                    cancel_event: Optional[threading.Event]) -> List[SimulationResult]:
        results = []
        for run_id, process in enumerate(streams):
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("monte_carlo_cancelled", completed=run_id,
                               requested=len(streams))
                raise SimulationCancelledError(run_id, len(streams))
            results.append(simulate_path(config, run_id, process))
        return results

    def _run_parallel(self, config: SimulationConfig, streams: Sequence[RandomProcess],
                      cancel_event: Optional[threading.Event]) -> List[SimulationResult]:
        n = len(streams)
        batch_size = max(1, math.ceil(n / (self.workers * BATCHES_PER_WORKER)))

        results: List[SimulationResult] = []
        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(_simulate_batch, config, start, streams[start:start + batch_size])
                       for start in range(0, n, batch_size)]
            # Collected in submission order so run ids stay aligned
            for future in futures:
                if cancel_event is not None and cancel_event.is_set():
                    for pending in futures:
                        pending.cancel()
                    logger.warning("monte_carlo_cancelled", completed=len(results), requested=n)
                    raise SimulationCancelledError(len(results), n)
                results.extend(future.result())
        return results


def run_simulation(config: SimulationConfig, seed: Optional[int] = None,
                   workers: Optional[int] = None) -> AggregatedResults:
    """Convenience wrapper around ``MonteCarloEngine(seed, workers=workers).run(config)``."""
    return MonteCarloEngine(seed=seed, workers=workers).run(config)
