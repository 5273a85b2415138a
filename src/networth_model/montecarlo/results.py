# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation results aggregation and analysis.

This module holds the per-path SimulationResult and the AggregatedResults
summary built from a batch of them: runway percentiles, depletion
probabilities, tail-risk statistics, a runway histogram, representative
paths and decile scenario summaries.
"""

import math
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np
import pandas as pd

from .. import stats
from ..constants import (
    DEPLETION_CHECKPOINTS,
    HISTOGRAM_BUCKETS,
    NUM_SAMPLE_PATHS,
    SCENARIO_FRACTION,
    VAR_CONFIDENCE,
)
from .random_process import RandomProcess

SUCCESS = "success"
DEPLETED = "depleted"
GROWING = "growing"


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of one simulated path.

    Attributes:
        run_id: Index of the path within its batch
        months_of_runway: Month the money ran out, or the horizon if it never did
        final_balance: Cash at the end of the path
        monthly_balances: Cash at month 0..end
        monthly_net_worth: Cash plus investments at month 0..end
        emergency_count: Emergencies that occurred before the path ended
        trajectory_type: "success", "depleted" or "growing"
    """
    run_id: int
    months_of_runway: int
    final_balance: float
    monthly_balances: Tuple[float, ...]
    monthly_net_worth: Tuple[float, ...]
    emergency_count: int
    trajectory_type: str

    @property
    def final_net_worth(self) -> float:
        return self.monthly_net_worth[-1] if self.monthly_net_worth else 0.0


@dataclass(frozen=True)
class HistogramBucket:
    months: int
    count: int
    percentage: float


@dataclass(frozen=True)
class SamplePaths:
    """Net worth trajectories selected for visualization."""
    best: Tuple[float, ...]
    median: Tuple[float, ...]
    worst: Tuple[float, ...]
    samples: Tuple[Tuple[float, ...], ...]


@dataclass(frozen=True)
class ScenarioSummary:
    avg_months: float
    avg_final_nw: float
    emergencies: float


@dataclass(frozen=True)
class AggregatedResults:
    """Statistics over the months of runway of every path in a batch."""
    p10_months: float
    p25_months: float
    p50_months: float
    p75_months: float
    p90_months: float
    mean_months: float
    median_months: float
    std_dev_months: float
    probability_depleted_by_12mo: float
    probability_depleted_by_24mo: float
    probability_depleted_by_36mo: float
    value_at_risk_95: float
    conditional_var_95: float
    distribution_data: Tuple[HistogramBucket, ...]
    sample_paths: SamplePaths
    scenarios: Dict[str, ScenarioSummary]
    all_results: Tuple[SimulationResult, ...]

    @property
    def num_simulations(self) -> int:
        return len(self.all_results)

    def success_rate(self) -> float:
        """Share of paths that never ran out of money."""
        if not self.all_results:
            return 0.0
        survived = sum(1 for r in self.all_results if r.trajectory_type != DEPLETED)
        return survived / len(self.all_results)

    def percentile_bands(self, percentiles: Sequence[float] = (5, 25, 50, 75, 95)) -> pd.DataFrame:
        """Net worth percentiles at every month across all paths.

        Depleted paths stop contributing after the month they ended, as
        their trajectories are shorter than the horizon.

        Returns:
            DataFrame indexed by month with one column per percentile
            (named "p5", "p25", ...)
        """
        horizon = max((len(r.monthly_net_worth) for r in self.all_results), default=0)
        rows = []
        for month in range(horizon):
            values = sorted(r.monthly_net_worth[month] for r in self.all_results
                            if month < len(r.monthly_net_worth))
            rows.append([stats.percentile(values, p) for p in percentiles])

        df = pd.DataFrame(rows, columns=[f"p{p:g}" for p in percentiles])
        df.index.name = "month"
        return df

    def to_dataframe(self) -> pd.DataFrame:
        """One row per path (without the monthly series)."""
        return pd.DataFrame([{
            "run_id": r.run_id,
            "months_of_runway": r.months_of_runway,
            "final_balance": r.final_balance,
            "final_net_worth": r.final_net_worth,
            "emergency_count": r.emergency_count,
            "trajectory_type": r.trajectory_type,
        } for r in self.all_results]).set_index("run_id")

    def __repr__(self) -> str:
        return (f"AggregatedResults(num_simulations={self.num_simulations}, "
                f"median_months={self.median_months})")


def _summarize(results: Sequence[SimulationResult]) -> ScenarioSummary:
    return ScenarioSummary(
        avg_months=stats.mean([r.months_of_runway for r in results]),
        avg_final_nw=stats.mean([r.final_net_worth for r in results]),
        emergencies=stats.mean([r.emergency_count for r in results]),
    )


def _histogram(months: Sequence[int], time_horizon_months: int) -> Tuple[HistogramBucket, ...]:
    bucket_size = max(1, math.ceil(time_horizon_months / HISTOGRAM_BUCKETS))
    buckets = (np.asarray(months, dtype=int) // bucket_size) * bucket_size
    starts, counts = np.unique(buckets, return_counts=True)
    total = len(months)
    return tuple(
        HistogramBucket(int(start), int(count), count / total * 100.0)
        for start, count in zip(starts, counts)
    )


def aggregate_results(results: Sequence[SimulationResult],
                      time_horizon_months: int,
                      sampler: RandomProcess) -> AggregatedResults:
    """Build AggregatedResults from a completed batch.

    Every ordering is computed on a new sorted list, so ``results`` keeps
    its run order in ``all_results``.

    Args:
        results: One SimulationResult per path, in run order
        time_horizon_months: Horizon the batch was simulated over
        sampler: Random process used to pick the random sample paths

    Returns:
        AggregatedResults for the batch
    """
    n = len(results)
    months = [r.months_of_runway for r in results]
    sorted_months = sorted(months)

    p10, p25, p50, p75, p90 = (stats.percentile(sorted_months, p) for p in (10, 25, 50, 75, 90))
    depletion = {
        checkpoint: sum(1 for m in months if m <= checkpoint) / n
        for checkpoint in DEPLETION_CHECKPOINTS
    }

    # Ascending by runway, ties broken by how much money is left
    ranked = sorted(results, key=lambda r: (r.months_of_runway, r.final_net_worth))

    def at_rank(fraction: float) -> SimulationResult:
        return ranked[min(int(n * fraction), n - 1)]

    sample_indices = sampler.integers(n, NUM_SAMPLE_PATHS)
    sample_paths = SamplePaths(
        best=at_rank(0.9).monthly_net_worth,
        median=at_rank(0.5).monthly_net_worth,
        worst=at_rank(0.1).monthly_net_worth,
        samples=tuple(results[int(i)].monthly_net_worth for i in sample_indices),
    )

    decile = max(1, int(n * SCENARIO_FRACTION))
    closest_to_median = sorted(results, key=lambda r: abs(r.months_of_runway - p50))
    scenarios = {
        "best": _summarize(ranked[::-1][:decile]),
        "median": _summarize(closest_to_median[:decile]),
        "worst": _summarize(ranked[:decile]),
    }

    return AggregatedResults(
        p10_months=p10,
        p25_months=p25,
        p50_months=p50,
        p75_months=p75,
        p90_months=p90,
        mean_months=stats.mean(months),
        median_months=p50,
        std_dev_months=stats.std_dev(months),
        probability_depleted_by_12mo=depletion[12],
        probability_depleted_by_24mo=depletion[24],
        probability_depleted_by_36mo=depletion[36],
        value_at_risk_95=stats.value_at_risk(sorted_months, VAR_CONFIDENCE),
        conditional_var_95=stats.conditional_value_at_risk(sorted_months, VAR_CONFIDENCE),
        distribution_data=_histogram(months, time_horizon_months),
        sample_paths=sample_paths,
        scenarios=scenarios,
        all_results=tuple(results),
    )
