# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Velocity and acceleration of a net worth history.

Velocity is the first difference of net worth per day, acceleration the
first difference of velocity per day. Sign changes in acceleration mark
inflection points where growth peaked or bottomed out.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

import pandas as pd

from . import stats
from .constants import DAYS_PER_YEAR, MIN_INFLECTION_VELOCITY, SMOOTHING_HALF_WINDOW_DAYS, STABLE_ACCELERATION
from .savings import DateLike

PEAK = "peak"
TROUGH = "trough"

DECLINING = "declining"
STAGNANT = "stagnant"
MODERATE = "moderate"
HIGH_GROWTH = "high-growth"


@dataclass(frozen=True)
class VelocityPoint:
    """Velocity into ``date`` from the previous observation.

    Attributes:
        date: Observation date
        value: Net worth on that date
        velocity: Change in net worth per day since the previous observation
        days: Days since the previous observation
    """
    date: pd.Timestamp
    value: float
    velocity: float
    days: float

    @property
    def annualized(self) -> float:
        """Velocity in dollars per year."""
        return self.velocity * DAYS_PER_YEAR


@dataclass(frozen=True)
class AccelerationPoint:
    date: pd.Timestamp
    value: float
    velocity: float
    acceleration: float
    days: float


@dataclass(frozen=True)
class InflectionPoint:
    date: pd.Timestamp
    value: float
    velocity: float
    acceleration: float
    kind: str  # "peak" or "trough"


@dataclass(frozen=True)
class VelocitySegment:
    """Growth between two consecutive observations."""
    start_date: pd.Timestamp
    end_date: pd.Timestamp
    start_value: float
    end_value: float
    velocity: float
    annualized_rate: float
    duration_days: float
    kind: str


@dataclass(frozen=True)
class TrajectorySummary:
    average_velocity: float
    average_acceleration: float
    overall_velocity: float
    trend: str  # "accelerating", "decelerating" or "stable"
    inflection_points: Tuple[InflectionPoint, ...]
    r_squared: float


class TrajectoryCalculus:
    """Numerical derivatives of a net worth series.

    Example:
        >>> calc = TrajectoryCalculus([("2024-01-01", 100_000), ("2024-07-01", 112_000),
        ...                            ("2025-01-01", 130_000)])
        >>> [round(p.annualized) for p in calc.velocity()]
        [24082, 35731]
    """

    def __init__(self, data: Union[pd.Series, Iterable[Tuple[DateLike, float]]]):
        """Initialize from (date, value) pairs or a Series indexed by date.

        Points are sorted by date; when several share a day, the last one
        supplied wins.
        """
        if isinstance(data, pd.Series):
            series = data.copy()
        else:
            pairs = list(data)
            series = pd.Series([float(v) for _, v in pairs],
                               index=[pd.Timestamp(d) for d, _ in pairs], dtype=float)

        series.index = pd.DatetimeIndex(series.index).normalize()
        series = series[~series.index.duplicated(keep="last")]
        self.series = series.sort_index(kind="mergesort").astype(float)

    def __len__(self) -> int:
        return len(self.series)

    def _days(self) -> List[float]:
        deltas = self.series.index.to_series().diff().dt.total_seconds() / 86400.0
        return deltas.tolist()

    def velocity(self) -> List[VelocityPoint]:
        """Backward-difference velocity for every point after the first."""
        dates = self.series.index
        values = self.series.tolist()
        days = self._days()
        return [
            VelocityPoint(dates[i], values[i], (values[i] - values[i - 1]) / days[i], days[i])
            for i in range(1, len(values))
        ]

    def acceleration(self) -> List[AccelerationPoint]:
        """Backward-difference acceleration; empty with fewer than 3 points."""
        velocities = self.velocity()
        return [
            AccelerationPoint(cur.date, cur.value, cur.velocity,
                              (cur.velocity - prev.velocity) / cur.days, cur.days)
            for prev, cur in zip(velocities, velocities[1:])
        ]

    def inflection_points(self, min_velocity: float = MIN_INFLECTION_VELOCITY) -> List[InflectionPoint]:
        """Points where acceleration changes sign.

        A positive-to-negative change is a peak in velocity, a
        negative-to-positive change a trough. The extremum is reported only
        when its velocity magnitude exceeds ``min_velocity`` dollars per day.
        Needs at least 4 points.
        """
        points = []
        accelerations = self.acceleration()
        for prev, cur in zip(accelerations, accelerations[1:]):
            if prev.acceleration > 0 > cur.acceleration:
                kind = PEAK
            elif prev.acceleration < 0 < cur.acceleration:
                kind = TROUGH
            else:
                continue
            if abs(prev.velocity) > min_velocity:
                points.append(InflectionPoint(prev.date, prev.value, prev.velocity,
                                              prev.acceleration, kind))
        return points

    def segments(self, smooth: bool = True) -> List[VelocitySegment]:
        """Classified growth segments between consecutive observations.

        With ``smooth`` and at least 3 segments, each velocity is averaged
        with every segment that starts between 45 days before it begins and
        45 days after it ends. Segments are then
        classified against the quartiles of those velocities: negative is
        declining, below the lower quartile stagnant, below the upper
        quartile moderate, otherwise high-growth.
        """
        dates = self.series.index
        values = self.series.tolist()
        raw = []
        for i, point in enumerate(self.velocity(), start=1):
            start_value = values[i - 1]
            if start_value <= 0:
                annualized_rate = 0.0
            elif point.value <= 0:
                # Crossing to zero or below loses the whole starting balance
                annualized_rate = -1.0
            else:
                annualized_rate = (point.value / start_value) ** (DAYS_PER_YEAR / point.days) - 1
            raw.append((dates[i - 1], point.date, start_value, point.value,
                        point.velocity, annualized_rate, point.days))

        velocities = [r[4] for r in raw]
        if smooth and len(raw) >= 3:
            window = pd.Timedelta(days=SMOOTHING_HALF_WINDOW_DAYS)
            velocities = [
                stats.mean([other[4] for other in raw
                            if start - window <= other[0] <= end + window])
                for start, end, *_ in raw
            ]

        ranked = sorted(velocities)
        n = len(ranked)
        q25 = ranked[int(n * 0.25)] if n else 0.0
        q75 = ranked[int(n * 0.75)] if n else 0.0

        def classify(v: float) -> str:
            if v < 0:
                return DECLINING
            if v < q25:
                return STAGNANT
            if v < q75:
                return MODERATE
            return HIGH_GROWTH

        return [
            VelocitySegment(start, end, start_value, end_value, v, rate, days, classify(v))
            for (start, end, start_value, end_value, _, rate, days), v in zip(raw, velocities)
        ]

    def r_squared(self) -> float:
        """How well each velocity predicts the next observation, in [0, 1].

        Every point after the second is predicted by extending the previous
        velocity over the gap to it. The residuals are scored against the
        variance of the series, and the result is clamped to [0, 1]. A flat
        series that is predicted exactly scores 1. Fewer than 3 points score 0.
        """
        if len(self.series) < 3:
            return 0.0

        values = self.series.to_numpy()
        ss_tot = float(((values - values.mean()) ** 2).sum())
        velocities = self.velocity()
        ss_res = sum((cur.value - (prev.value + prev.velocity * cur.days)) ** 2
                     for prev, cur in zip(velocities, velocities[1:]))

        if ss_tot == 0:
            return 1.0 if ss_res == 0 else 0.0
        return min(1.0, max(0.0, 1 - ss_res / ss_tot))

    def summarize(self, min_velocity: float = MIN_INFLECTION_VELOCITY) -> TrajectorySummary:
        """Average derivatives, recent trend, inflection points and fit quality."""
        velocities = [p.velocity for p in self.velocity()]
        accelerations = [p.acceleration for p in self.acceleration()]

        recent = stats.mean(accelerations[-3:])
        if abs(recent) < STABLE_ACCELERATION:
            trend = "stable"
        elif recent > 0:
            trend = "accelerating"
        else:
            trend = "decelerating"

        overall = 0.0
        if len(self.series) >= 2:
            total_days = (self.series.index[-1] - self.series.index[0]).total_seconds() / 86400.0
            overall = (self.series.iloc[-1] - self.series.iloc[0]) / total_days

        return TrajectorySummary(
            average_velocity=stats.mean(velocities),
            average_acceleration=stats.mean(accelerations),
            overall_velocity=float(overall),
            trend=trend,
            inflection_points=tuple(self.inflection_points(min_velocity)),
            r_squared=self.r_squared(),
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Net worth with velocity and acceleration columns (NaN where undefined)."""
        df = self.series.rename("value").to_frame()
        df["velocity"] = pd.Series({p.date: p.velocity for p in self.velocity()}, dtype=float)
        df["acceleration"] = pd.Series({p.date: p.acceleration for p in self.acceleration()},
                                       dtype=float)
        df.index.name = "date"
        return df
