from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

import numpy as np

from current_meter_analyzer.errors import EmptySeriesError
from current_meter_analyzer.models.timeseries import SECONDS_PER_DAY, CurrentTimeSeries


@dataclass(frozen=True)
class SeriesSummary:
    """Summary statistics of one current series.

    Attributes
    ----------
    n_samples:
        Number of samples.
    mean_speed, max_speed, min_speed, std_speed:
        Statistics of the speed magnitude (population std).
    mean_u, mean_v:
        Mean velocity components.
    residual_speed, residual_direction:
        Magnitude and compass bearing (degrees clockwise from north, ``[0, 360)``)
        of the mean velocity vector.
    duration_days:
        ``(N - 1) * delta_t / 86400``; ``nan`` when delta_t is unset.
    """

    n_samples: int
    mean_speed: float
    max_speed: float
    min_speed: float
    std_speed: float
    mean_u: float
    mean_v: float
    residual_speed: float
    residual_direction: float
    duration_days: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize_series(series: CurrentTimeSeries) -> SeriesSummary:
    n = len(series)
    if n == 0:
        raise EmptySeriesError("cannot summarize an empty series.")

    speed = series.speed
    mean_u = float(np.mean(series.u))
    mean_v = float(np.mean(series.v))
    residual_dir = float(np.rad2deg(np.arctan2(mean_u, mean_v)) % 360.0)

    if series.delta_t is None:
        duration = float("nan")
    else:
        duration = (n - 1) * float(series.delta_t) / SECONDS_PER_DAY

    return SeriesSummary(
        n_samples=n,
        mean_speed=series.mean_speed(),
        max_speed=float(np.max(speed)),
        min_speed=float(np.min(speed)),
        std_speed=float(np.std(speed)),
        mean_u=mean_u,
        mean_v=mean_v,
        residual_speed=float(np.hypot(mean_u, mean_v)),
        residual_direction=residual_dir,
        duration_days=duration,
    )
