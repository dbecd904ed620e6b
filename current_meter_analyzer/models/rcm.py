from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class RcmRecord:
    """
    Current record in the layout expected by the downstream RCM consumer.

    Attributes
    ----------
    time:
        Absolute serial day numbers, shape ``(N,)`` (719529 == 1970-01-01).
    speed, direction, u, v:
        Copied unchanged from the source series, shape ``(N,)``.
    height_above_bed:
        ``abs(site_depth - meter_depth)``.
    """

    time: np.ndarray
    speed: np.ndarray
    direction: np.ndarray
    u: np.ndarray
    v: np.ndarray
    height_above_bed: float

    @property
    def length(self) -> int:
        return int(len(self.time))

    def datetimes(self) -> pd.DatetimeIndex:
        from current_meter_analyzer.analysis.convert import datenum_to_datetime

        return datenum_to_datetime(self.time)

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(
            {
                "time": self.time,
                "speed": self.speed,
                "direction": self.direction,
                "u": self.u,
                "v": self.v,
            }
        )
        df.attrs["height_above_bed"] = float(self.height_above_bed)
        return df
