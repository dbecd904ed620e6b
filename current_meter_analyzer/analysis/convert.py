"""Conversion of parsed current series into the downstream RCM record layout.

Time on the RCM side is a serial day number: integer part counts days with
719529 == 1970-01-01, fractional part is the time of day.

Functions
---------
to_rcm_record
    Build an :class:`~current_meter_analyzer.models.rcm.RcmRecord` from a series.
datenum_to_datetime, datetime_to_datenum
    Translate between serial day numbers and pandas timestamps.
"""

from __future__ import annotations

from typing import Union

import numpy as np
import pandas as pd

from current_meter_analyzer.models.rcm import RcmRecord
from current_meter_analyzer.models.timeseries import CurrentTimeSeries

# Serial day number of 1970-01-01 00:00.
UNIX_EPOCH_DATENUM = 719529.0

# Anchor used when the caller does not supply one.
DEFAULT_ANCHOR = UNIX_EPOCH_DATENUM


def datenum_to_datetime(values: Union[float, np.ndarray]) -> pd.DatetimeIndex:
    """Serial day numbers -> naive (UTC) DatetimeIndex, rounded to the millisecond."""
    days = np.atleast_1d(np.asarray(values, dtype=np.float64)) - UNIX_EPOCH_DATENUM
    # day numbers near 7e5 carry ~10 us of float resolution
    return pd.DatetimeIndex(pd.to_datetime(days, unit="D", origin="unix")).round("ms")


def datetime_to_datenum(ts: Union[str, pd.Timestamp]) -> float:
    """Timestamp (or ISO string) -> serial day number. Aware stamps are taken in UTC."""
    t = pd.Timestamp(ts)
    if t.tzinfo is not None:
        t = t.tz_convert("UTC").tz_localize(None)
    return UNIX_EPOCH_DATENUM + (t - pd.Timestamp("1970-01-01")) / pd.Timedelta(days=1)


def to_rcm_record(series: CurrentTimeSeries, anchor: float = DEFAULT_ANCHOR) -> RcmRecord:
    """
    Map a :class:`CurrentTimeSeries` onto an :class:`RcmRecord`.

    Parameters
    ----------
    series:
        Source series; not modified.
    anchor:
        Serial day number of the first sample.

    Returns
    -------
    RcmRecord
        time from ``series.contextualise_time(anchor)``; speed/direction/u/v copied;
        ``height_above_bed = abs(site_depth - meter_depth)``, NaN when either depth is unset.
    """
    if series.site_depth is None or series.meter_depth is None:
        height = float("nan")
    else:
        height = abs(float(series.site_depth) - float(series.meter_depth))

    return RcmRecord(
        time=series.contextualise_time(anchor),
        speed=np.array(series.speed, copy=True),
        direction=np.array(series.direction, copy=True),
        u=np.array(series.u, copy=True),
        v=np.array(series.v, copy=True),
        height_above_bed=height,
    )
