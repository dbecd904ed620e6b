from .rcm import RcmRecord
from .timeseries import SECONDS_PER_DAY, CurrentTimeSeries

__all__ = [
    "CurrentTimeSeries",
    "RcmRecord",
    "SECONDS_PER_DAY",
]
