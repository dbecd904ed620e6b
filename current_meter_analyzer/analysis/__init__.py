"""Analysis package.

Design principle:
  - Ingest produces validated :class:`~current_meter_analyzer.models.timeseries.CurrentTimeSeries` objects.
  - Analysis consumes them and produces derived records (RCM layout, summaries).

The calendar axis is always rebuilt from sample index and sampling interval;
the raw instrument time column is carried for provenance only.
"""

from .convert import DEFAULT_ANCHOR, datenum_to_datetime, datetime_to_datenum, to_rcm_record
from .plotting import plot_series
from .summary import SeriesSummary, summarize_series

__all__ = [
    "DEFAULT_ANCHOR",
    "datenum_to_datetime",
    "datetime_to_datenum",
    "to_rcm_record",
    "plot_series",
    "SeriesSummary",
    "summarize_series",
]
