"""Current Meter Analyzer -- Python tooling for hydrodynamic current-meter survey files.

Prepares measured currents for benthic-impact modelling.

This package provides tools for:
- Ingesting fixed-format current-meter files with one or two embedded blocks
- Deriving eastward/northward velocity components from speed and direction
- Building calendar time axes from sample index and sampling interval
- Scaling speeds and computing summary statistics
- Converting series into the RCM record layout used downstream

Key principles:
- Strict ingest: malformed files are rejected, never partially read
- u and v always follow speed and direction; they cannot be set independently
- Unit conversion factors are carried, and only applied on request

Main subpackages:
- analysis: RCM conversion, day-number helpers, summary statistics
- ingest: File readers
- models: Data models (CurrentTimeSeries, RcmRecord)
- scripts: Command-line tools
"""

from .errors import CurrentMeterError, EmptySeriesError, MalformedFileError, ShapeMismatchError
from .models import CurrentTimeSeries, RcmRecord

__all__ = [
    "CurrentMeterError",
    "EmptySeriesError",
    "MalformedFileError",
    "ShapeMismatchError",
    "CurrentTimeSeries",
    "RcmRecord",
]
