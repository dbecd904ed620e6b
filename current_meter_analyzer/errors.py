"""Exception types raised by the current-meter tooling.

All of them derive from :class:`ValueError`, so code that already guards
ingest/analysis calls with ``except ValueError`` keeps working.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CurrentMeterError(ValueError):
    """Base class for current-meter ingest and analysis errors."""


class MalformedFileError(CurrentMeterError):
    """A current-meter file does not follow the block layout.

    Fatal for the whole file: no partial series is ever returned.
    """

    def __init__(self, message: str, path: Optional[Path] = None, line_no: Optional[int] = None):
        self.path = path
        self.line_no = line_no
        where = ""
        if path is not None:
            where = f"{Path(path).name}"
            if line_no is not None:
                where += f":{line_no}"
            where += ": "
        super().__init__(f"{where}{message}")


class ShapeMismatchError(CurrentMeterError):
    """time/speed/direction arrays of differing lengths."""


class EmptySeriesError(CurrentMeterError):
    """A statistic was requested on a zero-length series."""
