"""Ingest package - current-meter file readers.

This package handles:
- Locating the one or two header+data blocks inside a current-meter file
- Reading header metadata by position and the declared number of data rows
- Tagging each block with its position (first = SNS, second = NSN)

Key classes:
- CurrentMeterReader: Reads a file into a ParsedCurrentFile
- CurrentReaderConfig: Reader options

Design principle:
- Readers produce validated CurrentTimeSeries objects
- Malformed files are rejected as a whole; no partial series
- The raw time column is kept as read
"""

from .readers_dat import CurrentMeterReader, CurrentReaderConfig, ParsedCurrentFile, parse

__all__ = [
    "CurrentMeterReader",
    "CurrentReaderConfig",
    "ParsedCurrentFile",
    "parse",
]
