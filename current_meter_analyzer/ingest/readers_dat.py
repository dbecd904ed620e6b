from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from current_meter_analyzer.errors import MalformedFileError
from current_meter_analyzer.models.timeseries import CurrentTimeSeries

# Positional fields of the numeric header line.
HEADER_FIELDS: Tuple[str, ...] = ("meter_depth", "site_depth", "delta_t", "number_of_time_steps", "site_tide")

_HEADER_LINES = 3  # name, variable, numeric fields


@dataclass(frozen=True)
class CurrentReaderConfig:
    """
    Reader configuration for current-meter data files (*.dat).

    comment_prefix:
        Lines starting with this prefix are ignored between blocks (never inside one).
    max_blocks:
        Maximum number of header+data blocks accepted in one file.
    encoding:
        Text encoding of the file. The default also accepts a leading UTF-8 byte-order mark.
    check_time_spacing:
        If True, record a warning when the raw time column is not evenly spaced.
        The data itself is never modified.
    """
    comment_prefix: str = "#"
    max_blocks: int = 2
    encoding: str = "utf-8-sig"
    check_time_spacing: bool = True


@dataclass(frozen=True)
class ParsedCurrentFile:
    """Result of reading one current-meter file.

    primary is the first block (SNS); secondary is the second block (NSN) or None.
    """
    source_path: Path
    primary: CurrentTimeSeries
    secondary: Optional[CurrentTimeSeries] = None

    @property
    def blocks(self) -> Tuple[CurrentTimeSeries, ...]:
        if self.secondary is None:
            return (self.primary,)
        return (self.primary, self.secondary)

    def as_pair(self) -> Tuple[CurrentTimeSeries, Optional[CurrentTimeSeries]]:
        return self.primary, self.secondary


class _State(Enum):
    BEFORE_BLOCK = "before-block"
    IN_HEADER = "in-header"
    IN_DATA = "in-data"


@dataclass(frozen=True)
class _Header:
    name: str
    variable: str
    meter_depth: float
    site_depth: float
    delta_t: float
    number_of_time_steps: int
    site_tide: float


@dataclass(frozen=True)
class _Block:
    header_lines: Tuple[Tuple[int, str], ...]
    header: _Header
    rows: Tuple[Tuple[int, str], ...]


class CurrentMeterReader:
    """
    STRICT reader for current-meter files holding one or two blocks of the form:

      <name>
      <variable>
      <meter_depth> <site_depth> <delta_t> <number_of_time_steps> <site_tide>
      <time> <speed> <direction>      (number_of_time_steps rows)

    Contract:
      - Blocks are read sequentially; the first becomes the primary series (is_sns=True),
        the second the secondary series (is_sns=False).
      - Exactly the declared number of rows must follow each header.
      - Any deviation is a MalformedFileError for the whole file; nothing partial is returned.
      - The file is only read, never modified.
    """

    def __init__(self, config: Optional[CurrentReaderConfig] = None):
        self.config = config or CurrentReaderConfig()
        if self.config.max_blocks < 1:
            raise ValueError("max_blocks must be >= 1")

    def read(self, file_path: Union[str, Path]) -> ParsedCurrentFile:
        fp = Path(file_path).expanduser().resolve()
        try:
            with fp.open("r", encoding=self.config.encoding) as fh:
                lines = fh.read().splitlines()
        except UnicodeDecodeError as exc:
            raise MalformedFileError(
                f"file is not valid {self.config.encoding} text (byte offset {exc.start})", path=fp
            ) from exc

        blocks = self._split_blocks(fp, lines)
        if not blocks:
            raise MalformedFileError("no data block found", path=fp)

        series = [
            self._build_series(fp, blk, is_sns=(k == 0))
            for k, blk in enumerate(blocks)
        ]
        return ParsedCurrentFile(
            source_path=fp,
            primary=series[0],
            secondary=series[1] if len(series) > 1 else None,
        )

    # ------------------------------------------------------------------
    # Block scanning
    # ------------------------------------------------------------------

    def _is_skippable(self, line: str) -> bool:
        s = line.strip()
        return (not s) or s.startswith(self.config.comment_prefix)

    def _split_blocks(self, fp: Path, lines: List[str]) -> List[_Block]:
        blocks: List[_Block] = []
        state = _State.BEFORE_BLOCK
        header_lines: List[Tuple[int, str]] = []
        rows: List[Tuple[int, str]] = []
        header: Optional[_Header] = None
        n_expected = 0

        for line_no, line in enumerate(lines, start=1):
            if state is _State.BEFORE_BLOCK:
                if self._is_skippable(line):
                    continue
                if _looks_like_data_row(line):
                    if blocks:
                        raise MalformedFileError(
                            "data row found after the declared number of rows", path=fp, line_no=line_no
                        )
                    raise MalformedFileError("data row found before any block header", path=fp, line_no=line_no)
                if len(blocks) >= self.config.max_blocks:
                    raise MalformedFileError(
                        f"more than {self.config.max_blocks} blocks in file", path=fp, line_no=line_no
                    )
                header_lines = [(line_no, line)]
                rows = []
                state = _State.IN_HEADER
                continue

            if not line.strip():
                raise MalformedFileError(f"blank line inside block ({state.value})", path=fp, line_no=line_no)

            if state is _State.IN_HEADER:
                header_lines.append((line_no, line))
                if len(header_lines) == _HEADER_LINES:
                    header = _parse_header(fp, header_lines)
                    n_expected = header.number_of_time_steps
                    state = _State.IN_DATA
                continue

            # IN_DATA
            rows.append((line_no, line))
            if len(rows) == n_expected and header is not None:
                blocks.append(_Block(header_lines=tuple(header_lines), header=header, rows=tuple(rows)))
                header = None
                state = _State.BEFORE_BLOCK

        if state is _State.IN_HEADER:
            raise MalformedFileError("file ends inside a block header", path=fp, line_no=len(lines))
        if state is _State.IN_DATA:
            raise MalformedFileError(
                f"block declares {n_expected} rows but only {len(rows)} are present",
                path=fp,
                line_no=len(lines),
            )
        return blocks

    # ------------------------------------------------------------------
    # Series construction
    # ------------------------------------------------------------------

    def _build_series(self, fp: Path, blk: _Block, is_sns: bool) -> CurrentTimeSeries:
        hdr = blk.header
        mat = _parse_rows(fp, blk.rows)

        t = mat[:, 0]
        speed = mat[:, 1]
        direction = mat[:, 2]

        warnings: List[str] = [
            f"block {1 if is_sns else 2} ({'SNS' if is_sns else 'NSN'}): "
            f"lines {blk.header_lines[0][0]}-{blk.rows[-1][0]}"
        ]
        warnings.extend(self._sanity_warnings(t, speed, direction))

        return CurrentTimeSeries(
            t,
            speed,
            direction,
            meter_depth=hdr.meter_depth,
            site_depth=hdr.site_depth,
            delta_t=hdr.delta_t,
            site_tide=hdr.site_tide,
            is_sns=is_sns,
            name=hdr.name,
            variable=hdr.variable,
            source_path=fp,
            warnings=tuple(warnings),
        )

    def _sanity_warnings(self, t: np.ndarray, speed: np.ndarray, direction: np.ndarray) -> List[str]:
        out: List[str] = []
        if self.config.check_time_spacing and t.size >= 3:
            dt = np.diff(t)
            if not np.allclose(dt, dt[0], rtol=1e-6, atol=1e-9):
                out.append(
                    f"raw time column not evenly spaced: dt min={float(dt.min()):.6g}, max={float(dt.max()):.6g}"
                )
        n_neg = int(np.count_nonzero(speed < 0))
        if n_neg:
            out.append(f"{n_neg} samples with negative speed")
        n_dir = int(np.count_nonzero((direction < 0) | (direction >= 360.0)))
        if n_dir:
            out.append(f"{n_dir} directions outside [0, 360) degrees")
        return out


def _looks_like_data_row(line: str) -> bool:
    toks = line.split()
    if len(toks) != 3:
        return False
    try:
        [float(x) for x in toks]
    except ValueError:
        return False
    return True


def _parse_header(fp: Path, header_lines: Sequence[Tuple[int, str]]) -> _Header:
    (_, name_line), (_, var_line), (num_no, num_line) = header_lines
    toks = num_line.split()
    if len(toks) != len(HEADER_FIELDS):
        raise MalformedFileError(
            f"header expects {len(HEADER_FIELDS)} fields {HEADER_FIELDS}, found {len(toks)}",
            path=fp,
            line_no=num_no,
        )
    values = {}
    for key, tok in zip(HEADER_FIELDS, toks):
        try:
            values[key] = float(tok)
        except ValueError:
            raise MalformedFileError(
                f"header field '{key}' is not numeric: {tok!r}", path=fp, line_no=num_no
            ) from None
        if not np.isfinite(values[key]):
            raise MalformedFileError(f"header field '{key}' is not finite: {tok!r}", path=fp, line_no=num_no)

    n = values["number_of_time_steps"]
    if not float(n).is_integer() or n < 1:
        raise MalformedFileError(f"invalid number_of_time_steps: {n!r}", path=fp, line_no=num_no)

    return _Header(
        name=name_line.lstrip("\ufeff").strip(),
        variable=var_line.strip(),
        meter_depth=values["meter_depth"],
        site_depth=values["site_depth"],
        delta_t=values["delta_t"],
        number_of_time_steps=int(n),
        site_tide=values["site_tide"],
    )


def _parse_rows(fp: Path, rows: Sequence[Tuple[int, str]]) -> np.ndarray:
    """(time, speed, direction) rows -> (N, 3) float64 matrix."""
    for line_no, line in rows:
        n_tok = len(line.split())
        if n_tok != 3:
            raise MalformedFileError(f"data row has {n_tok} columns, expected 3", path=fp, line_no=line_no)

    text = "\n".join(line.strip() for _, line in rows)
    raw = pd.read_csv(io.StringIO(text), sep=r"\s+", header=None, dtype=str)
    num = raw.apply(pd.to_numeric, errors="coerce")
    mat = num.to_numpy(dtype=np.float64)

    bad = ~np.all(np.isfinite(mat), axis=1)
    if np.any(bad):
        k = int(np.argmax(bad))
        line_no, line = rows[k]
        raise MalformedFileError(f"data row is not numeric: {line.strip()!r}", path=fp, line_no=line_no)
    return mat


def parse(
    file_path: Union[str, Path],
    config: Optional[CurrentReaderConfig] = None,
) -> Tuple[CurrentTimeSeries, Optional[CurrentTimeSeries]]:
    """Read a current-meter file and return ``(primary, secondary)``; secondary may be None."""
    return CurrentMeterReader(config).read(file_path).as_pair()
