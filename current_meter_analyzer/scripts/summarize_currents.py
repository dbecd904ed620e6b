"""
Print a one-line summary per block of a current-meter file.

Examples
--------
python -m current_meter_analyzer.scripts.summarize_currents Gorsten-NS-s.dat
python -m current_meter_analyzer.scripts.summarize_currents Gorsten-NS-s.dat --start 2016-03-01 --scale 1.1
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from current_meter_analyzer.analysis.convert import DEFAULT_ANCHOR, datenum_to_datetime, datetime_to_datenum
from current_meter_analyzer.analysis.plotting import plot_series
from current_meter_analyzer.analysis.summary import summarize_series
from current_meter_analyzer.ingest.readers_dat import CurrentMeterReader
from current_meter_analyzer.models.timeseries import CurrentTimeSeries


def format_block(series: CurrentTimeSeries, anchor: float) -> List[str]:
    """Summary line for one series, followed by its ingest notes."""
    s = summarize_series(series)
    rec = series.to_rcm_record(anchor)
    span = datenum_to_datetime(rec.time[[0, -1]])
    lines = [
        f"[{series.tide_label}] {series.name} / {series.variable}: n={s.n_samples}, "
        f"mean speed={s.mean_speed:.4g}, residual={s.residual_speed:.4g} @ {s.residual_direction:.1f} deg, "
        f"height above bed={rec.height_above_bed:.3g}, "
        f"span {span[0]:%Y-%m-%d %H:%M} -> {span[1]:%Y-%m-%d %H:%M}"
    ]
    lines.extend(f"  [warn] {w}" for w in series.warnings[1:])
    return lines


def _plot_path(base: Path, series: CurrentTimeSeries) -> Path:
    return base.with_name(f"{base.stem}_{series.tide_label}{base.suffix or '.png'}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m current_meter_analyzer.scripts.summarize_currents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Summarize the SNS/NSN blocks of a current-meter data file.

            The calendar axis starts at --anchor (serial day number) or --start (ISO date);
            by default it starts at 1970-01-01.
            """
        ),
    )
    p.add_argument("file", help="Current-meter data file")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--anchor", type=float, default=None, help="Serial day number of the first sample")
    g.add_argument("--start", default=None, help="Start date/time of the first sample (ISO 8601)")
    p.add_argument("--scale", type=float, default=None, help="Multiply speeds by this factor before summarizing")
    p.add_argument("--plot", default=None, help="Write a quick-look figure per block to this path (suffix gets _SNS/_NSN)")

    ns = p.parse_args(list(argv) if argv is not None else None)

    if ns.start is not None:
        anchor = datetime_to_datenum(ns.start)
    elif ns.anchor is not None:
        anchor = float(ns.anchor)
    else:
        anchor = DEFAULT_ANCHOR

    if ns.plot is not None:
        import matplotlib.pyplot as plt  # late import

    parsed = CurrentMeterReader().read(ns.file)
    print(f"{parsed.source_path.name}: {len(parsed.blocks)} block(s)")
    for series in parsed.blocks:
        if ns.scale is not None:
            series.scale_speed(ns.scale)
        for line in format_block(series, anchor):
            print(line)
        if ns.plot is not None:
            out = _plot_path(Path(ns.plot), series)
            fig = plot_series(series, anchor=anchor)
            fig.savefig(out, dpi=120)
            plt.close(fig)
            print(f"  wrote: {out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
