"""Quick-look figures for current series."""

from __future__ import annotations

from typing import Optional

from current_meter_analyzer.models.timeseries import CurrentTimeSeries


def plot_series(series: CurrentTimeSeries, *, anchor: Optional[float] = None, title: Optional[str] = None):
    """
    Two-panel figure: speed on top, u/v components below.

    The x axis is the calendar axis from ``series.to_rcm_record(anchor)``; with
    ``anchor=None`` the default epoch anchor is used.

    Returns
    -------
    matplotlib.figure.Figure
    """
    import matplotlib.pyplot as plt  # late import

    rec = series.to_rcm_record(anchor)
    x = rec.datetimes()

    fig, (ax_s, ax_uv) = plt.subplots(2, 1, sharex=True, figsize=(10.0, 5.6))
    ax_s.plot(x, rec.speed, lw=0.8, color="k")
    ax_s.set_ylabel("speed")
    ax_s.grid(True, alpha=0.3)

    ax_uv.plot(x, rec.u, lw=0.8, label="u (east)")
    ax_uv.plot(x, rec.v, lw=0.8, label="v (north)")
    ax_uv.axhline(0.0, color="0.5", lw=0.5)
    ax_uv.set_ylabel("velocity")
    ax_uv.legend(loc="upper right", fontsize=8)
    ax_uv.grid(True, alpha=0.3)

    if title is None:
        label = f" [{series.tide_label}]" if series.tide_label else ""
        title = f"{series.name} {series.variable}{label}".strip()
    fig.suptitle(title)
    fig.autofmt_xdate()
    return fig
