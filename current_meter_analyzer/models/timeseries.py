from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from current_meter_analyzer.errors import EmptySeriesError, ShapeMismatchError

SECONDS_PER_DAY = 86400.0

ArrayLike = Union[Sequence[float], np.ndarray]


def _frozen_1d(x: ArrayLike, name: str) -> np.ndarray:
    """Copy ``x`` into a read-only 1D float64 array."""
    arr = np.array(x, dtype=np.float64, copy=True)
    if arr.size == 0:
        arr = arr.reshape(0)
    if arr.ndim != 1:
        raise ShapeMismatchError(f"'{name}' must be 1D, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


class CurrentTimeSeries:
    """
    One contiguous, evenly sampled record of current-meter observations.

    Notes
    - time/speed/direction are stored as read-only float64 arrays; u and v are
      derived from speed/direction on every assignment and cannot be set.
    - 'time' holds the raw instrument step markers as read from the file. The
      calendar axis (see contextualise_time) is derived from index and delta_t only.
    - Conversion factors are carried, never auto-applied; use to_si() explicitly.
    - Three empty arrays are a valid "no data" placeholder.
    """

    def __init__(
        self,
        time: ArrayLike,
        speed: ArrayLike,
        direction: ArrayLike,
        *,
        meter_depth: Optional[float] = None,
        site_depth: Optional[float] = None,
        delta_t: Optional[float] = None,
        site_tide: Optional[float] = None,
        is_sns: Optional[bool] = None,
        name: str = "",
        variable: str = "",
        length_unit_conversion_factor: float = 1.0,
        time_unit_conversion_factor: float = 1.0,
        source_path: Optional[Path] = None,
        warnings: Tuple[str, ...] = (),
    ) -> None:
        t = _frozen_1d(time, "time")
        s = _frozen_1d(speed, "speed")
        d = _frozen_1d(direction, "direction")
        if not (t.size == s.size == d.size):
            raise ShapeMismatchError(
                f"time/speed/direction lengths differ: {t.size}/{s.size}/{d.size}"
            )

        self._time = t
        self._speed = s
        self._direction = d
        self._derive_components()

        self.meter_depth = meter_depth
        self.site_depth = site_depth
        self.delta_t = delta_t
        self.site_tide = site_tide
        self.is_sns = is_sns
        self.name = name
        self.variable = variable
        self.length_unit_conversion_factor = float(length_unit_conversion_factor)
        self.time_unit_conversion_factor = float(time_unit_conversion_factor)
        self.source_path = source_path
        self.warnings = tuple(warnings)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_file(
        cls, file_path: Union[str, Path]
    ) -> Tuple["CurrentTimeSeries", Optional["CurrentTimeSeries"]]:
        """Parse a current-meter file into ``(primary, secondary)``.

        The secondary series is ``None`` for single-block files.
        """
        # Avoid circular import at module level
        from current_meter_analyzer.ingest.readers_dat import parse

        return parse(file_path)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    @property
    def time(self) -> np.ndarray:
        return self._time

    @property
    def speed(self) -> np.ndarray:
        return self._speed

    @speed.setter
    def speed(self, value: ArrayLike) -> None:
        s = _frozen_1d(value, "speed")
        if s.size != self._time.size:
            raise ShapeMismatchError(f"speed has {s.size} samples, series has {self._time.size}")
        self._speed = s
        self._derive_components()

    @property
    def direction(self) -> np.ndarray:
        return self._direction

    @direction.setter
    def direction(self, value: ArrayLike) -> None:
        d = _frozen_1d(value, "direction")
        if d.size != self._time.size:
            raise ShapeMismatchError(f"direction has {d.size} samples, series has {self._time.size}")
        self._direction = d
        self._derive_components()

    @property
    def u(self) -> np.ndarray:
        """Eastward component, ``speed * sin(direction)``."""
        return self._u

    @property
    def v(self) -> np.ndarray:
        """Northward component, ``speed * cos(direction)``."""
        return self._v

    def _derive_components(self) -> None:
        rad = np.deg2rad(self._direction)
        u = self._speed * np.sin(rad)
        v = self._speed * np.cos(rad)
        u.flags.writeable = False
        v.flags.writeable = False
        self._u = u
        self._v = v

    @property
    def number_of_time_steps(self) -> Optional[int]:
        """Sample count, or None for an empty placeholder series."""
        n = int(self._time.size)
        return n if n else None

    @property
    def tide_label(self) -> Optional[str]:
        if self.is_sns is None:
            return None
        return "SNS" if self.is_sns else "NSN"

    def __len__(self) -> int:
        return int(self._time.size)

    def __repr__(self) -> str:
        return (
            f"CurrentTimeSeries(name={self.name!r}, variable={self.variable!r}, "
            f"n={len(self)}, delta_t={self.delta_t!r}, tide={self.tide_label!r})"
        )

    # ------------------------------------------------------------------
    # Time axis
    # ------------------------------------------------------------------

    def time_indexes(self) -> np.ndarray:
        """One-based ordinal index per sample: ``1, 2, ..., N``."""
        return np.arange(1, len(self) + 1, dtype=np.int64)

    def contextualise_time(self, anchor: float) -> np.ndarray:
        """
        Map the sample index onto an absolute day-number axis.

        ``t[i] = anchor + (i - 1) * delta_t / 86400`` for ``i = 1..N``. The raw
        'time' column is not used. Without ``delta_t`` the axis is N NaNs.
        """
        n = len(self)
        if self.delta_t is None:
            return np.full(n, np.nan, dtype=np.float64)
        steps = np.arange(n, dtype=np.float64)
        return float(anchor) + steps * float(self.delta_t) / SECONDS_PER_DAY

    # ------------------------------------------------------------------
    # Statistics and scaling
    # ------------------------------------------------------------------

    def mean_speed(self) -> float:
        if len(self) == 0:
            raise EmptySeriesError("mean_speed() requested on an empty series.")
        return float(np.mean(self._speed))

    def scale_speed(self, factor: float) -> "CurrentTimeSeries":
        """Multiply speed (and therefore u, v) by ``factor`` in place.

        Direction, time and metadata are left untouched. Negative factors are allowed.
        """
        self.speed = self._speed * float(factor)
        return self

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_rcm_record(self, anchor: Optional[float] = None):
        """Build an :class:`~current_meter_analyzer.models.rcm.RcmRecord`.

        ``anchor`` defaults to :data:`~current_meter_analyzer.analysis.convert.DEFAULT_ANCHOR`.
        """
        from current_meter_analyzer.analysis.convert import DEFAULT_ANCHOR, to_rcm_record

        return to_rcm_record(self, DEFAULT_ANCHOR if anchor is None else anchor)

    def copy(self) -> "CurrentTimeSeries":
        return self._replace()

    def to_si(self) -> "CurrentTimeSeries":
        """Return a new series with the unit conversion factors applied.

        time and delta_t are multiplied by the time factor, depths and tide by the
        length factor, speed by length/time. Both factors are reset to 1.
        """
        lf = self.length_unit_conversion_factor
        tf = self.time_unit_conversion_factor

        def _scaled(x: Optional[float], k: float) -> Optional[float]:
            return None if x is None else float(x) * k

        return self._replace(
            time=self._time * tf,
            speed=self._speed * (lf / tf),
            meter_depth=_scaled(self.meter_depth, lf),
            site_depth=_scaled(self.site_depth, lf),
            site_tide=_scaled(self.site_tide, lf),
            delta_t=_scaled(self.delta_t, tf),
            length_unit_conversion_factor=1.0,
            time_unit_conversion_factor=1.0,
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "time": self._time,
                "speed": self._speed,
                "direction": self._direction,
                "u": self._u,
                "v": self._v,
            }
        )

    def _replace(self, **changes) -> "CurrentTimeSeries":
        kw = dict(
            time=self._time,
            speed=self._speed,
            direction=self._direction,
            meter_depth=self.meter_depth,
            site_depth=self.site_depth,
            delta_t=self.delta_t,
            site_tide=self.site_tide,
            is_sns=self.is_sns,
            name=self.name,
            variable=self.variable,
            length_unit_conversion_factor=self.length_unit_conversion_factor,
            time_unit_conversion_factor=self.time_unit_conversion_factor,
            source_path=self.source_path,
            warnings=self.warnings,
        )
        kw.update(changes)
        return CurrentTimeSeries(**kw)
