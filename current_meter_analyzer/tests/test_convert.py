"""Tests for RCM record conversion and serial day-number helpers."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from current_meter_analyzer.analysis.convert import (
    DEFAULT_ANCHOR,
    datenum_to_datetime,
    datetime_to_datenum,
    to_rcm_record,
)
from current_meter_analyzer.ingest.readers_dat import parse
from current_meter_analyzer.models.rcm import RcmRecord
from current_meter_analyzer.models.timeseries import CurrentTimeSeries


def test_default_anchor_is_unix_epoch() -> None:
    assert DEFAULT_ANCHOR == 719529
    assert datenum_to_datetime(DEFAULT_ANCHOR)[0] == pd.Timestamp("1970-01-01")


def test_to_rcm_no_anchor(two_block_file) -> None:
    sns, _ = parse(two_block_file.path)
    rec = sns.to_rcm_record()

    assert isinstance(rec, RcmRecord)
    assert rec.length == 360
    assert rec.time[0] == 719529
    assert rec.time[-1] == pytest.approx(719529 + 15 - 1 / 24, abs=1e-9)
    assert rec.speed[0] == pytest.approx(0.4671, abs=1e-4)
    assert rec.direction[0] == pytest.approx(228.54, abs=1e-4)
    assert rec.u[0] == pytest.approx(-0.3500532, abs=1e-4)
    assert rec.v[0] == pytest.approx(-0.3092655, abs=1e-4)
    assert rec.height_above_bed == pytest.approx(22.3, abs=1e-4)

    np.testing.assert_array_equal(rec.speed, sns.speed)
    np.testing.assert_array_equal(rec.direction, sns.direction)
    np.testing.assert_array_equal(rec.u, sns.u)
    np.testing.assert_array_equal(rec.v, sns.v)


def test_to_rcm_with_anchor(two_block_file) -> None:
    sns, _ = parse(two_block_file.path)
    rec = sns.to_rcm_record(736119)

    assert rec.length == 360
    assert rec.time[0] == 736119
    assert rec.time[-1] == pytest.approx(736119 + 15 - 1 / 24, abs=1e-9)
    assert rec.height_above_bed == pytest.approx(22.3, abs=1e-4)


def test_record_is_detached_from_series() -> None:
    ts = CurrentTimeSeries([1, 2], [1.0, 2.0], [0.0, 90.0], meter_depth=-4.9, site_depth=-27.2, delta_t=600.0)
    rec = to_rcm_record(ts)
    ts.scale_speed(10.0)
    np.testing.assert_array_equal(rec.speed, [1.0, 2.0])
    np.testing.assert_allclose(rec.u, [0.0, 2.0], atol=1e-12)


def test_height_above_bed_is_nan_without_depths() -> None:
    ts = CurrentTimeSeries([1, 2], [1.0, 2.0], [0.0, 90.0], delta_t=600.0)
    rec = to_rcm_record(ts)
    assert rec.length == 2
    assert np.isnan(rec.height_above_bed)
    np.testing.assert_allclose(rec.u, [0.0, 2.0], atol=1e-12)

    only_site = CurrentTimeSeries([1], [1.0], [0.0], site_depth=-27.2, delta_t=600.0)
    assert np.isnan(only_site.to_rcm_record().height_above_bed)

    empty = to_rcm_record(CurrentTimeSeries([], [], []))
    assert empty.length == 0
    assert np.isnan(empty.height_above_bed)


def test_record_frame_and_datetimes() -> None:
    ts = CurrentTimeSeries(
        [0, 1, 2], [0.1, 0.2, 0.3], [0, 90, 180], meter_depth=-2.0, site_depth=-12.5, delta_t=1800.0
    )
    rec = ts.to_rcm_record(datetime_to_datenum("2016-03-01 06:00"))

    stamps = rec.datetimes()
    assert list(stamps) == [
        pd.Timestamp("2016-03-01 06:00"),
        pd.Timestamp("2016-03-01 06:30"),
        pd.Timestamp("2016-03-01 07:00"),
    ]

    df = rec.to_frame()
    assert list(df.columns) == ["time", "speed", "direction", "u", "v"]
    assert df.attrs["height_above_bed"] == pytest.approx(10.5)


def test_datenum_helpers() -> None:
    assert datetime_to_datenum("1970-01-01") == 719529.0
    assert datetime_to_datenum("2016-03-01") == 736390.0
    assert datetime_to_datenum(pd.Timestamp("2016-03-01 12:00", tz="UTC")) == pytest.approx(736390.5)
    assert datetime_to_datenum(pd.Timestamp("2016-03-01 13:00", tz="Europe/Paris")) == pytest.approx(736390.5)

    back = datenum_to_datetime(np.array([736390.0, 736390.25]))
    assert list(back) == [pd.Timestamp("2016-03-01"), pd.Timestamp("2016-03-01 06:00")]
