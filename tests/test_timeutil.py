"""Leap years, epoch conversion and epoch tick labels."""

import numpy as np
import pytest
import matplotlib.pyplot as plt
import cdflib

from space_helpers import timeutil
from space_helpers.timeutil import (EpochTickFormatter, epoch_tick_format,
                                    is_leap_year, to_datetime64)


# ---------------------------------------------------------------------
# Leap years
# ---------------------------------------------------------------------
@pytest.mark.parametrize("year, expected", [
    (1900, False),
    (2000, True),
    (2019, False),
    (2020, True),
    (2100, False),
    (2400, True),
])
def test_is_leap_year_scalar(year, expected):
    result = is_leap_year(year)
    assert isinstance(result, bool)
    assert result is expected


def test_is_leap_year_array():
    years = np.array([[1996, 1997], [2000, 1900]])
    result = is_leap_year(years)
    assert result.shape == years.shape
    np.testing.assert_array_equal(result, [[True, False], [True, False]])


def test_is_leap_year_integral_floats():
    assert is_leap_year(2024.0) is True


def test_is_leap_year_rejects_fractions():
    with pytest.raises(ValueError):
        is_leap_year(2019.5)


# ---------------------------------------------------------------------
# Epoch conversion
# ---------------------------------------------------------------------
def test_cdf_epoch_to_datetime64():
    epoch = cdflib.cdfepoch.compute_epoch([2019, 1, 27, 12, 30, 15, 250])
    out = to_datetime64(epoch, 'epoch')
    assert out == np.datetime64('2019-01-27T12:30:15.250', 'ns')


def test_cdf_epoch16_to_datetime64():
    epoch16 = cdflib.cdfepoch.compute_epoch16([2019, 1, 27, 12, 30, 15, 250, 0, 0, 0])
    out = to_datetime64(epoch16, 'epoch16')
    assert np.asarray(out).reshape(-1)[0] == np.datetime64('2019-01-27T12:30:15.250', 'ns')


def test_tt2000_array_to_datetime64():
    tt = cdflib.cdfepoch.compute_tt2000([[2019, 1, 27, 12, 0, 0, 0, 0, 0],
                                         [2019, 1, 27, 12, 0, 1, 0, 0, 0]])
    out = to_datetime64(np.asarray(tt), 'tt2000')
    assert out.dtype == np.dtype('datetime64[ns]')
    np.testing.assert_array_equal(
        out, np.array(['2019-01-27T12:00:00', '2019-01-27T12:00:01'], dtype='datetime64[ns]'))


def test_unix_seconds_to_datetime64():
    out = to_datetime64([0.0, 86400.5], 'unix')
    np.testing.assert_array_equal(
        out, np.array(['1970-01-01T00:00:00', '1970-01-02T00:00:00.5'], dtype='datetime64[ns]'))


def test_unknown_epoch_type():
    with pytest.raises(ValueError):
        to_datetime64([1.0], 'julian')


# ---------------------------------------------------------------------
# Tick labels
# ---------------------------------------------------------------------
class TestEpochTickFormat:

    def setup_method(self):
        self.epoch = cdflib.cdfepoch.compute_epoch([2019, 1, 27, 12, 30, 15, 250])

    def test_explicit_format(self):
        assert epoch_tick_format(self.epoch, fmt='%Y-%m-%dT%H:%M') == '2019-01-27T12:30'

    def test_auto_format_follows_span(self):
        assert epoch_tick_format(self.epoch, 1, span=10 * 86400.0) == '2019-01-27'
        assert epoch_tick_format(self.epoch, 1, span=3600.0) == '12:30'
        assert epoch_tick_format(self.epoch, 1, span=60.0) == '12:30:15'
        assert epoch_tick_format(self.epoch, 1, span=0.5) == '12:30:15.250'

    def test_first_tick_carries_date(self):
        label = epoch_tick_format(self.epoch, 0, span=60.0)
        assert label == '12:30:15\n2019-01-27'

    def test_non_finite_value_is_blank(self):
        assert epoch_tick_format(np.nan) == ''

    def test_out_of_range_epoch_is_blank(self):
        # year 0 falls outside datetime64[ns]
        assert epoch_tick_format(0.0, 1, span=3600.0) == ''

    def test_tt2000_value(self):
        tt = cdflib.cdfepoch.compute_tt2000([2019, 1, 27, 12, 0, 5, 0, 0, 0])
        assert epoch_tick_format(tt, 3, epoch_type='tt2000', span=60.0) == '12:00:05'


def test_formatter_uses_axis_span():
    t0 = cdflib.cdfepoch.compute_epoch([2019, 1, 27, 12, 0, 0, 0])
    fig, ax = plt.subplots()
    ax.plot([t0, t0 + 60_000.0], [0, 1])  # one minute in ms
    ax.set_xlim(t0, t0 + 60_000.0)
    fmt = EpochTickFormatter('epoch')
    ax.xaxis.set_major_formatter(fmt)

    assert fmt(t0 + 30_000.0, 2) == '12:00:30'
    assert fmt(t0, 0) == '12:00:00\n2019-01-27'


def test_formatter_rejects_complex_axis():
    with pytest.raises(ValueError):
        EpochTickFormatter('epoch16')


def test_module_exports():
    for name in ('is_leap_year', 'to_datetime64', 'epoch_tick_format', 'EpochTickFormatter'):
        assert hasattr(timeutil, name)
