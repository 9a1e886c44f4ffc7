# space_helpers/timeutil.py
# ------------------------------------------------------------
# Calendar & epoch helpers
# ------------------------------------------------------------
# • is_leap_year()        – Gregorian rule, scalar or array
# • to_datetime64()       – CDF_EPOCH / EPOCH16 / TT2000 / unix → ns
# • epoch_tick_format()   – label one tick of an epoch-valued axis
# • EpochTickFormatter    – matplotlib Formatter wrapping the above
# ------------------------------------------------------------
from __future__ import annotations
from typing import Literal, Optional, Union

import numpy as np
import pandas as pd
from matplotlib.ticker import Formatter
import cdflib

EpochType = Literal['epoch', 'epoch16', 'tt2000', 'unix', 'datetime64']

_CDF_KINDS = ('epoch', 'epoch16', 'tt2000')

_DAY_S = 86400.0


# ------------------------------------------------------------------
# Leap years
# ------------------------------------------------------------------
def is_leap_year(year: Union[int, np.ndarray, list]) -> Union[bool, np.ndarray]:
    """
    True where *year* is a Gregorian leap year.
    Scalars give a bool, array-likes a boolean array of the same shape.
    """
    y = np.asarray(year)
    if not np.issubdtype(y.dtype, np.integer):
        if not np.issubdtype(y.dtype, np.floating) or not np.all(np.mod(y, 1) == 0):
            raise ValueError('year must be integral')
        y = y.astype(np.int64)
    leap = ((y % 4 == 0) & (y % 100 != 0)) | (y % 400 == 0)
    if leap.ndim == 0:
        return bool(leap)
    return leap


# ------------------------------------------------------------------
# Epoch conversion
# ------------------------------------------------------------------
def to_datetime64(values, epoch_type: EpochType = 'epoch') -> np.ndarray:
    """
    Convert epoch values to datetime64[ns].

    epoch_type
    ----------
    'epoch'      – CDF_EPOCH, float ms since 0000-01-01
    'epoch16'    – CDF_EPOCH16, complex (s, ps) since 0000-01-01
    'tt2000'     – CDF_TIME_TT2000, int64 ns since J2000 (leap seconds)
    'unix'       – float seconds since 1970-01-01
    'datetime64' – returned as datetime64[ns]
    """
    if epoch_type == 'datetime64':
        return np.asarray(values).astype('datetime64[ns]')

    if epoch_type == 'unix':
        secs = np.asarray(values, dtype='float64')
        epoch1970 = np.datetime64('1970-01-01T00:00:00', 'ns')
        return epoch1970 + (secs * 1e9).astype('timedelta64[ns]')

    if epoch_type not in _CDF_KINDS:
        raise ValueError(f"unknown epoch_type '{epoch_type}'")

    # cdflib dispatches on dtype: int64 → TT2000, float → EPOCH, complex → EPOCH16
    if epoch_type == 'tt2000':
        raw = np.asarray(values, dtype=np.int64)
    elif epoch_type == 'epoch16':
        raw = np.asarray(values, dtype=np.complex128)
    else:
        raw = np.asarray(values, dtype=np.float64)
    scalar = raw.ndim == 0
    out = np.asarray(cdflib.cdfepoch.to_datetime(np.atleast_1d(raw)),
                     dtype='datetime64[ns]')
    return out[0] if scalar else out


# ------------------------------------------------------------------
# Tick labels
# ------------------------------------------------------------------
def _auto_format(span: Optional[float]) -> str:
    """Pick a strftime pattern from the axis span (seconds)."""
    if span is None:
        return '%H:%M:%S'
    if span >= 2 * _DAY_S:
        return '%Y-%m-%d'
    if span >= 120.0:
        return '%H:%M'
    if span >= 2.0:
        return '%H:%M:%S'
    return '%H:%M:%S.%f'


def epoch_tick_format(value: float,
                      pos: Optional[int] = None,
                      *,
                      epoch_type: EpochType = 'epoch',
                      fmt: Optional[str] = None,
                      span: Optional[float] = None) -> str:
    """
    Label for a single tick whose data coordinate is an epoch value.

    Parameters
    ----------
    value      : tick location in *epoch_type* units
    pos        : tick index (matplotlib passes it; 0 = first tick)
    epoch_type : see to_datetime64()
    fmt        : strftime pattern – chosen from *span* when None
    span       : seconds covered by the axis (drives the auto format)

    The first tick of a sub-day axis carries the date on a second line.
    Sub-second labels are trimmed to milliseconds.
    """
    if value is None or not np.all(np.isfinite(value)):
        return ''

    ts = pd.Timestamp(np.asarray(to_datetime64(value, epoch_type)).reshape(-1)[0])
    # outside the datetime64[ns] range (fill values, year 0)
    if pd.isna(ts):
        return ''
    pattern = fmt if fmt is not None else _auto_format(span)
    label = ts.strftime(pattern)
    if pattern.endswith('%f'):
        label = label[:-3]

    if fmt is None and pos == 0 and (span is None or span < 2 * _DAY_S):
        label = f"{label}\n{ts.strftime('%Y-%m-%d')}"
    return label


class EpochTickFormatter(Formatter):
    """
    Tick formatter for axes plotted directly in epoch units, e.g.

        ax.xaxis.set_major_formatter(EpochTickFormatter('tt2000'))
    """

    # seconds per axis unit
    _UNIT_S = {'epoch': 1e-3, 'tt2000': 1e-9, 'unix': 1.0}

    def __init__(self, epoch_type: EpochType = 'epoch', fmt: Optional[str] = None):
        if epoch_type not in self._UNIT_S:
            raise ValueError(f"unsupported axis epoch_type '{epoch_type}'")
        self.epoch_type = epoch_type
        self.fmt = fmt

    def _span(self) -> Optional[float]:
        if self.axis is None:
            return None
        lo, hi = self.axis.get_view_interval()
        return abs(hi - lo) * self._UNIT_S[self.epoch_type]

    def __call__(self, x, pos=None) -> str:
        return epoch_tick_format(x, pos,
                                 epoch_type=self.epoch_type,
                                 fmt=self.fmt,
                                 span=self._span())
