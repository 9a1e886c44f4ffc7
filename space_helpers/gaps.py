# space_helpers/gaps.py
# ------------------------------------------------------------
# Data-gap detection for nominally uniform time series
# ------------------------------------------------------------
# • find_gaps()  : contiguous [start, stop] index segments split at
#                  any spacing above tolerance × cadence (or an
#                  explicit gap_dt)
# • gap_list()   : same result as start/end/duration dicts
# • Accepts float seconds, datetime64, or int64 ns (TT2000 / unix) tags.
# ------------------------------------------------------------
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np


# ------------------------------------------------------------------
# Config
# ------------------------------------------------------------------
class GapCfg:
    """
    tolerance : spacing > tolerance × cadence is a gap
    dt        : cadence (s); None → median sample spacing
    """
    tolerance: float = 1.5
    dt: Optional[float] = None

    def __init__(self, **kw):
        for k, v in kw.items():
            if not hasattr(self, k):
                raise ValueError(f'Unknown GapCfg key {k}')
            setattr(self, k, v)


@dataclass
class GapResult:
    intervals: np.ndarray      # (n_segments, 2) inclusive [start, stop]
    n_gaps: int
    dt: float                  # cadence used (s)
    threshold: float           # gap threshold (s)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------
def _to_seconds(t: np.ndarray) -> np.ndarray:
    """
    Seconds relative to t[0].  datetime64 taken as-is; int64 > ~1e17 is
    assumed to be nanoseconds (TT2000 or unix ns); anything else seconds.
    """
    if np.issubdtype(t.dtype, np.datetime64):
        return ((t - t[0]) / np.timedelta64(1, 's')).astype(np.float64)
    if np.issubdtype(t.dtype, np.integer) and np.abs(t).max() > 1e17:
        return (t - t[0]).astype(np.float64) * 1e-9
    return t.astype(np.float64) - float(t[0])


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------
def find_gaps(x,
              gap_dt: Optional[float] = None,
              *,
              cfg: GapCfg = GapCfg()) -> GapResult:
    """
    Split a time series into contiguous segments.

    Parameters
    ----------
    x      : (N,) increasing time tags
    gap_dt : explicit gap threshold (s); overrides cfg.tolerance
    cfg    : GapCfg

    Returns
    -------
    GapResult with intervals[k] = [first, last] index of segment k
    """
    t = np.asarray(x).reshape(-1)
    if t.size == 0:
        raise ValueError('time array is empty')
    if cfg.tolerance <= 0:
        raise ValueError('tolerance must be positive')

    if t.size == 1:
        return GapResult(np.array([[0, 0]], dtype=int), 0, np.nan, np.nan)

    secs = _to_seconds(t)
    dt_all = np.diff(secs)
    if np.any(dt_all[np.isfinite(dt_all)] < 0):
        raise ValueError('time array must be monotonically increasing')

    if cfg.dt is not None:
        dt = float(cfg.dt)
    else:
        pos = dt_all[np.isfinite(dt_all) & (dt_all > 0)]
        dt = float(np.median(pos)) if pos.size else np.nan

    thr = float(gap_dt) if gap_dt is not None else cfg.tolerance * dt

    # NaN threshold (all-duplicate tags) → nothing is a gap
    with np.errstate(invalid='ignore'):
        idx = np.where(dt_all > thr)[0]

    starts = np.concatenate([[0], idx + 1])
    stops = np.concatenate([idx, [t.size - 1]])
    intervals = np.column_stack([starts, stops]).astype(int)
    return GapResult(intervals, int(idx.size), dt, thr)


def gap_list(x, result: GapResult) -> List[Dict[str, float]]:
    """
    One dict per gap:  start_time = last sample before the gap,
    end_time = first sample after it (input units), duration in s.
    """
    t = np.asarray(x).reshape(-1)
    secs = _to_seconds(t)
    gaps = []
    for (_, stop), (start, _) in zip(result.intervals[:-1], result.intervals[1:]):
        gaps.append({'start_time': t[stop],
                     'end_time': t[start],
                     'duration': float(secs[start] - secs[stop])})
    return gaps
