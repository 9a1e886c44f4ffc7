# space_helpers/index_range.py
# ------------------------------------------------------------
# Index bounds of a value range inside a monotonic array
# ------------------------------------------------------------
# • index_range()  : floor-search both ends of [a, b], nudge each
#                    index according to (array, range) orientation,
#                    clamp into [0, N-1]
# • Works on ascending *or* descending arrays (energy tables,
#   frequency bins, time tags) and on ascending *or* descending
#   requests.  The returned stride tells the caller which way to
#   walk i0 → i1 to keep the order of the request.
# ------------------------------------------------------------
from __future__ import annotations
from typing import Callable, Dict, NamedTuple, Sequence, Tuple
import operator

import numpy as np


class InvalidArgument(ValueError):
    """Malformed array or range passed to index_range()."""


class IndexRange(NamedTuple):
    indices: Tuple[int, int]
    stride: int

    def to_slice(self) -> slice:
        """
        Slice covering indices[0]..indices[1] inclusive, walked in the
        order of the requested range (descending when stride == -1).
        """
        lo, hi = sorted(self.indices)
        if self.stride > 0:
            return slice(lo, hi + 1, 1)
        return slice(hi, lo - 1 if lo > 0 else None, -1)


# ------------------------------------------------------------------
# Floor search
# ------------------------------------------------------------------
def _floor_index(arr: np.ndarray, value: float, ascending: bool) -> int:
    """
    Ascending  : greatest k with arr[k] <= value
    Descending : greatest k with arr[k] >= value
    -1 when no such k exists.
    """
    if ascending:
        return int(np.searchsorted(arr, value, side='right')) - 1
    # search the ascending view, then map back
    j = int(np.searchsorted(arr[::-1], value, side='left'))
    return arr.size - 1 - j


# ------------------------------------------------------------------
# Orientation policy
#   key   : (array ascending, range ascending)
#   value : ((i0 test, i0 step), (i1 test, i1 step))
#   test  : step when test(arr[i], bound) holds
# ------------------------------------------------------------------
_Rule = Tuple[Callable[[float, float], bool], int]

_ADJUST: Dict[Tuple[bool, bool], Tuple[_Rule, _Rule]] = {
    (True,  True):  ((operator.lt, +1), (operator.gt, -1)),
    (True,  False): ((operator.gt, -1), (operator.lt, +1)),
    (False, True):  ((operator.lt, -1), (operator.gt, +1)),
    (False, False): ((operator.gt, +1), (operator.lt, -1)),
}


def _nudge(arr: np.ndarray, idx: int, bound: float, rule: _Rule) -> int:
    test, step = rule
    if test(arr[idx], bound):
        return idx + step
    return idx


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------
def index_range(sequence: Sequence[float] | np.ndarray,
                interval: Sequence[float] | np.ndarray,
                force_ascending: bool = False) -> IndexRange:
    """
    Locate the indices of *sequence* that bound *interval*.

    Parameters
    ----------
    sequence : (N,) monotonic array, ascending or descending (not checked)
    interval : [a, b] – [min, max] or [max, min]; order is kept
    force_ascending : return indices sorted so that i0 <= i1

    Returns
    -------
    IndexRange((i0, i1), stride)
        stride = -1 when the range runs against the array direction.

    Notes
    -----
    Each bound is floor-located (greatest index not past the value, with
    out-of-range bounds clamped to 0), then moved one step depending on
    the orientation pair:

        array  range  i0 moves           i1 moves
        asc    asc    +1 if S[i0] < a    -1 if S[i1] > b
        asc    desc   -1 if S[i0] > a    +1 if S[i1] < b
        desc   asc    -1 if S[i0] < a    +1 if S[i1] > b
        desc   desc   +1 if S[i0] > a    -1 if S[i1] < b

    Bounds that sit exactly on a sample are never moved.  When both
    bounds floor onto the same sample the pair (k, k) is returned as-is.
    """
    arr = np.asarray(sequence).reshape(-1)
    if arr.size == 0:
        raise InvalidArgument('sequence must contain at least one value')
    rng = np.asarray(interval).reshape(-1)
    if rng.size != 2:
        raise InvalidArgument(f'interval must have exactly two elements, got {rng.size}')

    a, b = rng[0], rng[1]
    range_desc = bool(a > b)
    arr_asc = bool(arr.size < 2 or arr[1] > arr[0])
    stride = -1 if range_desc == arr_asc else 1

    n = arr.size
    if n == 1:
        return IndexRange((0, 0), stride)

    i0 = max(_floor_index(arr, a, arr_asc), 0)
    i1 = max(_floor_index(arr, b, arr_asc), 0)
    if i0 == i1:
        return IndexRange((i0, i1), stride)

    rule0, rule1 = _ADJUST[(arr_asc, not range_desc)]
    i0 = _nudge(arr, i0, a, rule0)
    i1 = _nudge(arr, i1, b, rule1)

    if force_ascending and i0 > i1:
        i0, i1 = i1, i0

    i0 = int(np.clip(i0, 0, n - 1))
    i1 = int(np.clip(i1, 0, n - 1))
    return IndexRange((i0, i1), stride)
