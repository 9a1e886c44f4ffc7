# space_helpers/polplot.py
# ============================================================
# Polarization-analysis spectrogram figure
# ------------------------------------------------------------
#   power        – log10 wave power
#   pol_degree   – degree of polarization   (0 … 1)
#   ellipticity  – sense & shape of rotation (−1 … 1)
#   wave_angle   – wave-normal angle to B   (0 … 90°)
#   coherency    – component coherency      (0 … 1)
#
# • Derived quantities are hidden where the degree of polarization
#   is below PolPlotCfg.min_pol_degree.
# • trange / frange crop via index_range(); frequency tables may be
#   stored high → low.
# • Data gaps are blanked instead of smeared across.
# • Errors while drawing → warning + None, never a half-built figure.
# ============================================================
from __future__ import annotations
from typing import Dict, Optional, Sequence, Tuple, Union
import warnings

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.dates as mdates

from .index_range import index_range
from .gaps import find_gaps
from .timeutil import EpochTickFormatter, EpochType


# =====================================================================
# Config
# =====================================================================
class PolPlotCfg:
    """
    User-tunable plot knobs.
    """
    min_pol_degree: float = 0.7          # mask derived panels below this
    power_cmap: str = 'jet'
    pol_cmap: str = 'viridis'
    ellipticity_cmap: str = 'RdBu_r'
    angle_cmap: str = 'plasma'
    log_freq: bool = False               # log-scaled frequency axis
    figsize: Tuple[float, float] = (9, 9)
    dpi: int = 300                       # savefig resolution

    def __init__(self, **kw):
        for k, v in kw.items():
            if not hasattr(self, k):
                raise ValueError(f'Unknown PolPlotCfg key {k}')
            setattr(self, k, v)


# key → (ylabel, colorbar label, vmin, vmax, cmap attribute, log10)
_PANELS = {
    'power':       ('Power',       'log$_{10}$ P (nT$^2$/Hz)', None, None, 'power_cmap', True),
    'pol_degree':  ('Deg. Pol.',   'DoP',                      0.0,  1.0,  'pol_cmap', False),
    'ellipticity': ('Ellipticity', '$\\epsilon$',              -1.0, 1.0,  'ellipticity_cmap', False),
    'wave_angle':  ('Wave Normal', '$\\theta_{kB}$ (deg)',     0.0,  90.0, 'angle_cmap', False),
    'coherency':   ('Coherency',   'Coh.',                     0.0,  1.0,  'pol_cmap', False),
}

# hidden where the degree of polarization is low
_DERIVED = ('ellipticity', 'wave_angle', 'coherency')


def _set_style() -> None:
    plt.rcParams.update({
        'axes.grid': False,
        'font.size': 10,
        'figure.dpi': 120,
        'savefig.dpi': 300,
        'axes.titleweight': 'bold'
    })

_set_style()


# =====================================================================
# Internals
# =====================================================================
def _prep_log(data: np.ndarray, floor: float = 1e-30) -> np.ndarray:
    """log10 with everything ≤0 → NaN."""
    dat = np.array(data, dtype=float)
    dat[dat <= 0] = np.nan
    return np.log10(np.maximum(dat, floor))


def _as_axis(values: np.ndarray) -> np.ndarray:
    """Comparable numeric view of a time/frequency axis."""
    v = np.asarray(values)
    if np.issubdtype(v.dtype, np.datetime64):
        return v.astype('datetime64[ns]').astype(np.int64)
    return v.astype(np.float64)


def _crop(axis: np.ndarray, rng: Optional[Sequence], is_time: bool) -> slice:
    if rng is None:
        return slice(None)
    vals = np.asarray(axis)
    bounds = np.asarray(rng)
    if is_time and np.issubdtype(vals.dtype, np.datetime64):
        bounds = bounds.astype('datetime64[ns]')
    (i0, i1), _ = index_range(_as_axis(vals), _as_axis(bounds), force_ascending=True)
    return slice(i0, i1 + 1)


def _gap_midpoint(t0, t1):
    half = t1 - t0
    if np.issubdtype(np.asarray(half).dtype, np.integer):
        return t0 + half // 2
    return t0 + half / 2


def _blank_gaps(t: np.ndarray,
                data: Dict[str, np.ndarray]) -> Tuple[np.ndarray, Dict[str, np.ndarray]]:
    """Insert an all-NaN time column in the middle of every data gap."""
    if t.size < 3:
        return t, data
    gaps = find_gaps(t)
    if gaps.n_gaps == 0:
        return t, data

    stops = gaps.intervals[:-1, 1]
    starts = gaps.intervals[1:, 0]
    where = stops + 1
    t_fill = np.array([_gap_midpoint(t[s], t[e]) for s, e in zip(stops, starts)],
                      dtype=t.dtype)
    t_out = np.insert(t, where, t_fill)
    out = {k: np.insert(np.asarray(z, dtype=float), where, np.nan, axis=0)
           for k, z in data.items()}
    return t_out, out


def _panel(ax: plt.Axes,
           t: np.ndarray,
           f: np.ndarray,
           z: np.ndarray,
           *,
           ylabel: str,
           clabel: str,
           vmin: Optional[float],
           vmax: Optional[float],
           cmap: str,
           log_freq: bool):
    T, F = np.meshgrid(t, f, indexing='ij')
    pcm = ax.pcolormesh(T, F, z,
                        cmap=cmap,
                        shading='auto',
                        vmin=vmin, vmax=vmax)
    if log_freq:
        ax.set_yscale('log')
    ax.set_ylabel(f'{ylabel}\nf (Hz)')
    cb = plt.colorbar(pcm, ax=ax, pad=0.02)
    cb.set_label(clabel)
    return pcm


def _format_time_axis(ax: plt.Axes, t: np.ndarray, epoch_type: Optional[EpochType]) -> None:
    if np.issubdtype(t.dtype, np.datetime64):
        ax.set_xlabel('UTC')
        ax.xaxis.set_major_formatter(mdates.DateFormatter('%H:%M:%S'))
    elif epoch_type in ('epoch', 'tt2000', 'unix'):
        ax.set_xlabel('UTC')
        ax.xaxis.set_major_formatter(EpochTickFormatter(epoch_type))
    else:
        ax.set_xlabel('Time (s)')


# =====================================================================
# Public API
# =====================================================================
def pol_plot(t: np.ndarray,
             f: np.ndarray,
             results: Dict[str, np.ndarray],
             *,
             cfg: Optional[PolPlotCfg] = None,
             trange: Optional[Sequence] = None,
             frange: Optional[Sequence[float]] = None,
             fc: Union[float, np.ndarray, None] = None,
             title: str = '',
             filename: Optional[str] = None,
             show: bool = False,
             epoch_type: Optional[EpochType] = None) -> Optional[plt.Figure]:
    """
    Stacked spectrograms of polarization-analysis output.

    Parameters
    ----------
    t, f     : (Nt,) time tags, (Nf,) frequencies (Hz)
    results  : name → (Nt, Nf) array; names from
               'power', 'pol_degree', 'ellipticity', 'wave_angle', 'coherency'
    trange   : [t0, t1] time window (same type as t)
    frange   : [f0, f1] frequency window (Hz)
    fc       : scalar or (Nt,) characteristic frequency overlaid in white
    filename : save the figure here (PNG/PDF/… by extension)
    epoch_type : numeric t given as 'epoch' / 'tt2000' / 'unix'

    Returns
    -------
    matplotlib Figure, or None when drawing failed (a warning says why).
    """
    cfg = cfg or PolPlotCfg()
    t = np.asarray(t)
    f = np.asarray(f)
    if t.ndim != 1 or f.ndim != 1:
        raise ValueError('t and f must be 1-D')

    keys = [k for k in _PANELS if k in results]
    if not keys:
        raise ValueError(f'results has none of {list(_PANELS)}')
    data = {}
    for k in keys:
        z = np.asarray(results[k])
        if z.shape != (t.size, f.size):
            raise ValueError(f"'{k}' must have shape {(t.size, f.size)}, got {z.shape}")
        data[k] = z

    fc_arr = None
    if fc is not None:
        fc_arr = np.asarray(fc, dtype=float)
        if fc_arr.ndim == 1 and fc_arr.size != t.size:
            raise ValueError('fc must be scalar or match t')

    # -------- Crop ---------------------------------------------------
    ts = _crop(t, trange, is_time=True)
    fs = _crop(f, frange, is_time=False)
    t, f = t[ts], f[fs]
    data = {k: np.asarray(z, dtype=float)[ts, fs] for k, z in data.items()}
    if fc_arr is not None and fc_arr.ndim == 1:
        fc_arr = fc_arr[ts]

    # -------- Mask weakly polarized pixels ---------------------------
    if 'pol_degree' in data:
        weak = ~(data['pol_degree'] >= cfg.min_pol_degree)
        for k in _DERIVED:
            if k in data:
                data[k] = data[k].copy()
                data[k][weak] = np.nan

    t_img, data = _blank_gaps(t, data)

    fig = None
    try:
        fig, axes = plt.subplots(len(keys), 1, sharex=True,
                                 figsize=cfg.figsize, squeeze=False)
        axes = axes[:, 0]

        for ax, k in zip(axes, keys):
            ylabel, clabel, vmin, vmax, cmap_attr, log10 = _PANELS[k]
            z = _prep_log(data[k]) if log10 else data[k]
            _panel(ax, t_img, f, z,
                   ylabel=ylabel, clabel=clabel,
                   vmin=vmin, vmax=vmax,
                   cmap=getattr(cfg, cmap_attr),
                   log_freq=cfg.log_freq)
            if fc_arr is not None:
                if fc_arr.ndim == 0:
                    ax.axhline(float(fc_arr), color='white', lw=1.0)
                else:
                    ax.plot(t, fc_arr, color='white', lw=1.0)

        _format_time_axis(axes[-1], t, epoch_type)
        if title:
            axes[0].set_title(title)

        if filename:
            fig.savefig(filename, dpi=cfg.dpi, bbox_inches='tight')
        if show:
            plt.show()
    except Exception as e:
        warnings.warn(f'[polplot] could not build figure: {e}')
        if fig is not None:
            plt.close(fig)
        return None

    return fig
