"""
Space-physics analysis helpers

Small, dependable building blocks that sit underneath day-to-day
spacecraft data analysis:

- Index bounds of a value range in ascending *or* descending arrays
- Leap-year predicate and CDF epoch / TT2000 conversion
- Tick labels for axes plotted in epoch units
- Data-gap finder for uniformly sampled time series
- Per-sample outer products (spectral matrices, pressure tensors)
- Polarization-analysis spectrogram figure
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Core modules
from . import index_range
from . import timeutil
from . import gaps
from . import tensor
from . import polplot

# Make key functions easily accessible
from .index_range import index_range as resolve_index_range, IndexRange, InvalidArgument
from .timeutil import is_leap_year, to_datetime64, epoch_tick_format, EpochTickFormatter
from .gaps import find_gaps, gap_list, GapCfg, GapResult
from .tensor import outer_product
from .polplot import pol_plot, PolPlotCfg

__all__ = [
    # Version info
    "__version__",
    "__license__",

    # Modules
    "index_range",
    "timeutil",
    "gaps",
    "tensor",
    "polplot",

    # Key functions
    "resolve_index_range",
    "IndexRange",
    "InvalidArgument",
    "is_leap_year",
    "to_datetime64",
    "epoch_tick_format",
    "EpochTickFormatter",
    "find_gaps",
    "gap_list",
    "GapCfg",
    "GapResult",
    "outer_product",
    "pol_plot",
    "PolPlotCfg",
]
