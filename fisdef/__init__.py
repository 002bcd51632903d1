"""
FISPACT-II Decay Source Module

Turns the time steps of a FISPACT-II inventory into decay radiation sources
for transport codes. Decay data come from the IAEA chart of nuclides.

Outputs per time step:
- Text table of every nuclide and its emission lines
- JSON list of nuclides with activity and energy/intensity data
- MCNP source distribution cards (SI/SP) for each nuclide plus an
  activity-weighted distribution to sample between them
"""

__version__ = "1.0.0"

from .errors import (
    FisdefError,
    MalformedSpec,
    OutOfRange,
    UnresolvableNuclide,
    NoDecayData,
    FileCreateFailure,
    ProviderError,
    InventoryError,
)
from .intervals import IndexSpec, parse_index_spec, select_intervals
from .source import Source, SortProperty, build_sources
