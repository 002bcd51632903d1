"""
Nuclear Data Module

Nuclide identities, IAEA decay records, and resolution of records to a
specific isomeric state.
"""

from .nuclide import NuclideIdentity
from .records import DecayRecord, RadType
from .resolver import excitation_levels, target_energy, resolve_records
from .iaea import IaeaProvider, parse_livechart_csv
