"""
Decay Sources

A Source pairs a nuclide from one FISPACT-II interval with the IAEA decay
records for its isomeric state. Sources are built in stages, each stage
returning a new Source:

    map names -> deduplicate -> find records -> drop unobserved records
    -> sort records -> drop empty sources -> sort by name
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Tuple

import numpy as np

from .errors import NoDecayData, UnresolvableNuclide
from .logs import TRACE
from .nuclear.nuclide import NuclideIdentity
from .nuclear.records import DecayRecord, RadType
from .nuclear.resolver import resolve_records

logger = logging.getLogger(__name__)


class SortProperty(Enum):
    """Order of decay records within a source."""
    ENERGY = "energy"  # ascending
    INTENSITY = "intensity"  # descending

    @classmethod
    def parse(cls, text: str) -> "SortProperty":
        key = text.strip().lower()
        if key in ("e", "energy"):
            return cls.ENERGY
        if key in ("i", "intensity"):
            return cls.INTENSITY
        raise ValueError(f"Unknown sort property '{text}', expected 'energy' or 'intensity'")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Source:
    """
    One nuclide of one interval with its decay data.

    Equality only considers the inventory name and the nuclide identity.
    """
    inventory_name: str
    activity: float = field(compare=False)  # Bq
    identity: NuclideIdentity
    records: Tuple[DecayRecord, ...] = field(default=(), compare=False)

    def norm(self) -> float:
        """Emissions per decay, the summed intensity as a fraction."""
        intensities = [r.intensity or 0.0 for r in self.records]
        return float(np.sum(intensities)) / 100.0

    def with_records(self, records: Iterable[DecayRecord]) -> "Source":
        return replace(self, records=tuple(records))


# ==============================================================================
# Pipeline stages
# ==============================================================================

def map_nuclides(nuclides) -> List[Source]:
    """
    Sources for every inventory nuclide that maps onto a known nuclide.

    Args:
        nuclides: Inventory nuclides with name() and activity
    """
    sources = []
    for nuclide in nuclides:
        name = nuclide.name()
        try:
            identity = NuclideIdentity.parse(name)
        except UnresolvableNuclide as e:
            logger.debug(f"Could not convert {name} to nuclide, skipping... ({e})")
            continue
        sources.append(Source(inventory_name=name, activity=nuclide.activity, identity=identity))
    return sources


def deduplicate(sources: List[Source]) -> List[Source]:
    """Sort by inventory name and drop repeated sources."""
    unique: List[Source] = []
    for source in sorted(sources, key=lambda s: s.inventory_name):
        if unique and unique[-1] == source:
            continue
        unique.append(source)
    return unique


def find_records(source: Source, provider, rad_type: RadType, live: bool = False) -> Source:
    """Attach the decay records for the source's isomeric state."""
    return source.with_records(resolve_records(source.identity, provider, rad_type, live))


def remove_unobserved_records(source: Source) -> Source:
    """Drop records that are missing an energy or an intensity."""
    kept = []
    for record in source.records:
        if record.is_observed:
            kept.append(record)
        else:
            logger.log(
                TRACE,
                f"Skipping bad {source.inventory_name} record: "
                f"\"{record.energy}\" keV, \"{record.intensity}\" %"
            )

    if len(kept) != len(source.records):
        logger.debug(f"Records with unobserved emissions removed from {source.inventory_name}")
    return source.with_records(kept)


def sort_records(source: Source, prop: SortProperty) -> Source:
    """
    Order records by energy (ascending) or intensity (descending).

    Ties keep their provider order. Records must be observed.
    """
    if prop == SortProperty.ENERGY:
        records = sorted(source.records, key=lambda r: r.energy)
    else:
        records = sorted(source.records, key=lambda r: r.intensity, reverse=True)
    return source.with_records(records)


def build_sources(
    nuclides,
    provider,
    rad_type: RadType = RadType.GAMMA,
    sort: SortProperty = SortProperty.ENERGY,
    live: bool = False,
) -> List[Source]:
    """
    Decay sources for the unstable nuclides of one interval.

    Args:
        nuclides: Unstable inventory nuclides with name() and activity
        provider: Decay data provider
        rad_type: Radiation type of interest
        sort: Order of the records within each source
        live: Query the provider live rather than offline data

    Returns:
        Sources with at least one record, sorted by inventory name

    Raises:
        NoDecayData: If no nuclide maps or none has usable records
    """
    sources = deduplicate(map_nuclides(nuclides))
    if not sources:
        raise NoDecayData("No inventory nuclides map to known nuclides")

    logger.debug("Inventory to IAEA nuclide map:")
    for s in sources:
        logger.debug(f"   {s.inventory_name:<6} -> {s.identity.name_with_state()}")

    resolved = []
    for source in sources:
        source = find_records(source, provider, rad_type, live)
        source = remove_unobserved_records(source)
        source = sort_records(source, sort)
        resolved.append(source)

    resolved = [s for s in resolved if s.records]
    if not resolved:
        raise NoDecayData(f"No {rad_type} decay data for any nuclide")

    return sorted(resolved, key=lambda s: s.inventory_name)
