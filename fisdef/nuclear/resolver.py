"""
Isomer Record Resolution

The IAEA returns decay records for every excitation level of a nuclide at
once, told apart only by the parent level energy of each record. This module
picks out the records that belong to one specific isomeric state.

Levels are matched by position: the N-th excited state is the N-th parent
energy above the ground state. Some nuclides have no ground state group in
the data at all, in which case the lowest level present is taken to be the
first excited state.
"""

import logging
from typing import List, Optional, Sequence

from ..errors import ProviderError
from ..logs import TRACE
from .nuclide import NuclideIdentity
from .records import DecayRecord, RadType

logger = logging.getLogger(__name__)


def excitation_levels(records: Sequence[DecayRecord]) -> List[float]:
    """Sorted, distinct parent energies present in the records."""
    return sorted({r.parent_energy for r in records if r.parent_energy is not None})


def target_energy(levels: Sequence[float], state: int) -> Optional[float]:
    """
    Parent energy of an isomeric state.

    Args:
        levels: Sorted, distinct, non-empty list of parent energies (keV)
        state: Excited state index (0 = ground state)

    Returns:
        Parent energy to select, or None if the data has no such state
    """
    n = len(levels)

    if levels[0] == 0.0:
        if state >= n:
            return None
        return levels[state]

    # No ground state group, the lowest level is the first excited state
    if state == 0 or state > n:
        return None
    return levels[state - 1]


def resolve_records(
    identity: NuclideIdentity,
    provider,
    rad_type: RadType,
    live: bool = False,
) -> List[DecayRecord]:
    """
    Find the decay records for a specific nuclide state.

    Args:
        identity: Nuclide including its isomeric state
        provider: Decay data provider with a lookup(identity, rad_type, live) method
        rad_type: Radiation type to query
        live: Query the provider live rather than offline data

    Returns:
        Matching records in provider order (may be empty)
    """
    name = identity.name_with_state()

    try:
        records = provider.lookup(identity.ground(), rad_type, live)
    except ProviderError as e:
        logger.warning(f"No {rad_type} data for {name}: {e}")
        return []

    if not records:
        logger.log(TRACE, f"{rad_type} decay records for {name}: 0")
        return []

    levels = excitation_levels(records)

    if not levels:
        logger.log(TRACE, f"No parent energies in {identity.name()} records")
        target = None
    else:
        if levels[0] != 0.0:
            logger.log(TRACE, f"Note that {identity.name()} records do not include a ground state")
            if identity.is_excited:
                logger.log(TRACE, f"Assuming {levels[0]} keV is the first excited state of {identity.name()}")

        target = target_energy(levels, identity.state)
        if target is None:
            logger.log(TRACE, f"No {rad_type} records for {name}")
            return []

    # TODO: records without a parent energy are always kept, even when a
    # level was matched, and can pull in lines from another isomer
    selected = []
    for record in records:
        if record.parent_energy is None:
            logger.log(TRACE, f"Unknown parent energy for {record.parent}")
            selected.append(record)
        elif record.parent_energy == target:
            selected.append(record)

    logger.log(TRACE, f"{rad_type} decay records for {name}: {len(selected)}")
    return selected
