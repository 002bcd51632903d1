"""
Text Table Output

Fixed-width table of every nuclide and its emission lines. Records are
grouped under a sub-header for each parent excitation level:

     Co60 [E = 0 keV, t1/2 = 5.27 years]

      Co60  >  B-   > Ni60              1173.23     99.85
      Co60  >  B-   > Ni60              1332.49     99.98
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from ..nuclear.records import DecayRecord
from ..source import Source
from .files import create_file_with_fallback

logger = logging.getLogger(__name__)

RULE_WIDTH = 58

# Time constants for half-life formatting (365 day year)
SECONDS_IN_MINUTE = 60.0
SECONDS_IN_HOUR = 60.0 * SECONDS_IN_MINUTE
SECONDS_IN_DAY = 24.0 * SECONDS_IN_HOUR
SECONDS_IN_YEAR = 365.0 * SECONDS_IN_DAY
SECONDS_IN_MILLISECOND = 1e-3
SECONDS_IN_MICROSECOND = 1e-6
SECONDS_IN_NANOSECOND = 1e-9


# ==============================================================================
# Value formatting
# ==============================================================================

def format_branching(branching: Optional[float]) -> str:
    if branching is None:
        return "None"
    if branching >= 100.0:
        return ""
    if branching >= 1.0:
        return f"({branching:.0f}%)"
    return "(< 1%)"


def format_energy(energy: Optional[float]) -> str:
    if energy is None:
        return "  -"
    if energy >= 10.0:
        return f"{energy:.2f}"
    if energy >= 0.001:
        return f"{energy:.3f}"
    return f"{energy:.2e}"


def format_intensity(intensity: Optional[float]) -> str:
    if intensity is None:
        return "  -"
    if intensity >= 100.0:
        return f"{intensity:.1f}"
    if intensity >= 10.0:
        return f"{intensity:.2f}"
    if intensity >= 0.001:
        return f"{intensity:.3f}"
    return f"{intensity:.2e}"


def human_readable_halflife(seconds: Optional[float]) -> str:
    """Half-life in the largest sensible unit, e.g. "5.27 years"."""
    if seconds is None:
        return "-"

    if seconds >= 100.0 * SECONDS_IN_YEAR:
        return f"{seconds / SECONDS_IN_YEAR:.2e} years"
    if seconds >= SECONDS_IN_YEAR:
        return f"{seconds / SECONDS_IN_YEAR:.2f} years"
    if seconds >= SECONDS_IN_DAY:
        return f"{seconds / SECONDS_IN_DAY:.2f} days"
    if seconds >= SECONDS_IN_HOUR:
        return f"{seconds / SECONDS_IN_HOUR:.2f} hours"
    if seconds >= SECONDS_IN_MINUTE:
        return f"{seconds / SECONDS_IN_MINUTE:.2f} minutes"
    if seconds >= 1.0:
        return f"{seconds:.2f} s"
    if seconds >= SECONDS_IN_MILLISECOND:
        return f"{seconds / SECONDS_IN_MILLISECOND:.2f} ms"
    if seconds >= SECONDS_IN_MICROSECOND:
        return f"{seconds / SECONDS_IN_MICROSECOND:.2f} us"
    return f"{seconds / SECONDS_IN_NANOSECOND:.2f} ns"


def format_level(energy: float) -> str:
    """Shortest positional form, e.g. 0 or 120.5."""
    return np.format_float_positional(energy, trim="-")


# ==============================================================================
# Table sections
# ==============================================================================

def header() -> str:
    rule = "-" * RULE_WIDTH
    titles = f"  {'P':^5}   {'Mode':^5}  {'D':^5}   BR    Energy [keV]  Intensity [%]"
    return f"{rule}\n{titles}\n{rule}\n"


def format_record(record: DecayRecord) -> str:
    return (
        f"  {record.parent:<5} > {record.decay_mode or 'None':^5} > {record.daughter:<5} "
        f"{format_branching(record.branching):<6}     "
        f"{format_energy(record.energy):<7}     "
        f"{format_intensity(record.intensity):<7}\n"
    )


def format_source(source: Source) -> str:
    """Records of one nuclide, with a sub-header per excitation level."""
    lines: List[str] = []
    highest = -1.0
    warned = False

    for record in source.records:
        parent_energy = record.parent_energy
        if parent_energy is None:
            if not warned:
                logger.warning(f"Assuming ground state for incomplete {source.inventory_name} records")
                warned = True
            parent_energy = 0.0

        if parent_energy > highest:
            highest = parent_energy
            lines.append(
                f"\n {source.inventory_name} [E = {format_level(parent_energy)} keV, "
                f"t1/2 = {human_readable_halflife(record.half_life)}]\n\n"
            )

        lines.append(format_record(record))

    return "".join(lines)


def render_table(sources: Sequence[Source]) -> str:
    """Complete table of decay data for every source."""
    return header() + "".join(format_source(s) for s in sources)


def write_table(sources: Sequence[Source], path: Path) -> None:
    """Write the table to <path>.txt."""
    with create_file_with_fallback(path, "txt", "table.txt") as f:
        f.write(render_table(sources))
