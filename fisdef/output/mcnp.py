"""
MCNP Source Distribution Output

Writes one SI/SP distribution per nuclide plus a main distribution that
samples between nuclides by their emission rate.

    sc100   Main source distribution (...)
    si100 S 101 102
    sp100   <activity * norm>    $ <name> = <activity> Bq * <norm> particles/decay
            <activity * norm>    $ <name> = ...
    c
    sc101   Co60 decay data, norm = ...
    si101 L <energies in MeV>
    sp101   <intensities as fractions>
    c
"""

import textwrap
from pathlib import Path
from typing import Sequence

import numpy as np

from ..source import Source
from .files import create_file_with_fallback

KEV_TO_MEV = 1.0e-03
PERCENT_TO_FRACTION = 1.0e-02

CARD_WIDTH = 80
CONTINUATION_INDENT = " " * 8


def sci(value: float) -> str:
    return f"{value:.5e}"


def wrap_card(text: str) -> str:
    """Wrap a card to 80 columns without splitting any token."""
    return textwrap.fill(
        text,
        width=CARD_WIDTH,
        subsequent_indent=CONTINUATION_INDENT,
        break_long_words=False,
        break_on_hyphens=False,
    )


def total_norm(sources: Sequence[Source]) -> float:
    """Activity-weighted mean of the source normalisation factors."""
    activities = np.array([s.activity for s in sources], dtype=np.float64)
    norms = np.array([s.norm() for s in sources], dtype=np.float64)
    if activities.sum() <= 0.0:
        return 0.0
    return float(np.sum(activities / activities.sum() * norms))


def activity_distribution(sources: Sequence[Source], start_id: int) -> str:
    """Main distribution selecting a nuclide distribution by emission rate."""
    comment = f"sc{start_id:<5} Main source distribution ({sci(total_norm(sources))} counts/src particle)"

    si_card = f"si{f'{start_id} S ':<6}"
    for i in range(len(sources)):
        si_card += f"{start_id + i + 1} "

    # One probability per line, anything after "$" must stay on that line
    entries = [
        f"{sci(s.activity * s.norm())}    $ {s.inventory_name:<6} = "
        f"{sci(s.activity)} Bq * {sci(s.norm())} particles/decay"
        for s in sources
    ]
    sp_card = f"sp{start_id:<6}" + f"\n{CONTINUATION_INDENT}".join(entries)

    return f"{comment}\n{wrap_card(si_card)}\n{sp_card}\nc"


def nuclide_distribution(source: Source, dist_id: int) -> str:
    """Discrete energy distribution for a single nuclide."""
    comment = (
        f"sc{dist_id:<5} {source.inventory_name} decay data, "
        f"norm = {sci(source.norm())} particles/decay"
    )

    energies = " ".join(sci(r.energy * KEV_TO_MEV) for r in source.records)
    intensities = " ".join(sci(r.intensity * PERCENT_TO_FRACTION) for r in source.records)

    si_card = f"si{dist_id} L {energies}"
    sp_card = f"sp{dist_id:<6}{intensities}"

    return f"\n{comment}\n{wrap_card(si_card)}\n{wrap_card(sp_card)}\nc"


def render_mcnp(sources: Sequence[Source], start_id: int = 100) -> str:
    """Source distribution cards for every nuclide."""
    cards = activity_distribution(sources, start_id)
    for i, s in enumerate(sources):
        cards += nuclide_distribution(s, start_id + i + 1)
    return cards


def write_mcnp(sources: Sequence[Source], path: Path, index: int, start_id: int = 100) -> None:
    """Write the cards to <path>.i."""
    with create_file_with_fallback(path, "i", f"step_{index}.i") as f:
        f.write(render_mcnp(sources, start_id))
