"""
Nuclide Identity

Maps inventory nuclide names (e.g., "Co60", "Ag110m", "Hf178n") onto an
element, mass number and isomeric state.

FISPACT-II marks excited states with letters (m, n, o, ... => m1, m2, m3),
which should line up with the IAEA numbering. The "m<N>" form is accepted
as well.
"""

import re
from dataclasses import dataclass

import periodictable

from ..errors import UnresolvableNuclide


_NAME_PATTERN = re.compile(r"^([A-Za-z]{1,2})-?(\d{1,3})(m\d+|[m-z])?$", re.IGNORECASE)


@dataclass(frozen=True)
class NuclideIdentity:
    """Element, mass number and isomeric state of a nuclide."""
    element: str  # Capitalised symbol, e.g., "Co"
    mass_number: int
    state: int = 0  # 0 = ground state, N = N-th excited state

    @classmethod
    def parse(cls, name: str) -> "NuclideIdentity":
        """
        Parse a nuclide name.

        Args:
            name: Nuclide name, e.g., "Co60", "Co-60m", "Ag108m2"

        Returns:
            Parsed NuclideIdentity

        Raises:
            UnresolvableNuclide: If the name is malformed or the element unknown
        """
        match = _NAME_PATTERN.match(name.strip())
        if not match:
            raise UnresolvableNuclide(f"Cannot parse nuclide name '{name}'")

        symbol = match.group(1).capitalize()
        mass_number = int(match.group(2))
        meta = (match.group(3) or "").lower()

        try:
            element = periodictable.elements.symbol(symbol)
        except ValueError:
            raise UnresolvableNuclide(f"Unknown element '{symbol}' in '{name}'")
        if element.number < 1 or mass_number < element.number:
            raise UnresolvableNuclide(f"Not a valid nuclide '{name}'")

        if not meta:
            state = 0
        elif meta.startswith("m") and meta[1:].isdigit():
            state = int(meta[1:])
        else:
            state = ord(meta) - ord("m") + 1

        return cls(element=symbol, mass_number=mass_number, state=state)

    @property
    def is_excited(self) -> bool:
        return self.state > 0

    def ground(self) -> "NuclideIdentity":
        """Same nuclide with the state dropped."""
        return NuclideIdentity(self.element, self.mass_number, 0)

    def name(self) -> str:
        """Name without the state, e.g., "Co60"."""
        return f"{self.element}{self.mass_number}"

    def name_with_state(self) -> str:
        """Name including any excited state, e.g., "Co60m1"."""
        if self.is_excited:
            return f"{self.name()}m{self.state}"
        return self.name()

    def iaea_key(self) -> str:
        """Nuclide key used by the IAEA LiveChart API, e.g., "60co"."""
        return f"{self.mass_number}{self.element.lower()}"

    def __str__(self) -> str:
        return self.name_with_state()
