"""
Decay Record Definitions

Decay radiation records as returned by the IAEA chart of nuclides, and
the radiation types that can be requested from it.

Each record contains:
- Parent and daughter nuclide names
- Parent excitation energy (keV), used to tell isomers apart
- Decay mode and branching ratio (%)
- Emission energy (keV) and intensity (% per decay)
- Parent half-life (seconds)

Any numeric field may be missing from the evaluated data.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RadType(Enum):
    """Decay radiation types in the IAEA chart of nuclides."""
    ALPHA = "alpha"
    BETA_PLUS = "beta-plus"
    BETA_MINUS = "beta-minus"
    GAMMA = "gamma"
    XRAY = "xray"
    ELECTRON = "electron"

    @property
    def code(self) -> str:
        """IAEA LiveChart rad_types code."""
        return _IAEA_CODES[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.display_name


_IAEA_CODES = {
    RadType.ALPHA: "a",
    RadType.BETA_PLUS: "bp",
    RadType.BETA_MINUS: "bm",
    RadType.GAMMA: "g",
    RadType.XRAY: "x",
    RadType.ELECTRON: "e",
}

_DISPLAY_NAMES = {
    RadType.ALPHA: "alpha",
    RadType.BETA_PLUS: "beta plus",
    RadType.BETA_MINUS: "beta minus",
    RadType.GAMMA: "gamma",
    RadType.XRAY: "x-ray",
    RadType.ELECTRON: "electron",
}


@dataclass(frozen=True)
class DecayRecord:
    """A single decay radiation record."""
    parent: str  # e.g., "Co60"
    daughter: str  # e.g., "Ni60"
    parent_energy: Optional[float] = None  # Parent level energy in keV
    decay_mode: Optional[str] = None  # e.g., "B-", "EC", "IT"
    branching: Optional[float] = None  # Branching ratio in %
    energy: Optional[float] = None  # Emission energy in keV
    intensity: Optional[float] = None  # Emission intensity in % per decay
    half_life: Optional[float] = None  # Parent half-life in seconds

    @property
    def is_observed(self) -> bool:
        """Both an energy and an intensity are known."""
        return self.energy is not None and self.intensity is not None
