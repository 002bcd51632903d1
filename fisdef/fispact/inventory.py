"""
FISPACT-II Inventory Reader

Reads the JSON output of a FISPACT-II run. Every time step of the
calculation is stored under "inventory_data" with interval totals and
the full list of nuclides present.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ..errors import InventoryError


@dataclass
class InventoryNuclide:
    """A nuclide in one FISPACT-II interval."""
    element: str
    isotope: int
    state: str = ""  # "", "m", "n", ...
    half_life: float = 0.0  # seconds, 0 for stable nuclides
    activity: float = 0.0  # Bq

    def name(self) -> str:
        """FISPACT-II style name, e.g., "Co60m"."""
        return f"{self.element}{self.isotope}{self.state}"

    @property
    def is_unstable(self) -> bool:
        return self.half_life > 0.0


@dataclass
class Interval:
    """Results for one FISPACT-II time step."""
    irradiation_time: float = 0.0  # s
    cooling_time: float = 0.0  # s
    mass: float = 0.0  # g
    dose_rate: float = 0.0  # Sv/hr
    activity: float = 0.0  # Bq
    nuclides: List[InventoryNuclide] = field(default_factory=list)

    @property
    def total_time(self) -> float:
        return self.irradiation_time + self.cooling_time

    def unstable_nuclides(self) -> List[InventoryNuclide]:
        """Nuclides with a finite half-life."""
        return [n for n in self.nuclides if n.is_unstable]


@dataclass
class Inventory:
    """Every interval of a FISPACT-II run, in calculation order."""
    intervals: List[Interval] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.intervals)


def _nuclide_from_dict(data: Dict[str, Any]) -> InventoryNuclide:
    return InventoryNuclide(
        element=str(data["element"]).strip(),
        isotope=int(data["isotope"]),
        state=str(data.get("state") or "").strip(),
        half_life=float(data.get("half_life") or 0.0),
        activity=float(data.get("activity") or 0.0),
    )


def _interval_from_dict(data: Dict[str, Any]) -> Interval:
    dose = data.get("dose_rate") or {}
    return Interval(
        irradiation_time=float(data.get("irradiation_time") or 0.0),
        cooling_time=float(data.get("cooling_time") or 0.0),
        mass=float(data.get("total_mass") or 0.0),
        dose_rate=float(dose.get("dose") or 0.0),
        activity=float(data.get("total_activity") or 0.0),
        nuclides=[_nuclide_from_dict(n) for n in data.get("nuclides", [])],
    )


def inventory_from_dict(data: Dict[str, Any]) -> Inventory:
    """Build an Inventory from parsed FISPACT-II JSON."""
    try:
        intervals = [_interval_from_dict(i) for i in data["inventory_data"]]
    except (KeyError, TypeError, ValueError) as e:
        raise InventoryError(f"Unexpected FISPACT-II JSON structure: {e!r}")
    return Inventory(intervals=intervals)


def read_json(path: Union[str, Path]) -> Inventory:
    """
    Read a FISPACT-II JSON output file.

    Args:
        path: Path to the JSON file

    Returns:
        Inventory with one Interval per time step

    Raises:
        InventoryError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InventoryError(f"Unable to read {path}: {e}")
    except json.JSONDecodeError as e:
        raise InventoryError(f"Invalid JSON in {path}: {e}")

    return inventory_from_dict(data)
