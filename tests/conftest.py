import json
from pathlib import Path

import pytest

from fisdef.errors import ProviderError
from fisdef.nuclear.records import DecayRecord


CO60_CSV = (
    "energy,unc_en,intensity,unc_i,p_z,p_n,p_symbol,p_energy,d_z,d_n,d_symbol,decay,decay_%,half_life_sec\n"
    "58.603,7,2.07E-2,3,27,33,Co,58.59,27,33,Co,IT,99.75,628.02\n"
    "1173.2,3,99.85,3,27,33,Co,0,28,32,Ni,B-,100,166344192\n"
    "1332.5,4,99.98,6,27,33,Co,0,28,32,Ni,B-,100,166344192\n"
)


class FakeProvider:
    """In-memory decay data keyed by nuclide name without state."""

    def __init__(self, data=None, failing=()):
        self.data = data or {}
        self.failing = set(failing)
        self.calls = []

    def lookup(self, identity, rad_type, live=False):
        self.calls.append((identity.name_with_state(), rad_type, live))
        if identity.name() in self.failing:
            raise ProviderError(f"lookup failed for {identity.name()}")
        return self.data.get(identity.name())


def record(energy=100.0, intensity=10.0, parent_energy=0.0, parent="Co60", daughter="Ni60", **kwargs):
    return DecayRecord(
        parent=parent,
        daughter=daughter,
        parent_energy=parent_energy,
        energy=energy,
        intensity=intensity,
        **kwargs,
    )


def inventory_dict(intervals):
    """FISPACT-II style JSON with one entry per list of (element, A, state, activity)."""
    return {
        "run_data": {"run_name": "test"},
        "inventory_data": [
            {
                "irradiation_time": 3600.0 * (i + 1),
                "cooling_time": 60.0 * i,
                "total_mass": 1.0e-3,
                "total_activity": sum(n[3] for n in nuclides),
                "dose_rate": {"type": "Point source", "distance": 1.0, "dose": 2.5e-6},
                "nuclides": [
                    {
                        "element": element,
                        "isotope": a,
                        "state": state,
                        "half_life": 1.0e5 if activity > 0 else 0.0,
                        "activity": activity,
                    }
                    for element, a, state, activity in nuclides
                ],
            }
            for i, nuclides in enumerate(intervals)
        ],
    }


@pytest.fixture
def write_inventory(tmp_path):
    def _write(intervals, name="inventory.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(inventory_dict(intervals)), encoding="utf-8")
        return path
    return _write
