import pytest

from conftest import FakeProvider, record
from fisdef.nuclear.nuclide import NuclideIdentity
from fisdef.nuclear.records import RadType
from fisdef.nuclear.resolver import excitation_levels, resolve_records, target_energy


def test_excitation_levels_sorted_and_distinct():
    records = [record(parent_energy=e) for e in (120.5, 0.0, None, 120.5, 0.0)]
    assert excitation_levels(records) == [0.0, 120.5]


def test_target_with_ground_state_group():
    levels = [0.0, 120.5]
    assert target_energy(levels, 0) == 0.0
    assert target_energy(levels, 1) == 120.5
    assert target_energy(levels, 2) is None


def test_target_without_ground_state_group():
    levels = [45.0]
    assert target_energy(levels, 0) is None
    assert target_energy(levels, 1) == 45.0
    assert target_energy(levels, 2) is None


def test_target_without_ground_state_group_higher_levels():
    levels = [45.0, 300.0]
    assert target_energy(levels, 2) == 300.0
    assert target_energy(levels, 3) is None


def _resolve(name, records):
    provider = FakeProvider({NuclideIdentity.parse(name).name(): records})
    return resolve_records(NuclideIdentity.parse(name), provider, RadType.GAMMA)


def test_resolve_excited_state():
    ground = record(energy=100.0, parent_energy=0.0)
    excited = record(energy=120.5, parent_energy=120.5)
    assert _resolve("Sc46m", [ground, excited]) == [excited]
    assert _resolve("Sc46", [ground, excited]) == [ground]


def test_resolve_missing_excited_state():
    records = [record(parent_energy=0.0), record(parent_energy=120.5)]
    assert _resolve("Sc46n", records) == []


def test_resolve_without_ground_state_group():
    records = [record(energy=45.0, parent_energy=45.0)]
    assert _resolve("Sc46", records) == []
    assert _resolve("Sc46m", records) == records


def test_unknown_parent_energy_always_kept():
    unknown = record(energy=10.0, parent_energy=None)
    ground = record(energy=20.0, parent_energy=0.0)
    excited = record(energy=30.0, parent_energy=52.0)
    assert _resolve("Sc46m", [unknown, ground, excited]) == [unknown, excited]


def test_no_parent_energies_keeps_everything():
    records = [record(energy=10.0, parent_energy=None), record(energy=20.0, parent_energy=None)]
    assert _resolve("Sc46", records) == records
    assert _resolve("Sc46m", records) == records


def test_no_data_is_empty():
    assert _resolve("Sc46", None) == []
    assert _resolve("Sc46", []) == []


def test_provider_is_queried_without_state():
    provider = FakeProvider()
    resolve_records(NuclideIdentity.parse("Ag110m"), provider, RadType.XRAY, live=True)
    assert provider.calls == [("Ag110", RadType.XRAY, True)]


def test_provider_failure_gives_no_records():
    provider = FakeProvider({"Co60": [record()]}, failing={"Co60"})
    assert resolve_records(NuclideIdentity.parse("Co60"), provider, RadType.GAMMA) == []
