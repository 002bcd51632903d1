import json
import logging

import pytest

from conftest import record
from fisdef.errors import FileCreateFailure
from fisdef.nuclear.nuclide import NuclideIdentity
from fisdef.output import create_file_with_fallback, output_path, render_json, render_mcnp, render_table
from fisdef.output.mcnp import total_norm, wrap_card
from fisdef.output.table import (
    format_branching,
    format_energy,
    format_intensity,
    human_readable_halflife,
)
from fisdef.source import Source


CO60_HALF_LIFE = 166344192.0


def co60(activity=1.0e10):
    records = (
        record(energy=1173.2, intensity=99.85, decay_mode="B-", branching=100.0, half_life=CO60_HALF_LIFE),
        record(energy=1332.5, intensity=99.98, decay_mode="B-", branching=100.0, half_life=CO60_HALF_LIFE),
    )
    return Source("Co60", activity, NuclideIdentity.parse("Co60"), records)


# ==============================================================================
# JSON
# ==============================================================================

def test_json_round_trip():
    text = render_json([co60()])
    data = json.loads(text)
    assert data == [{
        "name_fispact": "Co60",
        "name_iaea": "Co60",
        "activity": 1.0e10,
        "energy": [1173.2, 1332.5],
        "intensity": [99.85, 99.98],
    }]
    assert list(data[0].keys()) == ["name_fispact", "name_iaea", "activity", "energy", "intensity"]


def test_json_includes_state_label_and_nulls():
    source = Source("Ag110m", 2.0, NuclideIdentity.parse("Ag110m"), (record(energy=None, parent="Ag110"),))
    data = json.loads(render_json([source]))
    assert data[0]["name_iaea"] == "Ag110m1"
    assert data[0]["energy"] == [None]


# ==============================================================================
# Table
# ==============================================================================

def test_table_header():
    lines = render_table([]).splitlines()
    assert lines[0] == "-" * 58
    assert "Mode" in lines[1] and "Energy [keV]" in lines[1] and "Intensity [%]" in lines[1]
    assert lines[2] == "-" * 58


def test_table_record_lines():
    table = render_table([co60()])
    assert " Co60 [E = 0 keV, t1/2 = 5.27 years]" in table
    assert "1173.20" in table
    assert "99.85" in table
    assert table.count("[E = ") == 1


def test_table_groups_by_excitation_level():
    records = (
        record(energy=100.0, parent_energy=0.0),
        record(energy=200.0, parent_energy=58.59, half_life=628.02),
        record(energy=300.0, parent_energy=0.0),
    )
    table = render_table([Source("Co60", 1.0, NuclideIdentity.parse("Co60"), records)])

    ground = table.index("[E = 0 keV")
    excited = table.index("[E = 58.59 keV, t1/2 = 10.47 minutes]")
    assert ground < table.index("100.00") < excited < table.index("200.00") < table.index("300.00")
    assert table.count("[E = ") == 2


def test_table_missing_parent_energy_treated_as_ground():
    records = (record(energy=100.0, parent_energy=None), record(energy=200.0, parent_energy=None))
    table = render_table([Source("Co60", 1.0, NuclideIdentity.parse("Co60"), records)])
    assert table.count("[E = 0 keV") == 1


def test_table_warns_once_per_nuclide_without_parent_energy(caplog):
    sources = [
        Source(name, 1.0, NuclideIdentity.parse(name),
               tuple(record(energy=100.0 * (i + 1), parent_energy=None) for i in range(3)))
        for name in ("Co60", "Na24")
    ]
    with caplog.at_level(logging.WARNING, logger="fisdef.output.table"):
        render_table(sources)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert "Co60" in warnings[0].getMessage()
    assert "Na24" in warnings[1].getMessage()


@pytest.mark.parametrize("value, expected", [
    (100.0, ""),
    (45.2, "(45%)"),
    (0.5, "(< 1%)"),
    (None, "None"),
])
def test_format_branching(value, expected):
    assert format_branching(value) == expected


@pytest.mark.parametrize("value, expected", [
    (1173.2, "1173.20"),
    (5.5, "5.500"),
    (0.0005, "5.00e-04"),
    (None, "  -"),
])
def test_format_energy(value, expected):
    assert format_energy(value) == expected


@pytest.mark.parametrize("value, expected", [
    (100.0, "100.0"),
    (12.5, "12.50"),
    (0.25, "0.250"),
    (0.0002, "2.00e-04"),
    (None, "  -"),
])
def test_format_intensity(value, expected):
    assert format_intensity(value) == expected


@pytest.mark.parametrize("seconds, expected", [
    (None, "-"),
    (200 * 365 * 86400.0, "2.00e+02 years"),
    (CO60_HALF_LIFE, "5.27 years"),
    (2 * 86400.0, "2.00 days"),
    (3600.0, "1.00 hours"),
    (90.0, "1.50 minutes"),
    (30.0, "30.00 s"),
    (5e-3, "5.00 ms"),
    (2.5e-6, "2.50 us"),
    (5e-9, "5.00 ns"),
])
def test_human_readable_halflife(seconds, expected):
    assert human_readable_halflife(seconds) == expected


# ==============================================================================
# MCNP
# ==============================================================================

def test_mcnp_single_source():
    expected = "\n".join([
        "sc100   Main source distribution (1.99830e+00 counts/src particle)",
        "si100 S 101",
        "sp100   1.99830e+10    $ Co60   = 1.00000e+10 Bq * 1.99830e+00 particles/decay",
        "c",
        "sc101   Co60 decay data, norm = 1.99830e+00 particles/decay",
        "si101 L 1.17320e+00 1.33250e+00",
        "sp101   9.98500e-01 9.99800e-01",
        "c",
    ])
    assert render_mcnp([co60()], 100) == expected


def test_mcnp_ids_follow_start_id():
    na24 = Source("Na24", 1.0e10, NuclideIdentity.parse("Na24"), (record(energy=1368.6, intensity=100.0),))
    cards = render_mcnp([co60(), na24], 7)
    assert cards.splitlines()[1] == "si7 S   8 9"
    assert "sc8     Co60 decay data" in cards
    assert "sc9     Na24 decay data" in cards


def test_mcnp_annotation_stays_on_its_probability_line():
    names = ["Co60", "Na24", "Mn54", "Fe59", "Ag110m"]
    sources = [
        Source(name, 1.0e10, NuclideIdentity.parse(name), (record(energy=1000.0, intensity=50.0),))
        for name in names
    ]
    cards = render_mcnp(sources, 100).splitlines()

    start = cards.index(next(line for line in cards if line.startswith("sp100")))
    sp_lines = cards[start:start + len(names)]
    assert sp_lines[0].startswith("sp100   ")
    assert all(line.startswith(" " * 8) for line in sp_lines[1:])
    for line, name in zip(sp_lines, names):
        data, _, annotation = line.partition("$")
        assert len(data.split()) == (2 if line.startswith("sp") else 1)
        assert annotation.split()[0] == name
        assert annotation.rstrip().endswith("particles/decay")
    assert cards[start + len(names)] == "c"


def test_total_norm_is_activity_weighted():
    light = Source("Na24", 1.0, NuclideIdentity.parse("Na24"), (record(intensity=100.0),))
    heavy = Source("Co60", 3.0, NuclideIdentity.parse("Co60"), (record(intensity=200.0),))
    assert total_norm([light, heavy]) == pytest.approx((1.0 * 1.0 + 3.0 * 2.0) / 4.0)


def test_mcnp_lines_wrap_at_80_columns():
    records = tuple(record(energy=100.0 + i, intensity=1.0) for i in range(40))
    source = Source("Co60", 1.0, NuclideIdentity.parse("Co60"), records)
    cards = render_mcnp([source], 100)

    lines = cards.splitlines()
    assert all(len(line) <= 80 for line in lines)
    continuation = [line for line in lines if line.startswith(" ")]
    assert continuation
    assert all(line.startswith(" " * 8) and not line.startswith(" " * 9) for line in continuation)

    si_card = cards[cards.index("si101 L"):cards.index("sp101")]
    assert si_card.split()[2:] == [f"{(100.0 + i) * 1e-3:.5e}" for i in range(40)]


def test_wrap_never_splits_tokens():
    text = "si1 L " + " ".join(["1.23456e+00"] * 20)
    tokens = [t for line in wrap_card(text).splitlines() for t in line.split()]
    assert tokens == text.split()


# ==============================================================================
# Files
# ==============================================================================

def test_output_path_appends_index(tmp_path):
    assert output_path(tmp_path / "run.txt", 3) == tmp_path / "run_3"
    assert output_path("step", 0).name == "step_0"


def test_create_file_in_new_directory(tmp_path):
    target = tmp_path / "a" / "b" / "step_0"
    with create_file_with_fallback(target, "json", "fallback.json") as f:
        f.write("[]")
    assert (tmp_path / "a" / "b" / "step_0.json").read_text() == "[]"


def test_directory_failure_falls_back_to_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "blocker").write_text("")
    with create_file_with_fallback(tmp_path / "blocker" / "sub" / "step_1", "txt", "table.txt") as f:
        f.write("x")
    assert (tmp_path / "step_1.txt").read_text() == "x"


def test_file_failure_falls_back_to_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "step_2.i").mkdir()
    with create_file_with_fallback(tmp_path / "step_2", "i", "default.i") as f:
        f.write("c")
    assert (tmp_path / "default.i").read_text() == "c"


def test_second_failure_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "step_2.i").mkdir()
    (tmp_path / "default.i").mkdir()
    with pytest.raises(FileCreateFailure):
        create_file_with_fallback(tmp_path / "step_2", "i", "default.i")
