"""Tests for fixed-column atom record helpers."""

import pytest

from maskvis.core.utils.pdbqt_records import (
    coordinates,
    format_spatial_key,
    is_atom_record,
    iter_atom_records,
    residue_tag,
    serial_number,
    spatial_key,
    wrap_rigid,
)

from conftest import atom_line


def test_spatial_key_trims_and_concatenates_coordinate_fields():
    line = atom_line(7, "C1", (1.5, -0.25, 3.0))
    assert spatial_key(line) == "1.500-0.2503.000"


def test_format_spatial_key_matches_serialized_record():
    coords = (12.3456, -7.0, 0.0004)
    line = atom_line(1, "C1", coords)
    assert format_spatial_key(coords) == spatial_key(line)


def test_serial_and_residue_fields():
    line = atom_line(42, "CA", (0.0, 0.0, 0.0), resname="GLY", chain="B", resseq=117)
    assert serial_number(line) == 42
    assert residue_tag(line) == "B 117 "
    assert coordinates(line) == (0.0, 0.0, 0.0)


def test_unreadable_serial_is_none():
    line = "ATOM  ***** " + atom_line(1, "C1", (0.0, 0.0, 0.0))[12:]
    assert serial_number(line) is None


def test_non_numeric_coordinates_raise():
    line = atom_line(1, "C1", (0.0, 0.0, 0.0))
    broken = line[:30] + "    abcd" + line[38:]
    with pytest.raises(ValueError):
        coordinates(broken)


def test_iter_atom_records_skips_other_lines():
    text = "\n".join(
        [
            "REMARK  test",
            "ROOT",
            atom_line(1, "C1", (0.0, 0.0, 0.0)),
            atom_line(2, "O1", (1.0, 0.0, 0.0), record="HETATM"),
            "ENDROOT",
            "TORSDOF 0",
        ]
    )
    records = list(iter_atom_records(text))
    assert len(records) == 2
    assert all(is_atom_record(line) for line in records)


def test_wrap_rigid_layout():
    line = atom_line(1, "C1", (0.0, 0.0, 0.0))
    assert wrap_rigid([line]).splitlines() == ["ROOT", line, "ENDROOT", "TORSDOF 0"]
    assert wrap_rigid([]) == "ROOT\nENDROOT\nTORSDOF 0\n"
