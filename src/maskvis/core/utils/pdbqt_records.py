#!/usr/bin/env python3
# src/maskvis/core/utils/pdbqt_records.py

"""
Fixed-column helpers for ATOM/HETATM records in PDB and PDBQT text.

Columns follow the PDB convention (0-based slices below):
serial [6:11], residue tag [21:27] (chain, sequence number, insertion code),
x [30:38], y [38:46], z [46:54], B-factor [60:66].
"""

from typing import Iterable, Iterator, Optional, Tuple

ATOM_RECORDS = ("ATOM", "HETATM")

ROOT_MARKER = "ROOT"
ENDROOT_MARKER = "ENDROOT"
TORSDOF_MARKER = "TORSDOF 0"


def is_atom_record(line: str) -> bool:
    """Check whether a line is an ATOM or HETATM record."""
    return line.startswith(ATOM_RECORDS)


def iter_atom_records(text: str) -> Iterator[str]:
    """Yield atom record lines of a structure string in file order."""
    for line in text.splitlines():
        if is_atom_record(line):
            yield line


def spatial_key(line: str) -> str:
    """Build the coordinate key of an atom record.

    The key is the x, y and z fields with leading whitespace trimmed and
    concatenated, e.g. ``"1.500-0.2503.000"``.

    Args:
        line: ATOM/HETATM record

    Returns:
        Coordinate key string
    """
    return line[30:38].lstrip() + line[38:46].lstrip() + line[46:54].lstrip()


def format_spatial_key(coordinates: Iterable[float]) -> str:
    """Build the coordinate key for in-memory coordinates.

    Coordinates are rendered with the same ``%8.3f`` layout PDB writers use,
    so the result matches :func:`spatial_key` of the serialized record.
    """
    return "".join(f"{value:8.3f}".lstrip() for value in coordinates)


def serial_number(line: str) -> Optional[int]:
    """Return the serial number of an atom record, or None if unreadable."""
    try:
        return int(line[6:11])
    except ValueError:
        return None


def residue_tag(line: str) -> str:
    """Return the chain/sequence-number/insertion-code field of a record."""
    return line[21:27]


def coordinates(line: str) -> Tuple[float, float, float]:
    """Parse the x, y, z fields of an atom record.

    Raises:
        ValueError: If a coordinate field is not numeric
    """
    return (float(line[30:38]), float(line[38:46]), float(line[46:54]))


def wrap_rigid(records: Iterable[str]) -> str:
    """Wrap atom records in a rigid-body block with zero rotatable bonds."""
    lines = [ROOT_MARKER]
    lines.extend(records)
    lines.append(ENDROOT_MARKER)
    lines.append(TORSDOF_MARKER)
    return "\n".join(lines) + "\n"
