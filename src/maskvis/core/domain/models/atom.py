#!/usr/bin/env python3
# src/maskvis/core/domain/models/atom.py

"""
Domain model representing an atom in a prepared molecule.
"""

from dataclasses import dataclass
from typing import Tuple

from ...utils.pdbqt_records import format_spatial_key


@dataclass(frozen=True)
class Atom:
    """Represents an atom as numbered by the structure library."""

    index: int
    element: str
    atomic_number: int
    coordinates: Tuple[float, float, float]

    @property
    def is_hydrogen(self) -> bool:
        return self.atomic_number == 1

    @property
    def spatial_key(self) -> str:
        """Coordinate key matching the serialized record of this atom."""
        return format_spatial_key(self.coordinates)
