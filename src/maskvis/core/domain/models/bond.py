#!/usr/bin/env python3
# src/maskvis/core/domain/models/bond.py

"""
Domain model representing a chemical bond between atoms.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Bond:
    """Represents a bond between two atoms, by library index."""

    atom1_id: int
    atom2_id: int
