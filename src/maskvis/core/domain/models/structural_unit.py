#!/usr/bin/env python3
# src/maskvis/core/domain/models/structural_unit.py

"""
Domain model for a group of atoms removed together in one scoring trial.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet

from .prepared_molecule import MoleculeRole


class UnitKind(Enum):
    """Families of removable structural units."""

    RESIDUE = auto()
    ATOM = auto()
    FRAGMENT = auto()


@dataclass(frozen=True)
class StructuralUnit:
    """A named set of atoms, identified by spatial key.

    ``core`` holds the atoms that receive credit for the score change.
    ``removal`` is what is actually deleted: the core plus any satellite
    hydrogens.
    """

    name: str
    kind: UnitKind
    role: MoleculeRole
    core: FrozenSet[str]
    removal: FrozenSet[str]

    def __post_init__(self):
        if not self.core:
            raise ValueError(f"Structural unit {self.name!r} has no atoms")
        if not self.core <= self.removal:
            raise ValueError(
                f"Structural unit {self.name!r} does not remove its own core atoms"
            )

    @property
    def satellites(self) -> FrozenSet[str]:
        return self.removal - self.core
