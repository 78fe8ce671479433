"""Core domain models and interfaces."""

from .models import (
    AtomIdentityIndex,
    MolecularGraph,
    MoleculeRole,
    PreparedMolecule,
    StructuralUnit,
    UnitKind,
)
from .interfaces import ExplanationStrategy, FragmentEnumerator, Scorer, StructureSource

__all__ = [
    "AtomIdentityIndex",
    "MolecularGraph",
    "MoleculeRole",
    "PreparedMolecule",
    "StructuralUnit",
    "UnitKind",
    "ExplanationStrategy",
    "FragmentEnumerator",
    "Scorer",
    "StructureSource",
]
