"""Domain model classes."""

from .atom import Atom
from .bond import Bond
from .molecular_graph import MolecularGraph
from .prepared_molecule import MoleculeRole, PreparedMolecule
from .structural_unit import StructuralUnit, UnitKind
from .scoring import Baseline, ExplanationResult, ScoreResult, ScoringTarget
from .attribution import AdditivityRecord, AttributionAccumulator
from .atom_identity_index import AtomIdentityIndex

__all__ = [
    "Atom",
    "Bond",
    "MolecularGraph",
    "MoleculeRole",
    "PreparedMolecule",
    "StructuralUnit",
    "UnitKind",
    "Baseline",
    "ExplanationResult",
    "ScoreResult",
    "ScoringTarget",
    "AdditivityRecord",
    "AttributionAccumulator",
    "AtomIdentityIndex",
]
