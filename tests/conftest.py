"""Shared fixtures: a four-atom ligand, a three-residue receptor and fake collaborators."""

from typing import Callable, Dict, List, Optional, Set

import pytest

from maskvis.core.domain.interfaces.scorer import Scorer
from maskvis.core.domain.interfaces.structure_source import StructureSource
from maskvis.core.domain.models import (
    Atom,
    AtomIdentityIndex,
    Baseline,
    Bond,
    ExplanationResult,
    MolecularGraph,
    MoleculeRole,
    PreparedMolecule,
    ScoreResult,
    ScoringTarget,
)
from maskvis.core.utils.pdbqt_records import (
    format_spatial_key,
    iter_atom_records,
    spatial_key,
    wrap_rigid,
)


def atom_line(
    serial: int,
    name: str,
    coords,
    resname: str = "LIG",
    chain: str = "A",
    resseq: int = 1,
    atype: str = "C",
    record: str = "ATOM",
) -> str:
    """Format one PDBQT atom record with standard column layout."""
    x, y, z = coords
    return (
        f"{record:<6}{serial:>5} {name:<4} {resname:>3} {chain}{resseq:>4}    "
        f"{x:>8.3f}{y:>8.3f}{z:>8.3f}{1.0:>6.2f}{0.0:>6.2f}    {0.0:>6.3f} {atype:<2}"
    )


def key(*coords: float) -> str:
    return format_spatial_key(coords)


# Ligand: C(A)-C(B)-C(C) with one hydrogen on B
LIGAND_ATOMS = [
    (1, "C1", "C", 6, (0.0, 0.0, 0.0)),
    (2, "C2", "C", 6, (1.5, 0.0, 0.0)),
    (3, "H2", "H", 1, (1.5, 1.0, 0.0)),
    (4, "C3", "C", 6, (3.0, 0.0, 0.0)),
]
LIGAND_BONDS = [(1, 2), (2, 3), (2, 4)]

KEY_A = key(0.0, 0.0, 0.0)
KEY_B = key(1.5, 0.0, 0.0)
KEY_H = key(1.5, 1.0, 0.0)
KEY_C = key(3.0, 0.0, 0.0)

# Receptor: residue 1 and 2 near the ligand, residue 3 far away
RECEPTOR_ATOMS = [
    (1, "N", 7, 1, (2.0, 3.0, 0.0)),
    (2, "CA", 6, 1, (2.0, 4.0, 0.0)),
    (3, "CA", 6, 2, (-3.0, 0.0, 1.0)),
    (4, "N", 7, 3, (40.0, 40.0, 40.0)),
    (5, "CA", 6, 3, (41.0, 40.0, 40.0)),
]

KEY_R1_N = key(2.0, 3.0, 0.0)
KEY_R1_CA = key(2.0, 4.0, 0.0)
KEY_R2_CA = key(-3.0, 0.0, 1.0)
KEY_R3_N = key(40.0, 40.0, 40.0)
KEY_R3_CA = key(41.0, 40.0, 40.0)


def build_ligand(extra_atoms=(), path: str = "lig.pdbqt") -> PreparedMolecule:
    """Ligand fixture; ``extra_atoms`` are graph-only atoms with no record."""
    records = [
        atom_line(serial, name, coords, atype=element)
        for serial, name, element, _, coords in LIGAND_ATOMS
    ]
    atoms = [
        Atom(index=serial, element=element, atomic_number=number, coordinates=coords)
        for serial, _, element, number, coords in LIGAND_ATOMS
    ]
    atoms.extend(extra_atoms)
    bonds = [Bond(a, b) for a, b in LIGAND_BONDS]
    return PreparedMolecule(
        role=MoleculeRole.LIGAND,
        source_path=path,
        pdbqt=wrap_rigid(records),
        graph=MolecularGraph(atoms, bonds),
    )


def build_receptor(path: str = "receptor.pdbqt") -> PreparedMolecule:
    records = []
    atoms = []
    for serial, name, number, resseq, coords in RECEPTOR_ATOMS:
        element = "N" if number == 7 else "C"
        records.append(
            atom_line(serial, name, coords, resname="ALA", resseq=resseq, atype=element)
        )
        atoms.append(
            Atom(index=serial, element=element, atomic_number=number, coordinates=coords)
        )
    return PreparedMolecule(
        role=MoleculeRole.RECEPTOR,
        source_path=path,
        pdbqt=wrap_rigid(records),
        graph=MolecularGraph(atoms, []),
    )


def present_keys(pdbqt: str) -> Set[str]:
    return {spatial_key(line) for line in iter_atom_records(pdbqt)}


class FakeScorer(Scorer):
    """Scores a complex from the sets of atom keys present in each partner."""

    def __init__(
        self,
        pose: Callable[[Set[str], Set[str]], float],
        affinity: Optional[Callable[[Set[str], Set[str]], float]] = None,
        gradient_maps: Optional[ExplanationResult] = None,
        relevance_maps: Optional[ExplanationResult] = None,
        explains: bool = True,
    ):
        self._pose = pose
        self._affinity = affinity
        self._gradient_maps = gradient_maps or ExplanationResult()
        self._relevance_maps = relevance_maps or ExplanationResult()
        self._explains = explains
        self.prepare_calls = 0
        self.calls: List[Dict[str, Set[str]]] = []

    def prepare(self) -> None:
        self.prepare_calls += 1

    def supports_explanations(self) -> bool:
        return self._explains

    def score(self, receptor: str, ligand: str) -> ScoreResult:
        receptor_keys = present_keys(receptor)
        ligand_keys = present_keys(ligand)
        self.calls.append({"receptor": receptor_keys, "ligand": ligand_keys})
        affinity = self._affinity(receptor_keys, ligand_keys) if self._affinity else 0.0
        return ScoreResult(pose=self._pose(receptor_keys, ligand_keys), affinity=affinity)

    def gradient(self, receptor, ligand, layer_to_ignore=""):
        return self._gradient_maps

    def relevance(self, receptor, ligand, layer_to_ignore="", zero_values=False):
        return self._relevance_maps


class FakeStructureSource(StructureSource):
    def __init__(self, receptor: PreparedMolecule, ligand: PreparedMolecule):
        self._molecules = {MoleculeRole.RECEPTOR: receptor, MoleculeRole.LIGAND: ligand}
        self.loaded: List[str] = []

    def load(self, path: str, role: MoleculeRole) -> PreparedMolecule:
        self.loaded.append(path)
        return self._molecules[role]


def constant_pose(value: float):
    return lambda receptor_keys, ligand_keys: value


@pytest.fixture
def ligand() -> PreparedMolecule:
    return build_ligand()


@pytest.fixture
def receptor() -> PreparedMolecule:
    return build_receptor()


@pytest.fixture
def index(receptor, ligand) -> AtomIdentityIndex:
    return AtomIdentityIndex(receptor, ligand)


@pytest.fixture
def baseline_of():
    def _baseline(scorer: Scorer, receptor, ligand, target=ScoringTarget.POSE):
        return Baseline(target=target, result=scorer.score(receptor.pdbqt, ligand.pdbqt))

    return _baseline
