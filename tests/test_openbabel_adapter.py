"""Tests for structure preparation with Open Babel."""

import pytest

pytest.importorskip("openbabel")

from maskvis.core.domain.models import AtomIdentityIndex, MoleculeRole
from maskvis.core.exceptions import StructureInputError
from maskvis.infrastructure.adapters.openbabel_adapter import OpenBabelStructureSource

ETHANOL_XYZ = """\
9
ethanol
C         -0.00170        0.00000       -0.00087
C          1.51161        0.00000       -0.00087
O          1.97938        1.34719        0.00011
H         -0.38830        1.02796        0.00014
H         -0.38734       -0.51304        0.88879
H         -0.38734       -0.51458       -0.88902
H          1.88027       -0.51372       -0.89024
H          1.88027       -0.51495        0.88898
H          2.93898        1.31542        0.00044
"""


@pytest.fixture
def ethanol_file(tmp_path):
    path = tmp_path / "ethanol.xyz"
    path.write_text(ETHANOL_XYZ)
    return str(path)


def test_ligand_is_wrapped_as_rigid_body(ethanol_file):
    molecule = OpenBabelStructureSource().load(ethanol_file, MoleculeRole.LIGAND)

    assert molecule.name == "ethanol"
    assert "ROOT" in molecule.pdbqt
    assert "TORSDOF" in molecule.pdbqt
    assert len(molecule.graph.heavy_atoms()) == 3
    assert len(molecule.graph.heavy_bonds()) == 2


def test_every_graph_atom_has_a_record(ethanol_file):
    source = OpenBabelStructureSource()
    ligand = source.load(ethanol_file, MoleculeRole.LIGAND)
    receptor = source.load(ethanol_file, MoleculeRole.RECEPTOR)
    index = AtomIdentityIndex(receptor, ligand)

    for atom in ligand.graph.heavy_atoms():
        key = index.key_for_index(atom.index, MoleculeRole.LIGAND)
        assert index.has_record(key, MoleculeRole.LIGAND)


def test_receptor_is_always_wrapped(ethanol_file):
    receptor = OpenBabelStructureSource().load(ethanol_file, MoleculeRole.RECEPTOR)
    lines = receptor.pdbqt.splitlines()
    assert lines[0] == "ROOT"
    assert lines[-1] == "TORSDOF 0"


def test_missing_file(tmp_path):
    with pytest.raises(StructureInputError):
        OpenBabelStructureSource().load(str(tmp_path / "none.sdf"), MoleculeRole.LIGAND)


def test_unparseable_file(tmp_path):
    path = tmp_path / "empty.sdf"
    path.write_text("")
    with pytest.raises(StructureInputError):
        OpenBabelStructureSource().load(str(path), MoleculeRole.LIGAND)
