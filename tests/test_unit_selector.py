"""Tests for residue, single-atom and fragment unit selection."""

import pytest

from maskvis.core.domain.implementations.rdkit_fragment_enumerator import (
    RDKitFragmentEnumerator,
)
from maskvis.core.domain.models import Atom, AtomIdentityIndex, MoleculeRole, UnitKind
from maskvis.core.services.unit_selector import UnitSelector

from conftest import (
    KEY_A,
    KEY_B,
    KEY_C,
    KEY_H,
    KEY_R1_CA,
    KEY_R1_N,
    KEY_R2_CA,
    KEY_R3_CA,
    KEY_R3_N,
    build_ligand,
    build_receptor,
)


@pytest.fixture
def selector(index):
    return UnitSelector(index, RDKitFragmentEnumerator())


def test_residues_grouped_by_tag_in_file_order(selector, receptor):
    units = selector.residue_units(receptor)

    assert [unit.name for unit in units] == ["residue A   1", "residue A   2", "residue A   3"]
    assert units[0].core == frozenset({KEY_R1_N, KEY_R1_CA})
    assert units[1].core == frozenset({KEY_R2_CA})
    assert units[2].core == frozenset({KEY_R3_N, KEY_R3_CA})
    for unit in units:
        assert unit.kind is UnitKind.RESIDUE
        assert unit.role is MoleculeRole.RECEPTOR
        assert unit.removal == unit.core


def test_atom_units_cover_heavy_atoms_with_their_hydrogens(selector, ligand):
    units = {unit.name: unit for unit in selector.atom_units(ligand)}

    assert sorted(units) == ["atom 1", "atom 2", "atom 4"]
    assert units["atom 2"].core == frozenset({KEY_B})
    assert units["atom 2"].removal == frozenset({KEY_B, KEY_H})
    assert units["atom 2"].satellites == frozenset({KEY_H})
    assert units["atom 1"].removal == frozenset({KEY_A})


def test_single_bond_fragments(selector, ligand):
    units = {unit.name: unit for unit in selector.fragment_units(ligand, max_size=1)}

    assert sorted(units) == ["fragment 0", "fragment 1"]
    assert units["fragment 0"].core == frozenset({KEY_A, KEY_B})
    assert units["fragment 0"].removal == frozenset({KEY_A, KEY_B, KEY_H})
    assert units["fragment 1"].core == frozenset({KEY_B, KEY_C})
    assert all(unit.kind is UnitKind.FRAGMENT for unit in units.values())


def test_longer_paths_follow_shorter_ones(selector, ligand):
    units = selector.fragment_units(ligand, max_size=2)

    assert sorted(unit.name for unit in units[:2]) == ["fragment 0", "fragment 1"]
    assert units[2].name in ("fragment 0-1", "fragment 1-0")
    assert units[2].core == frozenset({KEY_A, KEY_B, KEY_C})
    assert units[2].removal == frozenset({KEY_A, KEY_B, KEY_C, KEY_H})


def test_selection_is_idempotent(selector, ligand, receptor):
    assert selector.atom_units(ligand) == selector.atom_units(ligand)
    assert selector.fragment_units(ligand, 2) == selector.fragment_units(ligand, 2)
    assert selector.residue_units(receptor) == selector.residue_units(receptor)


def test_unresolvable_atom_is_left_out():
    ghost = Atom(index=5, element="O", atomic_number=8, coordinates=(9.0, 9.0, 9.0))
    ligand = build_ligand(extra_atoms=[ghost])
    selector = UnitSelector(AtomIdentityIndex(build_receptor(), ligand))

    names = [unit.name for unit in selector.atom_units(ligand)]
    assert "atom 5" not in names
    assert len(names) == 3


def test_fragments_need_an_enumerator(index, ligand):
    with pytest.raises(ValueError):
        UnitSelector(index).fragment_units(ligand)
