"""Tests for building perturbed structures."""

from maskvis.core.services.perturbation_builder import PerturbationBuilder
from maskvis.core.utils.pdbqt_records import iter_atom_records

from conftest import KEY_A, KEY_B, KEY_C, KEY_H


def test_empty_removal_keeps_every_record_unchanged(ligand):
    perturbation = PerturbationBuilder().build(ligand, frozenset())

    assert perturbation.removed == 0
    assert perturbation.retained == 4
    assert perturbation.pdbqt == ligand.pdbqt
    assert not perturbation.is_empty


def test_removed_records_are_dropped_and_order_preserved(ligand):
    perturbation = PerturbationBuilder().build(ligand, frozenset({KEY_B, KEY_H}))

    records = list(iter_atom_records(ligand.pdbqt))
    lines = perturbation.pdbqt.splitlines()
    assert lines == ["ROOT", records[0], records[3], "ENDROOT", "TORSDOF 0"]
    assert perturbation.removed == 2
    assert perturbation.retained == 2


def test_removing_everything_gives_an_empty_rigid_body(ligand):
    perturbation = PerturbationBuilder().build(
        ligand, frozenset({KEY_A, KEY_B, KEY_H, KEY_C})
    )

    assert perturbation.is_empty
    assert perturbation.pdbqt == "ROOT\nENDROOT\nTORSDOF 0\n"


def test_unknown_keys_are_ignored(ligand):
    perturbation = PerturbationBuilder().build(ligand, frozenset({"1.0002.0003.000"}))
    assert perturbation.removed == 0
    assert perturbation.retained == 4
