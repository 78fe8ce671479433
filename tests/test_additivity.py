"""Tests for merging ligand attributions and the additivity log."""

import os

import pytest

from maskvis.core.domain.models import AdditivityRecord, AttributionAccumulator
from maskvis.core.exceptions import AttributionMismatchError
from maskvis.core.services.additivity_analyzer import (
    AdditivityAnalyzer,
    combine_attributions,
)
from maskvis.infrastructure.repositories.additivity_log_repository import (
    AdditivityLogRepository,
)

from conftest import KEY_A, KEY_B, KEY_C, KEY_H


def test_combine_takes_the_mean_of_both_maps():
    single = {KEY_A: 1.0, KEY_B: 2.0}
    fragment = {KEY_A: 3.0, KEY_B: 0.0}
    assert combine_attributions(single, fragment) == {KEY_A: 2.0, KEY_B: 1.0}


def test_combine_with_one_map_returns_a_copy():
    single = {KEY_A: 1.0}
    combined = combine_attributions(single, None)
    assert combined == single
    assert combined is not single
    assert combine_attributions(None, {KEY_B: 0.5}) == {KEY_B: 0.5}


def test_combine_rejects_maps_over_different_atoms():
    with pytest.raises(AttributionMismatchError):
        combine_attributions({KEY_A: 1.0, KEY_B: 2.0}, {KEY_A: 1.0})


def test_combine_needs_at_least_one_map():
    with pytest.raises(AttributionMismatchError):
        combine_attributions(None, None)


def test_accumulator_mean_is_independent_of_order():
    values = [0.1, 1e16, 0.3, -1e16, 0.7, 0.2]
    forward = AttributionAccumulator([KEY_A])
    backward = AttributionAccumulator([KEY_A])
    for value in values:
        forward.add(KEY_A, value)
    for value in reversed(values):
        backward.add(KEY_A, value)

    assert forward.finalize() == backward.finalize()
    assert forward.count(KEY_A) == 6


def test_accumulator_ignores_untracked_atoms():
    accumulator = AttributionAccumulator([KEY_A])
    assert not accumulator.add(KEY_B, 1.0)
    assert KEY_B not in accumulator
    assert accumulator.finalize() == {KEY_A: 0.0}


def test_heavy_atom_total_excludes_hydrogens(index):
    analyzer = AdditivityAnalyzer(index)
    scores = {KEY_A: 0.5, KEY_B: 1.0, KEY_H: 10.0, KEY_C: 1.5}
    assert analyzer.heavy_atom_total(scores) == pytest.approx(3.0)
    assert analyzer.heavy_atom_total(None) == 0.0


def test_record_canonicalizes_source_path(index, tmp_path):
    ligand_file = tmp_path / "lig.sdf"
    ligand_file.write_text("")
    analyzer = AdditivityAnalyzer(index)

    record = analyzer.record(
        str(tmp_path / "." / "lig.sdf"), 5.0, {KEY_B: 2.0, KEY_H: 1.0}, None
    )

    assert record.source_path == os.path.realpath(str(ligand_file))
    assert record.single_total == 2.0
    assert record.fragment_total == 0.0


def test_record_line_format():
    record = AdditivityRecord("/data/lig.sdf", 0.5, 1.25, 3.0)
    assert record.to_line() == "/data/lig.sdf 0.5 1.25 3\n"
    assert AdditivityRecord.from_line("/data/my lig.sdf 0.5 1.25 3\n") == AdditivityRecord(
        "/data/my lig.sdf", 0.5, 1.25, 3.0
    )


def test_log_repository_appends(tmp_path):
    repository = AdditivityLogRepository(str(tmp_path / "logs" / "additivity.txt"))
    assert repository.list() == []

    first = AdditivityRecord(os.path.realpath("a.sdf"), 1.0, 0.5, 0.25)
    second = AdditivityRecord(os.path.realpath("a.sdf"), 2.0, 1.5, 1.25)
    repository.create(first)
    repository.create(second)

    assert repository.list() == [first, second]
    assert repository.get("a.sdf") == second
    assert repository.get("b.sdf") is None


def test_log_repository_skips_malformed_lines(tmp_path):
    log_path = tmp_path / "additivity.txt"
    log_path.write_text("/x/lig.sdf 1 2 3\nnot a record\n\n")

    records = AdditivityLogRepository(str(log_path)).list()

    assert records == [AdditivityRecord("/x/lig.sdf", 1.0, 2.0, 3.0)]
