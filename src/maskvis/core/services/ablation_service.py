"""Service rescoring perturbed complexes and attributing score deltas to atoms."""

import logging
import os
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from .perturbation_builder import Perturbation, PerturbationBuilder
from .relevance_filter import SpatialRelevanceFilter
from ..domain.interfaces.scorer import Scorer
from ..domain.models.atom_identity_index import AtomIdentityIndex
from ..domain.models.attribution import AttributionAccumulator
from ..domain.models.prepared_molecule import MoleculeRole, PreparedMolecule
from ..domain.models.scoring import Baseline
from ..domain.models.structural_unit import StructuralUnit, UnitKind

logger = logging.getLogger(__name__)

# Score used when a removal leaves the ligand without atoms
LIGAND_SENTINEL_SCORE = 0.0


def distribute_delta(unit: StructuralUnit, delta: float) -> Dict[str, float]:
    """
    Split one score delta over the core atoms of a unit.

    Residue and single-atom units credit every core atom with the whole
    delta. Fragment units give each core atom an equal share. Satellite
    hydrogens receive nothing in either case.

    Args:
        unit: Unit that was removed
        delta: Baseline score minus perturbed score

    Returns:
        Contribution per core atom key
    """
    if unit.kind is UnitKind.FRAGMENT:
        share = delta / len(unit.core)
        return {key: share for key in unit.core}
    return {key: delta for key in unit.core}


class AblationService:
    """Scores unit removals against a fixed baseline.

    Each pass owns its own accumulator. The scorer, baseline and identity
    index are shared read-only across units.
    """

    def __init__(
        self,
        scorer: Scorer,
        baseline: Baseline,
        receptor: PreparedMolecule,
        ligand: PreparedMolecule,
        index: AtomIdentityIndex,
        builder: Optional[PerturbationBuilder] = None,
        dump_dir: Optional[str] = None,
        show_progress: bool = True,
    ):
        """
        Initialize the service.

        Args:
            scorer: Prepared scorer
            baseline: Score of the unperturbed complex
            receptor: Unperturbed receptor
            ligand: Unperturbed ligand
            index: Identity index over both molecules
            builder: Perturbation builder
            dump_dir: Directory receiving every perturbed structure, if set
            show_progress: Whether to display progress bars
        """
        self._scorer = scorer
        self._baseline = baseline
        self._molecules = {
            MoleculeRole.RECEPTOR: receptor,
            MoleculeRole.LIGAND: ligand,
        }
        self._index = index
        self._builder = builder or PerturbationBuilder()
        self._dump_dir = dump_dir
        self._dump_counts = {role: 0 for role in MoleculeRole}
        self._show_progress = show_progress

    def score_unit(self, unit: StructuralUnit) -> float:
        """
        Score the complex with one unit removed.

        The perturbed molecule is scored against the unperturbed partner.

        Args:
            unit: Unit to remove

        Returns:
            Score under the baseline's target
        """
        molecule = self._molecules[unit.role]
        perturbation = self._builder.build(molecule, unit.removal)
        self._dump(unit, perturbation)

        if unit.role is MoleculeRole.LIGAND and perturbation.is_empty:
            logger.debug(f"Removing {unit.name} empties the ligand, using sentinel")
            return LIGAND_SENTINEL_SCORE

        if unit.role is MoleculeRole.RECEPTOR:
            result = self._scorer.score(
                perturbation.pdbqt, self._molecules[MoleculeRole.LIGAND].pdbqt
            )
        else:
            result = self._scorer.score(
                self._molecules[MoleculeRole.RECEPTOR].pdbqt, perturbation.pdbqt
            )

        score = result.value(self._baseline.target)
        logger.debug(f"{unit.name}: score {score}")
        return score

    def unit_delta(self, unit: StructuralUnit) -> float:
        return self._baseline.score - self.score_unit(unit)

    def remove_residues(
        self,
        units: Iterable[StructuralUnit],
        relevance_filter: Optional[SpatialRelevanceFilter] = None,
    ) -> Dict[str, float]:
        """
        Score receptor residue removals.

        Args:
            units: Residue units
            relevance_filter: Filter deciding which residues are scored

        Returns:
            Attribution per receptor atom key
        """
        admitted = []
        for unit in units:
            if relevance_filter is None or relevance_filter.admits(
                self._unit_coordinates(unit)
            ):
                admitted.append(unit)
            else:
                logger.debug(f"Skipping {unit.name}, outside the ligand box")

        logger.info(f"Scoring {len(admitted)} residues near the ligand")
        return self._run_pass(admitted, MoleculeRole.RECEPTOR, "Scoring residues")

    def remove_each_atom(self, units: Iterable[StructuralUnit]) -> Dict[str, float]:
        """Score single heavy-atom removals; returns attribution per ligand atom key."""
        return self._run_pass(list(units), MoleculeRole.LIGAND, "Scoring individual atoms")

    def remove_fragments(self, units: Iterable[StructuralUnit]) -> Dict[str, float]:
        """
        Score fragment removals.

        An atom covered by several fragments ends up with the mean of its
        shares, not their sum.

        Returns:
            Attribution per ligand atom key
        """
        return self._run_pass(list(units), MoleculeRole.LIGAND, "Scoring fragments")

    def _run_pass(
        self, units: List[StructuralUnit], role: MoleculeRole, description: str
    ) -> Dict[str, float]:
        accumulator = AttributionAccumulator(self._index.record_keys(role))

        for unit in tqdm(
            units, desc=description, unit="unit", disable=not self._show_progress
        ):
            delta = self.unit_delta(unit)
            for key, value in distribute_delta(unit, delta).items():
                if not accumulator.add(key, value):
                    logger.debug(f"Atom {key} of {unit.name} is not tracked")

        return accumulator.finalize()

    def _unit_coordinates(self, unit: StructuralUnit) -> List[tuple]:
        coords = []
        for key in unit.core:
            position = self._index.coordinates_for_key(key, unit.role)
            if position is not None:
                coords.append(position)
        return coords

    def _dump(self, unit: StructuralUnit, perturbation: Perturbation) -> None:
        """Write a perturbed structure to the dump directory, if one is set."""
        if not self._dump_dir:
            return

        os.makedirs(self._dump_dir, exist_ok=True)
        if not any(self._dump_counts.values()):
            for role, molecule in self._molecules.items():
                path = os.path.join(self._dump_dir, f"unmodified_{role.value}.pdbqt")
                with open(path, "w") as f:
                    f.write(molecule.pdbqt)

        self._dump_counts[unit.role] += 1
        serials = sorted(
            serial
            for serial in (
                self._index.serial_for_key(key, unit.role) for key in unit.removal
            )
            if serial is not None
        )
        path = os.path.join(
            self._dump_dir,
            f"mod_{unit.role.value}_{self._dump_counts[unit.role]}.pdbqt",
        )
        with open(path, "w") as f:
            f.write(f"REMARK {unit.name} ATOMS REMOVED {serials}\n")
            f.write(perturbation.pdbqt)
