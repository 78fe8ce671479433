"""Merging of ligand attributions and the additivity check."""

import logging
import math
import os
from typing import Dict, Optional

from ..domain.models.atom_identity_index import AtomIdentityIndex
from ..domain.models.attribution import AdditivityRecord
from ..domain.models.prepared_molecule import MoleculeRole
from ..exceptions import AttributionMismatchError

logger = logging.getLogger(__name__)


def combine_attributions(
    single: Optional[Dict[str, float]], fragment: Optional[Dict[str, float]]
) -> Dict[str, float]:
    """
    Merge single-atom and fragment attributions.

    Either map alone is returned as is; with both, each atom gets the mean
    of its two values.

    Args:
        single: Single-atom attribution, or None if not computed
        fragment: Fragment attribution, or None if not computed

    Returns:
        Combined attribution per atom key

    Raises:
        AttributionMismatchError: If both maps are given but cover different
            atoms, or if neither is given
    """
    if single is None and fragment is None:
        raise AttributionMismatchError("No attribution to combine")
    if fragment is None:
        return dict(single)
    if single is None:
        return dict(fragment)

    if set(single) != set(fragment):
        only_single = len(set(single) - set(fragment))
        only_fragment = len(set(fragment) - set(single))
        raise AttributionMismatchError(
            f"Attribution maps cover different atoms: {only_single} only in "
            f"single-atom map, {only_fragment} only in fragment map"
        )

    return {key: (single[key] + fragment[key]) / 2 for key in single}


class AdditivityAnalyzer:
    """Sums ligand attributions over heavy atoms for comparison with the baseline.

    Perfect additivity is not expected from a nonlinear model; the totals
    are recorded, never asserted.
    """

    def __init__(self, index: AtomIdentityIndex):
        self._index = index

    def heavy_atom_total(self, scores: Optional[Dict[str, float]]) -> float:
        """Sum of attributions over heavy ligand atoms; 0.0 for no map."""
        if not scores:
            return 0.0

        values = []
        for key, value in scores.items():
            is_hydrogen = self._index.is_hydrogen(key, MoleculeRole.LIGAND)
            if is_hydrogen is None:
                logger.debug(f"Ligand atom {key} not in identity index, skipped")
                continue
            if not is_hydrogen:
                values.append(value)
        return math.fsum(values)

    def record(
        self,
        source_path: str,
        baseline_score: float,
        single: Optional[Dict[str, float]],
        fragment: Optional[Dict[str, float]],
    ) -> AdditivityRecord:
        """
        Build the additivity record for one complex.

        Args:
            source_path: Ligand file path, stored canonicalized
            baseline_score: Score of the unperturbed complex
            single: Single-atom attribution, or None
            fragment: Fragment attribution, or None

        Returns:
            AdditivityRecord with both totals
        """
        record = AdditivityRecord(
            source_path=os.path.realpath(source_path),
            baseline_score=baseline_score,
            single_total=self.heavy_atom_total(single),
            fragment_total=self.heavy_atom_total(fragment),
        )

        logger.info(f"Original score: {record.baseline_score}")
        if single is not None:
            logger.info(f"Sum of single removals: {record.single_total}")
        if fragment is not None:
            logger.info(f"Sum of fragment removals: {record.fragment_total}")

        return record
