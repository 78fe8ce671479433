"""Spatial pruning of receptor units far from the ligand."""

from typing import Iterable, Sequence, Tuple

import numpy as np

from ..domain.models.prepared_molecule import PreparedMolecule

DEFAULT_BOX_HALF_WIDTH = 11.75


class SpatialRelevanceFilter:
    """Admits a unit only if one of its atoms lies inside a box around the ligand.

    The box is an axis-aligned cube centred on the ligand centroid. Skipping
    distant residues saves scorer calls and leaves the attribution of admitted
    atoms unchanged.
    """

    def __init__(
        self,
        center: Sequence[float],
        half_width: float = DEFAULT_BOX_HALF_WIDTH,
        enabled: bool = True,
    ):
        self.center = np.asarray(center, dtype=float)
        self.half_width = half_width
        self.enabled = enabled

    @classmethod
    def around_ligand(
        cls,
        ligand: PreparedMolecule,
        half_width: float = DEFAULT_BOX_HALF_WIDTH,
        enabled: bool = True,
    ) -> "SpatialRelevanceFilter":
        return cls(ligand.graph.centroid(), half_width, enabled)

    def admits(self, coordinates: Iterable[Tuple[float, float, float]]) -> bool:
        """
        Check whether any coordinate is strictly inside the box on all axes.

        Args:
            coordinates: Atom positions of one unit

        Returns:
            True if the unit should be scored
        """
        if not self.enabled:
            return True

        coords = np.array(list(coordinates), dtype=float)
        if coords.size == 0:
            return False

        inside = np.abs(coords.reshape(-1, 3) - self.center) < self.half_width
        return bool(np.any(np.all(inside, axis=1)))
