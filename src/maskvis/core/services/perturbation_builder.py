"""Construction of perturbed structures with atom records removed."""

from dataclasses import dataclass
from typing import AbstractSet

from ..domain.models.prepared_molecule import PreparedMolecule
from ..utils.pdbqt_records import iter_atom_records, spatial_key, wrap_rigid


@dataclass(frozen=True)
class Perturbation:
    """A structure string with some atom records dropped."""

    pdbqt: str
    retained: int
    removed: int

    @property
    def is_empty(self) -> bool:
        """True when no atom record survived the removal."""
        return self.retained == 0


class PerturbationBuilder:
    """Drops whole atom records by spatial key.

    Retained records keep their original order and bytes. The result is
    always wrapped in ROOT/ENDROOT with TORSDOF 0 so the scorer reads it as
    one rigid body, whether or not anything was removed.
    """

    def build(self, molecule: PreparedMolecule, removal: AbstractSet[str]) -> Perturbation:
        kept = []
        removed = 0
        for line in iter_atom_records(molecule.pdbqt):
            if spatial_key(line) in removal:
                removed += 1
            else:
                kept.append(line)

        return Perturbation(pdbqt=wrap_rigid(kept), retained=len(kept), removed=removed)
