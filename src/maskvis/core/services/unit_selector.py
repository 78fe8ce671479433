"""Service selecting the structural units removed during masking."""

import logging
from collections import OrderedDict
from typing import FrozenSet, Iterable, List, Optional, Tuple

from ..domain.interfaces.fragment_enumerator import FragmentEnumerator
from ..domain.models.atom_identity_index import AtomIdentityIndex
from ..domain.models.prepared_molecule import MoleculeRole, PreparedMolecule
from ..domain.models.structural_unit import StructuralUnit, UnitKind
from ..utils.pdbqt_records import iter_atom_records, residue_tag, spatial_key

logger = logging.getLogger(__name__)

DEFAULT_FRAGMENT_SIZE = 6


class UnitSelector:
    """Computes residue, single-atom and fragment units for a session.

    Atoms are resolved to spatial keys through the identity index. An atom
    the index cannot resolve is left out of its unit, so it contributes
    nothing; a unit left with no atoms is skipped.
    """

    def __init__(
        self,
        index: AtomIdentityIndex,
        fragment_enumerator: Optional[FragmentEnumerator] = None,
    ):
        self._index = index
        self._fragment_enumerator = fragment_enumerator

    def residue_units(self, receptor: PreparedMolecule) -> List[StructuralUnit]:
        """
        Group receptor atom records by residue tag.

        Args:
            receptor: Prepared receptor

        Returns:
            One unit per distinct residue tag, in first-seen order
        """
        residues = OrderedDict()
        for line in iter_atom_records(receptor.pdbqt):
            residues.setdefault(residue_tag(line), set()).add(spatial_key(line))

        units = []
        for tag, keys in residues.items():
            members = frozenset(keys)
            units.append(
                StructuralUnit(
                    name=f"residue {tag.strip()}",
                    kind=UnitKind.RESIDUE,
                    role=receptor.role,
                    core=members,
                    removal=members,
                )
            )
        logger.debug(f"Selected {len(units)} residues")
        return units

    def atom_units(self, ligand: PreparedMolecule) -> List[StructuralUnit]:
        """
        One unit per heavy ligand atom, removed together with its hydrogens.

        Args:
            ligand: Prepared ligand

        Returns:
            Units whose core is the single heavy atom
        """
        units = []
        for atom in ligand.graph.heavy_atoms():
            selected = self._with_satellites(ligand, [atom.index])
            if selected is None:
                continue
            core, removal = selected
            units.append(
                StructuralUnit(
                    name=f"atom {atom.index}",
                    kind=UnitKind.ATOM,
                    role=ligand.role,
                    core=core,
                    removal=removal,
                )
            )
        logger.debug(f"Selected {len(units)} single atoms")
        return units

    def fragment_units(
        self, ligand: PreparedMolecule, max_size: int = DEFAULT_FRAGMENT_SIZE
    ) -> List[StructuralUnit]:
        """
        One unit per connected bond path of 1..max_size bonds.

        Paths are enumerated over the heavy-atom skeleton; the atoms at the
        ends of each bond form the core and their hydrogens are added after.
        Different paths may cover the same atoms.

        Args:
            ligand: Prepared ligand
            max_size: Largest number of bonds in a fragment

        Returns:
            Fragment units, shortest paths first
        """
        if self._fragment_enumerator is None:
            raise ValueError("Fragment units need a fragment enumerator")

        bonds = ligand.graph.heavy_bonds()
        paths = self._fragment_enumerator.find_bond_paths(ligand.graph, max_size)

        units = []
        for length in sorted(paths):
            for path in paths[length]:
                indices = set()
                for bond_idx in path:
                    indices.add(bonds[bond_idx].atom1_id)
                    indices.add(bonds[bond_idx].atom2_id)

                selected = self._with_satellites(ligand, sorted(indices))
                if selected is None:
                    continue
                core, removal = selected
                units.append(
                    StructuralUnit(
                        name=f"fragment {'-'.join(str(b) for b in path)}",
                        kind=UnitKind.FRAGMENT,
                        role=ligand.role,
                        core=core,
                        removal=removal,
                    )
                )
        logger.debug(f"Selected {len(units)} fragments")
        return units

    def _with_satellites(
        self, molecule: PreparedMolecule, indices: Iterable[int]
    ) -> Optional[Tuple[FrozenSet[str], FrozenSet[str]]]:
        """Resolve atom indices and their hydrogens to record keys."""
        role = molecule.role
        core = set()
        satellites = set()

        for index in indices:
            key = self._resolve(index, role)
            if key is None:
                continue
            core.add(key)
            for hydrogen in molecule.graph.satellite_hydrogens(index):
                hydrogen_key = self._resolve(hydrogen, role)
                if hydrogen_key is not None:
                    satellites.add(hydrogen_key)

        if not core:
            return None
        return frozenset(core), frozenset(core | satellites)

    def _resolve(self, index: int, role: MoleculeRole) -> Optional[str]:
        """Key of an atom that has a serialized record, else None."""
        key = self._index.key_for_index(index, role)
        if key is None or not self._index.has_record(key, role):
            logger.debug(f"No {role.value} record for atom index {index}")
            return None
        return key
