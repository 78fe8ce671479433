"""Fragment enumeration using RDKit's subgraph search."""

import logging
from typing import Dict, List, Tuple

from rdkit import Chem

from ..interfaces.fragment_enumerator import FragmentEnumerator
from ..models.molecular_graph import MolecularGraph


class RDKitFragmentEnumerator(FragmentEnumerator):
    """Enumerates bond paths with ``Chem.FindAllSubgraphsOfLengthMToN``."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def _create_rdkit_mol(self, graph: MolecularGraph) -> Chem.Mol:
        """Convert the heavy-atom skeleton of a MolecularGraph to an RDKit Mol.

        Bonds are added in ``graph.heavy_bonds()`` order, so RDKit bond
        indices equal positions in that list.

        Args:
            graph: Molecular graph to convert

        Returns:
            RDKit Mol object
        """
        mol = Chem.RWMol()

        atom_map = {}  # Map from library atom index to RDKit atom index
        for atom in graph.heavy_atoms():
            rdatom = Chem.Atom(atom.atomic_number)
            rdatom.SetNoImplicit(True)
            atom_map[atom.index] = mol.AddAtom(rdatom)

        for bond in graph.heavy_bonds():
            mol.AddBond(
                atom_map[bond.atom1_id],
                atom_map[bond.atom2_id],
                Chem.BondType.SINGLE,
            )

        mol = mol.GetMol()
        mol.UpdatePropertyCache(strict=False)
        return mol

    def find_bond_paths(
        self, graph: MolecularGraph, max_length: int
    ) -> Dict[int, List[Tuple[int, ...]]]:
        if max_length < 1:
            raise ValueError(f"max_length must be at least 1, got {max_length}")

        if not graph.heavy_bonds():
            self.logger.info("No heavy-atom bonds, no fragments to enumerate")
            return {}

        mol = self._create_rdkit_mol(graph)
        groups = Chem.FindAllSubgraphsOfLengthMToN(mol, 1, max_length)

        paths = {}
        for length, group in enumerate(groups, start=1):
            paths[length] = [tuple(path) for path in group]
            self.logger.debug(f"{len(paths[length])} paths of length {length}")

        return paths
