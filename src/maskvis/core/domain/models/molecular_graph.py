#!/usr/bin/env python3
# src/maskvis/core/domain/models/molecular_graph.py

"""
Domain model representing a molecular structure as a graph.
"""

from typing import Dict, List, Optional

import networkx as nx
import numpy as np

from .atom import Atom
from .bond import Bond


class MolecularGraph:
    """Graph representation of a molecule, nodes keyed by library index."""

    def __init__(self, atoms: List[Atom], bonds: List[Bond]):
        """
        Initialize a MolecularGraph.

        Args:
            atoms: List of Atom objects
            bonds: List of Bond objects between those atoms
        """
        self.atoms = atoms
        self.bonds = bonds
        self._atoms_by_index: Dict[int, Atom] = {atom.index: atom for atom in atoms}
        self.graph = self._create_graph()

    def _create_graph(self) -> nx.Graph:
        """Create NetworkX graph from atoms and bonds."""
        G = nx.Graph()

        for atom in self.atoms:
            G.add_node(
                atom.index,
                element=atom.element,
                atomic_number=atom.atomic_number,
                coord=atom.coordinates,
            )

        for bond in self.bonds:
            if bond.atom1_id in G and bond.atom2_id in G:
                G.add_edge(bond.atom1_id, bond.atom2_id)

        return G

    def get_atom(self, index: int) -> Optional[Atom]:
        return self._atoms_by_index.get(index)

    def heavy_atoms(self) -> List[Atom]:
        """Non-hydrogen atoms in library index order."""
        return sorted(
            (atom for atom in self.atoms if not atom.is_hydrogen),
            key=lambda atom: atom.index,
        )

    def heavy_bonds(self) -> List[Bond]:
        """Bonds between two heavy atoms, in a fixed order.

        Fragment paths refer to bonds by their position in this list.
        """
        heavy = {atom.index for atom in self.atoms if not atom.is_hydrogen}
        pairs = {
            tuple(sorted((bond.atom1_id, bond.atom2_id)))
            for bond in self.bonds
            if bond.atom1_id in heavy and bond.atom2_id in heavy
        }
        return [Bond(first, second) for first, second in sorted(pairs)]

    def satellite_hydrogens(self, index: int) -> List[int]:
        """Indices of hydrogens directly bonded to the given atom."""
        if index not in self.graph:
            return []
        return sorted(
            neighbor
            for neighbor in self.graph.neighbors(index)
            if self.graph.nodes[neighbor]["atomic_number"] == 1
        )

    def get_coordinates(self) -> np.ndarray:
        """Get coordinates of all atoms in the graph.

        Returns:
            numpy array of shape (n_atoms, 3) containing xyz coordinates
        """
        return np.array([atom.coordinates for atom in self.atoms], dtype=float)

    def centroid(self) -> np.ndarray:
        """Geometric center of all atoms."""
        return self.get_coordinates().mean(axis=0)
