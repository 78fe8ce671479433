"""Interface for connected-subgraph enumeration."""

from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from ..models.molecular_graph import MolecularGraph


class FragmentEnumerator(ABC):
    """Enumerates connected bond paths over a molecule's heavy atoms."""

    @abstractmethod
    def find_bond_paths(
        self, graph: MolecularGraph, max_length: int
    ) -> Dict[int, List[Tuple[int, ...]]]:
        """
        Find all connected bond subgraphs of length 1..max_length.

        Args:
            graph: Molecule to enumerate
            max_length: Largest number of bonds in a path

        Returns:
            Mapping of path length to bond paths; bond numbers are positions
            in ``graph.heavy_bonds()``
        """
        pass
