"""Interface for loading and preparing receptor and ligand structures."""

from abc import ABC, abstractmethod

from ..models.prepared_molecule import MoleculeRole, PreparedMolecule


class StructureSource(ABC):
    """Abstract base class for structure readers."""

    @abstractmethod
    def load(self, path: str, role: MoleculeRole) -> PreparedMolecule:
        """
        Read a structure file and prepare it for scoring.

        Receptors receive all hydrogens, ligands only polar hydrogens.

        Args:
            path: Structure file path
            role: Whether the file holds the receptor or the ligand

        Returns:
            PreparedMolecule with PDBQT text and molecular graph

        Raises:
            StructureInputError: If the file cannot be read or parsed
        """
        pass
