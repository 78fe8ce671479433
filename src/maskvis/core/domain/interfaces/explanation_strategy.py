"""Interface for scorer-provided attribution methods."""

from abc import ABC, abstractmethod

from .scorer import Scorer
from ..models.scoring import ExplanationResult


class ExplanationStrategy(ABC):
    """An attribution method delegated whole to the scorer."""

    name: str = ""

    @property
    def writes_output(self) -> bool:
        return True

    @abstractmethod
    def explain(self, scorer: Scorer, receptor: str, ligand: str) -> ExplanationResult:
        """
        Run the method on an unperturbed complex.

        Args:
            scorer: Prepared scorer
            receptor: Receptor PDBQT text
            ligand: Ligand PDBQT text

        Returns:
            Per-atom maps for ligand and receptor
        """
        pass
