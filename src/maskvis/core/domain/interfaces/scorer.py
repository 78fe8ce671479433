"""Interface for the external predictive scorer."""

from abc import ABC, abstractmethod

from ..models.scoring import ExplanationResult, ScoreResult


class Scorer(ABC):
    """Abstract base class for receptor-ligand scoring backends.

    A scorer is an expensive, session-scoped resource: the owning session
    calls :meth:`prepare` exactly once before the first scoring call.
    """

    def prepare(self) -> None:
        """One-time initialization (device selection, model loading)."""

    def supports_explanations(self) -> bool:
        """Whether :meth:`gradient` and :meth:`relevance` can be called."""
        return True

    @abstractmethod
    def score(self, receptor: str, ligand: str) -> ScoreResult:
        """
        Score a complex.

        Args:
            receptor: Receptor structure in PDBQT text
            ligand: Ligand structure in PDBQT text

        Returns:
            ScoreResult with pose score and affinity
        """
        pass

    @abstractmethod
    def gradient(
        self, receptor: str, ligand: str, layer_to_ignore: str = ""
    ) -> ExplanationResult:
        """Per-atom gradient attribution, keyed by spatial key."""
        pass

    @abstractmethod
    def relevance(
        self,
        receptor: str,
        ligand: str,
        layer_to_ignore: str = "",
        zero_values: bool = False,
    ) -> ExplanationResult:
        """Per-atom layer-wise relevance propagation, keyed by spatial key."""
        pass
