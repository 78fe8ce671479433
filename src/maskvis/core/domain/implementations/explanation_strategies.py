"""Gradient and relevance-propagation attribution, delegated to the scorer."""

import logging

from ..interfaces.explanation_strategy import ExplanationStrategy
from ..interfaces.scorer import Scorer
from ..models.scoring import ExplanationResult

logger = logging.getLogger(__name__)


class GradientExplanation(ExplanationStrategy):
    """Per-atom gradient of the score with respect to atom positions."""

    name = "gradient"

    def __init__(self, layer_to_ignore: str = ""):
        self.layer_to_ignore = layer_to_ignore

    def explain(self, scorer: Scorer, receptor: str, ligand: str) -> ExplanationResult:
        if self.layer_to_ignore:
            logger.info(f'Ignoring layer: "{self.layer_to_ignore}"')
        return scorer.gradient(receptor, ligand, self.layer_to_ignore)


class RelevanceExplanation(ExplanationStrategy):
    """Layer-wise relevance propagation through the scoring model.

    With ``zero_values`` set, relevance is propagated only from zero-valued
    nodes; the resulting maps are all zero and are not written.
    """

    name = "lrp"

    def __init__(self, layer_to_ignore: str = "", zero_values: bool = False):
        self.layer_to_ignore = layer_to_ignore
        self.zero_values = zero_values

    @property
    def writes_output(self) -> bool:
        return not self.zero_values

    def explain(self, scorer: Scorer, receptor: str, ligand: str) -> ExplanationResult:
        if self.zero_values:
            logger.info("Only propagating from zero nodes")
        return scorer.relevance(
            receptor, ligand, self.layer_to_ignore, self.zero_values
        )
