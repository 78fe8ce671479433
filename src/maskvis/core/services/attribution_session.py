# src/maskvis/core/services/attribution_session.py
"""Orchestration of one attribution run over a receptor-ligand complex."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .ablation_service import AblationService
from .additivity_analyzer import AdditivityAnalyzer, combine_attributions
from .relevance_filter import SpatialRelevanceFilter
from .unit_selector import UnitSelector
from ..config import VisualizationConfig
from ..domain.implementations.explanation_strategies import (
    GradientExplanation,
    RelevanceExplanation,
)
from ..domain.interfaces.explanation_strategy import ExplanationStrategy
from ..domain.interfaces.fragment_enumerator import FragmentEnumerator
from ..domain.interfaces.scorer import Scorer
from ..domain.interfaces.structure_source import StructureSource
from ..domain.models.atom_identity_index import AtomIdentityIndex
from ..domain.models.attribution import AdditivityRecord
from ..domain.models.prepared_molecule import MoleculeRole, PreparedMolecule
from ..domain.models.scoring import Baseline, ExplanationResult
from ..exceptions import ConfigurationError
from ...infrastructure.repositories.additivity_log_repository import (
    AdditivityLogRepository,
)
from ...infrastructure.writers.annotated_structure_writer import (
    AnnotatedStructureWriter,
    header_remarks,
)

logger = logging.getLogger(__name__)

EXPLANATION_METHODS = ("gradient", "lrp")


@dataclass
class MaskingResult:
    """Attribution maps produced by one masking run."""

    receptor: Optional[Dict[str, float]] = None
    single: Optional[Dict[str, float]] = None
    fragment: Optional[Dict[str, float]] = None
    ligand: Optional[Dict[str, float]] = None
    additivity: Optional[AdditivityRecord] = None


class AttributionSession:
    """Owns the molecules, scorer, baseline and identity index of one run.

    :meth:`initialize` is the one-time setup step; every method that needs
    the baseline calls it, and repeated calls do nothing.
    """

    def __init__(
        self,
        config: VisualizationConfig,
        structure_source: StructureSource,
        scorer: Scorer,
        fragment_enumerator: Optional[FragmentEnumerator] = None,
        writer: Optional[AnnotatedStructureWriter] = None,
        additivity_log: Optional[AdditivityLogRepository] = None,
    ):
        self.config = config
        self._structure_source = structure_source
        self._scorer = scorer
        self._fragment_enumerator = fragment_enumerator
        self._writer = writer or AnnotatedStructureWriter(config.output_dir)
        if additivity_log is None and config.additivity_path:
            additivity_log = AdditivityLogRepository(config.additivity_path)
        self._additivity_log = additivity_log

        self.receptor: Optional[PreparedMolecule] = None
        self.ligand: Optional[PreparedMolecule] = None
        self.index: Optional[AtomIdentityIndex] = None
        self._baseline: Optional[Baseline] = None

    @property
    def baseline(self) -> Baseline:
        self.initialize()
        return self._baseline

    def initialize(self) -> Baseline:
        """
        Load both molecules, prepare the scorer and score the baseline.

        Returns:
            Baseline of the unperturbed complex

        Raises:
            ConfigurationError: If a configured method needs explanation
                modes the scorer does not provide
            StructureInputError: If either structure cannot be read
        """
        if self._baseline is not None:
            return self._baseline

        explanations = [m for m in self.config.methods if m in EXPLANATION_METHODS]
        if explanations and not self._scorer.supports_explanations():
            raise ConfigurationError(
                f"{type(self._scorer).__name__} cannot run {explanations}; "
                f"only masking is available with this scorer"
            )

        if self.config.verbose:
            for key, value in self.config.to_dict().items():
                logger.debug(f"{key}: {value}")

        self.receptor = self._structure_source.load(
            self.config.receptor_path, MoleculeRole.RECEPTOR
        )
        self.ligand = self._structure_source.load(
            self.config.ligand_path, MoleculeRole.LIGAND
        )

        self._scorer.prepare()
        result = self._scorer.score(self.receptor.pdbqt, self.ligand.pdbqt)
        self._baseline = Baseline(target=self.config.scoring_target, result=result)
        logger.info(f"{self.config.target.upper()} SCORE: {self._baseline.score}")

        self.index = AtomIdentityIndex(self.receptor, self.ligand)
        self.index.build()
        return self._baseline

    def run(self) -> Dict[str, object]:
        """Run every configured method; returns results keyed by method."""
        results = {}
        for method in self.config.methods:
            if method == "masking":
                results[method] = self.run_masking()
            else:
                results[method] = self.run_explanation(self.explanation_strategy(method))
        return results

    def run_masking(self) -> MaskingResult:
        """
        Attribute the score by removing residues, atoms and fragments.

        Returns:
            MaskingResult with every computed map
        """
        baseline = self.initialize()
        logger.info("Doing masking...")

        ablation = AblationService(
            scorer=self._scorer,
            baseline=baseline,
            receptor=self.receptor,
            ligand=self.ligand,
            index=self.index,
            dump_dir=self.config.dump_dir,
            show_progress=not self.config.verbose,
        )
        selector = UnitSelector(self.index, self._fragment_enumerator)
        result = MaskingResult()

        if not self.config.skip_receptor:
            relevance_filter = SpatialRelevanceFilter.around_ligand(
                self.ligand,
                half_width=self.config.box_half_width,
                enabled=self.config.spatial_filter,
            )
            result.receptor = ablation.remove_residues(
                selector.residue_units(self.receptor), relevance_filter
            )
            self._write(self.receptor, result.receptor, "masking")

        if not self.config.skip_ligand:
            if self.config.runs_atoms:
                result.single = ablation.remove_each_atom(
                    selector.atom_units(self.ligand)
                )
            if self.config.runs_fragments:
                result.fragment = ablation.remove_fragments(
                    selector.fragment_units(self.ligand, self.config.fragment_max_size)
                )

            result.ligand = combine_attributions(result.single, result.fragment)
            self._write(self.ligand, result.ligand, "masking")

            if self._additivity_log is not None:
                analyzer = AdditivityAnalyzer(self.index)
                result.additivity = self._additivity_log.create(
                    analyzer.record(
                        self.config.ligand_path,
                        baseline.score,
                        result.single,
                        result.fragment,
                    )
                )

        logger.info("Masking finished.")
        return result

    def explanation_strategy(self, method: str) -> ExplanationStrategy:
        """Build the scorer-delegated strategy for a method name."""
        if method == "gradient":
            return GradientExplanation(self.config.layer_to_ignore)
        if method == "lrp":
            return RelevanceExplanation(
                self.config.layer_to_ignore, self.config.zero_values
            )
        raise ValueError(f"No explanation strategy for method {method!r}")

    def run_explanation(self, strategy: ExplanationStrategy) -> ExplanationResult:
        """
        Run a scorer-provided attribution method and write its maps.

        Args:
            strategy: Gradient or relevance strategy

        Returns:
            Per-atom maps returned by the scorer
        """
        self.initialize()
        logger.info(f"Doing {strategy.name}...")

        result = strategy.explain(self._scorer, self.receptor.pdbqt, self.ligand.pdbqt)

        if strategy.writes_output:
            self._write(self.ligand, result.ligand, strategy.name)
            self._write(self.receptor, result.receptor, strategy.name)

        logger.info(f"{strategy.name} finished.")
        return result

    def _write(
        self, molecule: PreparedMolecule, scores: Dict[str, float], method: str
    ) -> List[str]:
        remarks = header_remarks(
            method=method,
            target=self.config.target,
            baseline_score=self.baseline.score,
            model=self.config.cnn_model,
            weights=self.config.cnn_weights,
            layer_to_ignore=self.config.layer_to_ignore,
        )
        return self._writer.write(molecule, scores, method, remarks)
