"""Core attribution services."""

from .unit_selector import UnitSelector
from .relevance_filter import SpatialRelevanceFilter
from .perturbation_builder import Perturbation, PerturbationBuilder
from .ablation_service import AblationService, distribute_delta
from .additivity_analyzer import AdditivityAnalyzer, combine_attributions
from .attribution_session import AttributionSession, MaskingResult

__all__ = [
    "UnitSelector",
    "SpatialRelevanceFilter",
    "Perturbation",
    "PerturbationBuilder",
    "AblationService",
    "distribute_delta",
    "AdditivityAnalyzer",
    "combine_attributions",
    "AttributionSession",
    "MaskingResult",
]
