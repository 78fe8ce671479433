"""Core domain models, interfaces and services for masking attribution."""

from .config import RemovalMode, VisualizationConfig
from .services import AttributionSession, MaskingResult

__all__ = [
    "RemovalMode",
    "VisualizationConfig",
    "AttributionSession",
    "MaskingResult",
]
