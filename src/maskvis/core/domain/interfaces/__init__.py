"""Interfaces to external collaborators."""

from .scorer import Scorer
from .structure_source import StructureSource
from .fragment_enumerator import FragmentEnumerator
from .explanation_strategy import ExplanationStrategy

__all__ = [
    "Scorer",
    "StructureSource",
    "FragmentEnumerator",
    "ExplanationStrategy",
]
