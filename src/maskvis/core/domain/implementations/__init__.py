"""Implementations of core interfaces that need no external process."""

from .rdkit_fragment_enumerator import RDKitFragmentEnumerator
from .explanation_strategies import GradientExplanation, RelevanceExplanation

__all__ = [
    "RDKitFragmentEnumerator",
    "GradientExplanation",
    "RelevanceExplanation",
]
