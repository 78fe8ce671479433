"""Perturbation-based per-atom attribution for receptor-ligand scoring."""

__version__ = "0.1.0"
