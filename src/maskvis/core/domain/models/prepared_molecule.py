#!/usr/bin/env python3
# src/maskvis/core/domain/models/prepared_molecule.py

"""
A hydrogenated molecule together with its scorer-ready serialization.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .molecular_graph import MolecularGraph


class MoleculeRole(Enum):
    """Which partner of the complex a molecule is."""

    RECEPTOR = "receptor"
    LIGAND = "ligand"


@dataclass
class PreparedMolecule:
    """Represents one partner of the complex after preparation.

    ``pdbqt`` is the text handed to the scorer; ``graph`` is the library's
    view of the same atoms, used for connectivity and element lookups.
    """

    role: MoleculeRole
    source_path: str
    pdbqt: str
    graph: MolecularGraph

    @property
    def name(self) -> str:
        return Path(self.source_path).stem
