"""Adapter reading and preparing structures with Open Babel."""

import logging
import os
from typing import List

from openbabel import openbabel as ob

from ...core.domain.interfaces.structure_source import StructureSource
from ...core.domain.models.atom import Atom
from ...core.domain.models.bond import Bond
from ...core.domain.models.molecular_graph import MolecularGraph
from ...core.domain.models.prepared_molecule import MoleculeRole, PreparedMolecule
from ...core.exceptions import StructureInputError
from ...core.utils.pdbqt_records import ENDROOT_MARKER, ROOT_MARKER, TORSDOF_MARKER

LIGAND_PH = 7.4

# rigid molecule, combine rotatable portions, keep atom indices
PDBQT_OPTIONS = ("r", "c", "p")


class OpenBabelStructureSource(StructureSource):
    """Reads any format Open Babel knows and serializes it as rigid PDBQT."""

    def __init__(self, ph: float = LIGAND_PH):
        """
        Initialize the source.

        Args:
            ph: pH used when adding polar hydrogens to ligands
        """
        self.ph = ph
        self.logger = logging.getLogger(__name__)

    def load(self, path: str, role: MoleculeRole) -> PreparedMolecule:
        mol = self._read(path)

        if role is MoleculeRole.RECEPTOR:
            mol.AddHydrogens()
        else:
            mol.AddHydrogens(True, False, self.ph)  # polar hydrogens only

        pdbqt = self._to_pdbqt(mol, role)
        graph = self._to_graph(mol)
        self.logger.info(
            f"Prepared {role.value} {os.path.basename(path)}: {mol.NumAtoms()} atoms"
        )
        return PreparedMolecule(role=role, source_path=path, pdbqt=pdbqt, graph=graph)

    def _read(self, path: str) -> "ob.OBMol":
        """Read the first molecule of a structure file."""
        if not os.path.isfile(path):
            raise StructureInputError(f"Could not open {path!r} for reading")

        conv = ob.OBConversion()
        in_format = conv.FormatFromExt(path)
        if in_format is None:
            raise StructureInputError(f"Unrecognized structure format: {path!r}")
        conv.SetInFormat(in_format)

        mol = ob.OBMol()
        if not conv.ReadFile(mol, path) or mol.NumAtoms() == 0:
            raise StructureInputError(f"Could not parse a structure from {path!r}")
        return mol

    def _to_pdbqt(self, mol: "ob.OBMol", role: MoleculeRole) -> str:
        conv = ob.OBConversion()
        conv.SetOutFormat("pdbqt")
        for option in PDBQT_OPTIONS:
            conv.AddOption(option, ob.OBConversion.OUTOPTIONS)

        text = conv.WriteString(mol)
        if not text:
            raise StructureInputError(f"Open Babel wrote an empty {role.value} PDBQT")
        return self._ensure_rigid_markers(text, always=role is MoleculeRole.RECEPTOR)

    @staticmethod
    def _ensure_rigid_markers(text: str, always: bool = False) -> str:
        """Add the ROOT/ENDROOT/TORSDOF markers the scorer expects.

        Receptors are always wrapped; ligands only get missing markers.
        """
        lines: List[str] = []
        if always or ROOT_MARKER not in text:
            lines.append(ROOT_MARKER)
        lines.append(text.rstrip("\n"))
        if always or ENDROOT_MARKER not in text:
            lines.append(ENDROOT_MARKER)
        if always or "TORSDOF" not in text:
            lines.append(TORSDOF_MARKER)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _to_graph(mol: "ob.OBMol") -> MolecularGraph:
        atoms = [
            Atom(
                index=atom.GetIdx(),
                element=ob.GetSymbol(atom.GetAtomicNum()),
                atomic_number=atom.GetAtomicNum(),
                coordinates=(atom.GetX(), atom.GetY(), atom.GetZ()),
            )
            for atom in ob.OBMolAtomIter(mol)
        ]
        bonds = [
            Bond(bond.GetBeginAtomIdx(), bond.GetEndAtomIdx())
            for bond in ob.OBMolBondIter(mol)
        ]
        return MolecularGraph(atoms, bonds)
