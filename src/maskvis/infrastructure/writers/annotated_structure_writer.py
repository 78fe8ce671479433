# src/maskvis/infrastructure/writers/annotated_structure_writer.py
"""Writer for structures annotated with per-atom attribution values."""

import logging
import os
from typing import Dict, List, Optional, Tuple

from ...core.domain.models.prepared_molecule import PreparedMolecule
from ...core.exceptions import ConsistencyError
from ...core.utils.pdbqt_records import is_atom_record, spatial_key

NARROW_WIDTH = 5
EXTENDED_WIDTH = 7
SCORE_PRECISION = 5

# Columns 62-66 of an atom record hold the displayed value
FIELD_START = 61
FIELD_END = 66


def format_score(score: float, width: int) -> str:
    """Render a value with fixed precision, cut to width and right-aligned.

    Short results are padded on the left with ``.``.
    """
    text = f"{score:.{SCORE_PRECISION}f}"[:width]
    return text.rjust(width, ".")


def header_remarks(
    method: str,
    target: str,
    baseline_score: float,
    model: str = "",
    weights: str = "",
    layer_to_ignore: str = "",
) -> List[str]:
    """REMARK lines describing how an annotated file was produced."""
    remarks = [f"REMARK VIS METHOD: {method}"]
    if method == "masking":
        remarks.append(f"REMARK MASKING TARGET: {target}")
    else:
        remarks.append(f"REMARK LAYER IGNORED: {layer_to_ignore}")
    remarks.append(f"REMARK {target.upper()} SCORE: {baseline_score}")
    remarks.append(f"REMARK MODEL: {model}")
    remarks.append(f"REMARK WEIGHTS: {weights}")
    return remarks


class AnnotatedStructureWriter:
    """Writes a narrow and an extended annotated copy of a structure."""

    def __init__(self, output_dir: str = "."):
        self.output_dir = output_dir
        self.logger = logging.getLogger(__name__)

    def annotate(self, pdbqt: str, scores: Dict[str, float], width: int) -> Tuple[str, int]:
        """
        Replace the value field of every atom record.

        Args:
            pdbqt: Structure text
            scores: Attribution per spatial key; absent atoms are written as 0
            width: Field width

        Returns:
            Annotated text and the number of atoms given a nonzero value

        Raises:
            ConsistencyError: If the number of atoms given a nonzero value
                differs from the number of nonzero entries in ``scores``
        """
        lines = []
        annotated = 0

        for line in pdbqt.splitlines():
            if not is_atom_record(line):
                lines.append(line)
                continue

            score = scores.get(spatial_key(line), 0.0)
            if score != 0.0:
                annotated += 1

            padded = line.ljust(FIELD_END)
            lines.append(
                padded[:FIELD_START] + format_score(score, width) + padded[FIELD_END:]
            )

        expected = sum(1 for value in scores.values() if value != 0.0)
        if annotated != expected:
            raise ConsistencyError(
                f"Annotated {annotated} atoms with nonzero values but the "
                f"attribution map holds {expected}; atom identity mapping is broken"
            )

        return "\n".join(lines) + "\n", annotated

    def write(
        self,
        molecule: PreparedMolecule,
        scores: Dict[str, float],
        method: str,
        remarks: Optional[List[str]] = None,
    ) -> List[str]:
        """
        Write ``<method>_<name>.pdbqt`` and ``<method>_<name>.pdbqt.ext``.

        Both files are built before either is written, so a consistency
        violation leaves no output behind.

        Args:
            molecule: Molecule whose structure is annotated
            scores: Attribution per spatial key
            method: Attribution method name used in the file name
            remarks: Header lines placed before the structure

        Returns:
            Paths of the written files
        """
        narrow, count = self.annotate(molecule.pdbqt, scores, NARROW_WIDTH)
        extended, _ = self.annotate(molecule.pdbqt, scores, EXTENDED_WIDTH)

        header = "".join(f"{remark}\n" for remark in (remarks or []))
        file_name = os.path.join(self.output_dir, f"{method}_{molecule.name}.pdbqt")
        extended_file_name = file_name + ".ext"

        os.makedirs(self.output_dir, exist_ok=True)
        for path, content in ((file_name, narrow), (extended_file_name, extended)):
            with open(path, "w") as f:
                f.write(header)
                f.write(content)

        self.logger.info(
            f"Wrote {method} scores for {count} {molecule.role.value} atoms to {file_name}"
        )
        return [file_name, extended_file_name]
