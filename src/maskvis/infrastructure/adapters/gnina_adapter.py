"""Adapter scoring complexes with the gnina command-line program."""

import logging
import os
import re
import shutil
import subprocess
import tempfile
from typing import List, Optional

from ...core.domain.interfaces.scorer import Scorer
from ...core.domain.models.scoring import ExplanationResult, ScoreResult
from ...core.exceptions import ScorerError

CNN_SCORE_PATTERN = re.compile(r"^CNNscore:\s*(\S+)", re.MULTILINE)
CNN_AFFINITY_PATTERN = re.compile(r"^CNNaffinity:\s*(\S+)", re.MULTILINE)


def parse_score_output(output: str) -> ScoreResult:
    """
    Extract CNN pose score and affinity from gnina ``--score_only`` output.

    Raises:
        ScorerError: If either value is missing or not a number
    """
    pose = CNN_SCORE_PATTERN.search(output)
    affinity = CNN_AFFINITY_PATTERN.search(output)
    if pose is None or affinity is None:
        raise ScorerError(f"No CNN score in gnina output:\n{output}")
    try:
        return ScoreResult(pose=float(pose.group(1)), affinity=float(affinity.group(1)))
    except ValueError:
        raise ScorerError(f"Unreadable CNN score in gnina output:\n{output}")


class GninaScorer(Scorer):
    """Scores each complex with one blocking ``gnina --score_only`` call."""

    def __init__(
        self,
        executable: str = "gnina",
        cnn_model: str = "",
        cnn_weights: str = "",
        gpu: int = -1,
    ):
        """
        Initialize the scorer.

        Args:
            executable: gnina program name or path
            cnn_model: Model file; gnina's built-in default when empty
            cnn_weights: Weights file for ``cnn_model``
            gpu: Device index, or -1 to score on the CPU
        """
        self.executable = executable
        self.cnn_model = cnn_model
        self.cnn_weights = cnn_weights
        self.gpu = gpu
        self._command: Optional[str] = None
        self.logger = logging.getLogger(__name__)

    def prepare(self) -> None:
        """Locate the gnina executable.

        Raises:
            ScorerError: If gnina cannot be found
        """
        if self._command is not None:
            return
        command = shutil.which(self.executable)
        if command is None:
            raise ScorerError(f"gnina executable {self.executable!r} not found")
        self._command = command
        self.logger.info(f"Found gnina at: {command}")

    def supports_explanations(self) -> bool:
        return False

    def _build_command(self, receptor_path: str, ligand_path: str) -> List[str]:
        command = [
            self._command,
            "--receptor", receptor_path,
            "--ligand", ligand_path,
            "--score_only",
            "--cnn_scoring", "rescore",
        ]
        if self.cnn_model:
            command += ["--cnn_model", self.cnn_model]
        if self.cnn_weights:
            command += ["--cnn_weights", self.cnn_weights]
        if self.gpu >= 0:
            command += ["--device", str(self.gpu)]
        else:
            command.append("--no_gpu")
        return command

    def score(self, receptor: str, ligand: str) -> ScoreResult:
        if self._command is None:
            raise ScorerError("GninaScorer.prepare() must be called before scoring")

        with tempfile.TemporaryDirectory(prefix="maskvis_") as tmp_dir:
            receptor_path = os.path.join(tmp_dir, "receptor.pdbqt")
            ligand_path = os.path.join(tmp_dir, "ligand.pdbqt")
            with open(receptor_path, "w") as f:
                f.write(receptor)
            with open(ligand_path, "w") as f:
                f.write(ligand)

            result = subprocess.run(
                self._build_command(receptor_path, ligand_path),
                capture_output=True,
                text=True,
            )

        if result.returncode != 0:
            raise ScorerError(f"gnina failed ({result.returncode}): {result.stderr}")

        return parse_score_output(result.stdout)

    def gradient(
        self, receptor: str, ligand: str, layer_to_ignore: str = ""
    ) -> ExplanationResult:
        raise ScorerError(
            "gnina --score_only does not report per-atom gradients; "
            "use a scorer with in-process model access"
        )

    def relevance(
        self,
        receptor: str,
        ligand: str,
        layer_to_ignore: str = "",
        zero_values: bool = False,
    ) -> ExplanationResult:
        raise ScorerError(
            "gnina --score_only does not report relevance propagation; "
            "use a scorer with in-process model access"
        )
