"""
Configuration for an attribution run.

Values are validated on construction so an unknown target, removal mode or
method stops the run before anything is scored or written.
"""

import argparse
import json
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .domain.models.scoring import ScoringTarget
from .exceptions import ConfigurationError


class RemovalMode(Enum):
    """Which ligand removal families to run."""

    ATOMS = "atoms"
    FRAGMENTS = "fragments"
    BOTH = "both"


VALID_METHODS = ("masking", "gradient", "lrp")


@dataclass
class VisualizationConfig:
    """
    Parameters of one attribution session.

    Enumerated options are stored as their string values so the
    configuration round-trips through JSON; ``scoring_target`` and
    ``removal`` expose them as enums.
    """

    receptor_path: str = ""
    ligand_path: str = ""

    # Attribution
    target: str = "pose"
    removal_mode: str = "both"
    fragment_max_size: int = 6
    box_half_width: float = 11.75  # Half of a 23.5 A box around the ligand
    spatial_filter: bool = True
    methods: List[str] = field(default_factory=lambda: ["masking"])
    layer_to_ignore: str = ""
    zero_values: bool = False
    skip_receptor: bool = False
    skip_ligand: bool = False

    # Output
    output_dir: str = "."
    additivity_path: Optional[str] = None
    dump_dir: Optional[str] = None

    # Scorer
    gnina_executable: str = "gnina"
    cnn_model: str = ""
    cnn_weights: str = ""
    gpu: int = -1

    verbose: bool = False

    def __post_init__(self):
        """Validate parameters after initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate that all parameters are known and within range."""
        try:
            ScoringTarget(self.target)
        except ValueError:
            raise ConfigurationError(
                f"Unknown scoring target {self.target!r}, expected one of "
                f"{[t.value for t in ScoringTarget]}"
            )

        try:
            RemovalMode(self.removal_mode)
        except ValueError:
            raise ConfigurationError(
                f"Unknown removal mode {self.removal_mode!r}, expected one of "
                f"{[m.value for m in RemovalMode]}"
            )

        unknown = [m for m in self.methods if m not in VALID_METHODS]
        if unknown:
            raise ConfigurationError(
                f"Unknown method(s) {unknown}, expected any of {list(VALID_METHODS)}"
            )
        if not self.methods:
            raise ConfigurationError("At least one method must be selected")

        if isinstance(self.fragment_max_size, bool) or not isinstance(
            self.fragment_max_size, int
        ):
            raise ConfigurationError(
                f"fragment_max_size must be an integer, got {self.fragment_max_size!r}"
            )
        if self.fragment_max_size < 1:
            raise ConfigurationError(
                f"fragment_max_size must be positive, got {self.fragment_max_size}"
            )

        if isinstance(self.box_half_width, bool) or not isinstance(
            self.box_half_width, (int, float)
        ):
            raise ConfigurationError(
                f"box_half_width must be a number, got {self.box_half_width!r}"
            )
        if not self.box_half_width > 0.0:
            raise ConfigurationError(
                f"box_half_width must be positive, got {self.box_half_width}"
            )

        if isinstance(self.gpu, bool) or not isinstance(self.gpu, int):
            raise ConfigurationError(f"gpu must be an integer, got {self.gpu!r}")

    @property
    def scoring_target(self) -> ScoringTarget:
        return ScoringTarget(self.target)

    @property
    def removal(self) -> RemovalMode:
        return RemovalMode(self.removal_mode)

    @property
    def runs_atoms(self) -> bool:
        return self.removal in (RemovalMode.ATOMS, RemovalMode.BOTH)

    @property
    def runs_fragments(self) -> bool:
        return self.removal in (RemovalMode.FRAGMENTS, RemovalMode.BOTH)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save_to_file(self, filename: str) -> None:
        """
        Save the configuration to a JSON file.

        Args:
            filename: Path to save the configuration file
        """
        filepath = Path(filename)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=4)

    @classmethod
    def load_from_file(cls, filename: str) -> "VisualizationConfig":
        """
        Load configuration from a JSON file.

        Args:
            filename: Path to the configuration file

        Returns:
            VisualizationConfig: Loaded configuration object

        Raises:
            FileNotFoundError: If the configuration file doesn't exist
            ConfigurationError: If the file is not valid JSON or names
                unknown options
        """
        filepath = Path(filename)
        if not filepath.exists():
            raise FileNotFoundError(f"Configuration file not found: {filename}")

        try:
            with open(filepath, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file: {e}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")

        return cls(**data)

    @classmethod
    def from_args(
        cls, args: argparse.Namespace, base: Optional["VisualizationConfig"] = None
    ) -> "VisualizationConfig":
        """Build a configuration from parsed command-line arguments.

        Arguments left at None keep the value from ``base`` (or the default).
        """
        values = base.to_dict() if base is not None else {}
        for f in fields(cls):
            value = getattr(args, f.name, None)
            if value is not None:
                values[f.name] = value
        return cls(**values)
