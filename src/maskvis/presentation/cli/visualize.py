"""Command-line interface for per-atom attribution of a receptor-ligand score."""

import argparse
import logging
import sys
from typing import List, Optional

from ...core.config import VisualizationConfig
from ...core.domain.implementations.rdkit_fragment_enumerator import (
    RDKitFragmentEnumerator,
)
from ...core.exceptions import (
    AttributionMismatchError,
    ConfigurationError,
    ConsistencyError,
    ScorerError,
    StructureInputError,
)
from ...core.services.attribution_session import AttributionSession

logger = logging.getLogger(__name__)

# Handlers installed by setup_logging, replaced on the next call
_installed_handlers: List[logging.Handler] = []


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure root logging for a command-line run, replacing earlier handlers."""
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed_handlers.append(handler)


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser.

    Options that are not given stay None so values from ``--config`` are
    only overridden by flags the user actually passed.
    """
    parser = argparse.ArgumentParser(
        description="Attribute a receptor-ligand score to individual atoms"
    )
    parser.add_argument("-r", "--receptor", dest="receptor_path", help="Receptor structure")
    parser.add_argument("-l", "--ligand", dest="ligand_path", help="Ligand structure")
    parser.add_argument("--config", help="JSON configuration file")

    masking = parser.add_argument_group("masking")
    masking.add_argument(
        "--target",
        choices=["pose", "affinity"],
        default=None,
        help="Score output attributed by masking (default: pose)",
    )
    removal = masking.add_mutually_exclusive_group()
    removal.add_argument(
        "--atoms-only",
        dest="removal_mode",
        action="store_const",
        const="atoms",
        default=None,
        help="Only remove individual ligand atoms",
    )
    removal.add_argument(
        "--frags-only",
        dest="removal_mode",
        action="store_const",
        const="fragments",
        default=None,
        help="Only remove ligand fragments",
    )
    masking.add_argument(
        "--frag-size",
        dest="fragment_max_size",
        type=int,
        default=None,
        help="Maximum fragment size in bonds (default: 6)",
    )
    masking.add_argument(
        "--box-half-width",
        type=float,
        default=None,
        help="Half-width in Angstrom of the box around the ligand (default: 11.75)",
    )
    masking.add_argument(
        "--skip-bound-check",
        dest="spatial_filter",
        action="store_false",
        default=None,
        help="Score every receptor residue, not just those near the ligand",
    )
    masking.add_argument(
        "--additivity",
        dest="additivity_path",
        default=None,
        help="Append heavy-atom attribution totals to this file",
    )

    methods = parser.add_argument_group("methods")
    for flag in ("masking", "gradient", "lrp"):
        methods.add_argument(
            f"--{flag}",
            dest="methods",
            action="append_const",
            const=flag,
            default=None,
            help=f"Run {flag} attribution",
        )
    methods.add_argument(
        "--layer-to-ignore",
        default=None,
        help="Network layer excluded by gradient and lrp",
    )
    methods.add_argument(
        "--zero-values",
        action="store_true",
        default=None,
        help="Run lrp with zeroed values; no files are written",
    )

    output = parser.add_argument_group("output")
    output.add_argument("--output-dir", default=None, help="Directory for annotated files")
    output.add_argument(
        "--dump-dir",
        default=None,
        help="Directory receiving every perturbed structure",
    )
    output.add_argument(
        "--skip-receptor-output",
        dest="skip_receptor",
        action="store_true",
        default=None,
        help="Do not attribute or write the receptor",
    )
    output.add_argument(
        "--skip-ligand-output",
        dest="skip_ligand",
        action="store_true",
        default=None,
        help="Do not attribute or write the ligand",
    )

    scorer = parser.add_argument_group("scorer")
    scorer.add_argument("--gnina", dest="gnina_executable", default=None, help="gnina executable")
    scorer.add_argument("--cnn-model", default=None, help="CNN model file")
    scorer.add_argument("--cnn-weights", default=None, help="CNN weights file")
    scorer.add_argument(
        "--gpu", type=int, default=None, help="GPU device index, -1 for CPU"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", default=None, help="Enable debug logging"
    )
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser


def build_config(args: argparse.Namespace) -> VisualizationConfig:
    """Merge a JSON configuration file, if given, with command-line flags."""
    base = None
    if args.config:
        try:
            base = VisualizationConfig.load_from_file(args.config)
        except FileNotFoundError as e:
            raise ConfigurationError(str(e))

    config = VisualizationConfig.from_args(args, base)
    if not config.receptor_path or not config.ligand_path:
        raise ConfigurationError("Both a receptor and a ligand are required")
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the attribution CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)
    setup_logging(bool(args.verbose), args.log_file)

    try:
        config = build_config(args)

        from ...infrastructure.adapters.gnina_adapter import GninaScorer
        from ...infrastructure.adapters.openbabel_adapter import OpenBabelStructureSource

        session = AttributionSession(
            config=config,
            structure_source=OpenBabelStructureSource(),
            scorer=GninaScorer(
                executable=config.gnina_executable,
                cnn_model=config.cnn_model,
                cnn_weights=config.cnn_weights,
                gpu=config.gpu,
            ),
            fragment_enumerator=RDKitFragmentEnumerator(),
        )
        session.run()
    except (
        ConfigurationError,
        StructureInputError,
        ScorerError,
        AttributionMismatchError,
        ConsistencyError,
    ) as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
