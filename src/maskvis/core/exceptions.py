"""Exceptions raised by the attribution engine."""


class StructureInputError(ValueError):
    """A receptor or ligand file could not be read or parsed."""


class ConfigurationError(ValueError):
    """A configuration value is unknown or out of range."""


class AttributionMismatchError(ValueError):
    """Two attribution maps cover different sets of atoms."""


class ConsistencyError(RuntimeError):
    """Annotated output does not match the attribution map it was built from.

    Signals a broken atom identity mapping; output is not written.
    """


class ScorerError(RuntimeError):
    """The external scorer is unavailable or returned unusable output."""
