#!/usr/bin/env python3
# src/maskvis/core/domain/models/attribution.py

"""
Per-atom accumulation of score deltas and the additivity summary record.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List


class AttributionAccumulator:
    """Running per-atom contributions and coverage counts for one pass.

    Every atom of the perturbed molecule starts at zero. Contributions are
    kept individually and summed with ``math.fsum`` on finalization, so the
    result does not depend on the order units were scored in.
    """

    def __init__(self, keys: Iterable[str]):
        self._contributions: Dict[str, List[float]] = {key: [] for key in keys}

    def __contains__(self, key: str) -> bool:
        return key in self._contributions

    def __len__(self) -> int:
        return len(self._contributions)

    def add(self, key: str, value: float) -> bool:
        """Add one contribution to an atom.

        Returns:
            False if the atom is not tracked by this accumulator
        """
        if key not in self._contributions:
            return False
        self._contributions[key].append(value)
        return True

    def count(self, key: str) -> int:
        return len(self._contributions.get(key, ()))

    def finalize(self) -> Dict[str, float]:
        """Mean contribution per atom; 0.0 for atoms never covered."""
        return {
            key: (math.fsum(values) / len(values) if values else 0.0)
            for key, values in self._contributions.items()
        }


@dataclass(frozen=True)
class AdditivityRecord:
    """One line of the additivity log."""

    source_path: str
    baseline_score: float
    single_total: float
    fragment_total: float

    def to_line(self) -> str:
        return (
            f"{self.source_path} {self.baseline_score:g} "
            f"{self.single_total:g} {self.fragment_total:g}\n"
        )

    @classmethod
    def from_line(cls, line: str) -> "AdditivityRecord":
        """Parse a log line written by :meth:`to_line`.

        Raises:
            ValueError: If the line does not hold four fields
        """
        path, baseline, single, fragment = line.rsplit(None, 3)
        return cls(path, float(baseline), float(single), float(fragment))
