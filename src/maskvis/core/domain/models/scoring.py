#!/usr/bin/env python3
# src/maskvis/core/domain/models/scoring.py

"""
Score values returned by the external scorer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class ScoringTarget(Enum):
    """Which scorer output is attributed."""

    POSE = "pose"
    AFFINITY = "affinity"


@dataclass(frozen=True)
class ScoreResult:
    """Pose confidence and predicted affinity for one complex."""

    pose: float
    affinity: float = 0.0

    def value(self, target: ScoringTarget) -> float:
        if target is ScoringTarget.AFFINITY:
            return self.affinity
        return self.pose


@dataclass(frozen=True)
class Baseline:
    """Score of the unperturbed complex under the session target."""

    target: ScoringTarget
    result: ScoreResult

    @property
    def score(self) -> float:
        return self.result.value(self.target)


@dataclass
class ExplanationResult:
    """Per-atom maps from a scorer explanation mode, keyed by spatial key."""

    ligand: Dict[str, float] = field(default_factory=dict)
    receptor: Dict[str, float] = field(default_factory=dict)
