"""Shared data types used across SubSync."""

from dataclasses import dataclass, field
from enum import Enum

# Reference frame rates every detection method tests against, in order.
COMMON_FRAMERATES: tuple[float, ...] = (
    23.976, 24.0, 25.0, 29.97, 30.0, 50.0, 59.94, 60.0,
)


class DetectionMethod(str, Enum):
    INTERVAL_ANALYSIS = "interval_analysis"
    DURATION_PATTERN = "duration_pattern"
    COMMON_FRAMERATE_HEURISTIC = "common_framerate_heuristic"
    DEFAULT = "default"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class TimingSample:
    """A cue's start/end pair in integer milliseconds."""

    start_ms: int
    end_ms: int

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms


@dataclass(frozen=True)
class Detection:
    """One frame rate proposal with a heuristic confidence in [0, 1]."""

    framerate: float
    confidence: float
    method: DetectionMethod


@dataclass(frozen=True)
class EnsembleResult:
    """The selected detection plus every proposal the methods produced."""

    best: Detection
    proposals: list[Detection] = field(default_factory=list)
