"""Ensemble selector — runs every analyzer and keeps the most confident guess."""

import logging
from typing import Callable, Sequence

from subsync.analyzers.durations import detect_by_duration_patterns
from subsync.analyzers.heuristic import (
    cues_per_minute,
    detect_by_common_framerates,
    total_span_ms,
)
from subsync.analyzers.intervals import detect_by_intervals
from subsync.models import Detection, DetectionMethod, EnsembleResult, TimingSample

logger = logging.getLogger(__name__)

DEFAULT_DETECTION = Detection(29.97, 0.0, DetectionMethod.DEFAULT)
FALLBACK_DETECTION = Detection(29.97, 0.1, DetectionMethod.FALLBACK)

Analyzer = Callable[[Sequence[TimingSample]], Detection | None]

# Collection order doubles as the tie-break order.
ANALYZERS: tuple[Analyzer, ...] = (
    detect_by_intervals,
    detect_by_duration_patterns,
    detect_by_common_framerates,
)


def detect(samples: Sequence[TimingSample]) -> EnsembleResult:
    """Run all eligible analyzers and select the highest-confidence proposal.

    Never raises: an empty track yields the fixed default, and a track no
    analyzer has an opinion on yields the fixed fallback.
    """
    if not samples:
        return EnsembleResult(best=DEFAULT_DETECTION)

    proposals: list[Detection] = []
    for analyzer in ANALYZERS:
        detection = analyzer(samples)
        if detection is not None:
            logger.debug(
                "%s proposes %g fps (confidence %.3f)",
                detection.method.value, detection.framerate, detection.confidence,
            )
            proposals.append(detection)

    if not proposals:
        return EnsembleResult(best=FALLBACK_DETECTION)

    # max() keeps the first of equal confidences
    best = max(proposals, key=lambda d: d.confidence)
    return EnsembleResult(best=best, proposals=proposals)


def detect_framerate(samples: Sequence[TimingSample]) -> Detection:
    return detect(samples).best


def statistics(samples: Sequence[TimingSample]) -> dict[str, float]:
    """Summary figures about a timing track, empty for an empty track.

    Density is left out when the track spans no time at all.
    """
    if not samples:
        return {}
    stats = {
        "subtitle_count": float(len(samples)),
        "average_duration_ms": sum(s.duration_ms for s in samples) / len(samples),
        "total_span_ms": float(total_span_ms(samples)),
    }
    if stats["total_span_ms"] != 0:
        stats["density_per_minute"] = cues_per_minute(samples)
    return stats
