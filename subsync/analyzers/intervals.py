"""Interval analyzer — matches the dominant inter-cue gap to frame multiples."""

import logging
from collections import Counter
from typing import Sequence

from subsync.models import COMMON_FRAMERATES, Detection, DetectionMethod, TimingSample

logger = logging.getLogger(__name__)

MIN_SAMPLES = 10
MAX_GAP_MS = 10_000
BUCKET_MS = 100
TOLERANCE_MS = 50
FRAME_MULTIPLES = (1, 2, 3)
CONFIDENCE_CEILING = 0.7


def inter_cue_gaps(samples: Sequence[TimingSample]) -> list[int]:
    """Gaps between each cue's end and the next cue's start, within (0, 10s)."""
    gaps: list[int] = []
    for prev, cur in zip(samples, samples[1:]):
        gap = cur.start_ms - prev.end_ms
        # Overlaps and scene breaks say nothing about frame cadence
        if 0 < gap < MAX_GAP_MS:
            gaps.append(gap)
    return gaps


def dominant_gap_bucket(gaps: Sequence[int]) -> int | None:
    """Most frequent gap after truncating to 100ms buckets.

    Truncation (not rounding) pulls every gap down to its bucket floor, so
    gaps under 100ms all land in bucket 0. Ties go to the first bucket seen.
    """
    if not gaps:
        return None
    counts = Counter((gap // BUCKET_MS) * BUCKET_MS for gap in gaps)
    bucket, _ = counts.most_common(1)[0]
    return bucket


def detect_by_intervals(samples: Sequence[TimingSample]) -> Detection | None:
    if len(samples) < MIN_SAMPLES:
        return None

    bucket = dominant_gap_bucket(inter_cue_gaps(samples))
    if bucket is None:
        return None

    for fps in COMMON_FRAMERATES:
        frame_ms = 1000.0 / fps
        for k in FRAME_MULTIPLES:
            expected = int(frame_ms * k)
            diff = abs(bucket - expected)
            if diff < TOLERANCE_MS:
                confidence = (1.0 - diff / TOLERANCE_MS) * CONFIDENCE_CEILING
                logger.debug(
                    "Gap bucket %dms matches %d frame(s) at %g fps (confidence %.3f)",
                    bucket, k, fps, confidence,
                )
                return Detection(fps, confidence, DetectionMethod.INTERVAL_ANALYSIS)

    logger.debug("Gap bucket %dms matches no frame multiple", bucket)
    return None
