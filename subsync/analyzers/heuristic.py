"""Fallback analyzer — a weak NTSC/PAL guess from subtitle density."""

from typing import Sequence

from subsync.models import Detection, DetectionMethod, TimingSample

MIN_SAMPLES = 5
LONG_FORM_MS = 3_600_000
LONG_FORM_BONUS = 0.1
BASE_CONFIDENCE = 0.5
NTSC_DENSITY = 10.0
NTSC_FPS = 29.97
PAL_FPS = 25.0


def total_span_ms(samples: Sequence[TimingSample]) -> int:
    return samples[-1].end_ms - samples[0].start_ms


def cues_per_minute(samples: Sequence[TimingSample]) -> float:
    """Subtitle density; a zero-length span counts as infinitely dense."""
    span = total_span_ms(samples)
    if span == 0:
        return float("inf")
    return len(samples) / (span / 60_000)


def detect_by_common_framerates(samples: Sequence[TimingSample]) -> Detection | None:
    if len(samples) < MIN_SAMPLES:
        return None

    bonus = LONG_FORM_BONUS if total_span_ms(samples) > LONG_FORM_MS else 0.0
    fps = NTSC_FPS if cues_per_minute(samples) > NTSC_DENSITY else PAL_FPS
    return Detection(fps, BASE_CONFIDENCE + bonus, DetectionMethod.COMMON_FRAMERATE_HEURISTIC)
