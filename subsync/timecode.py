"""SRT timestamp parsing, formatting and frame rate rescaling."""

import math
import re

TIMESTAMP_RE = re.compile(r"^(\d{2}):(\d{2}):(\d{2}),(\d{3})$")
MAX_TIMESTAMP_MS = 100 * 3_600_000

# Rates closer than this are treated as identical.
FRAMERATE_TOLERANCE = 0.001


class SubtitleParseError(ValueError):
    """Raised when subtitle text cannot be parsed."""
    pass


def parse_timestamp(text: str) -> int:
    """Convert ``HH:MM:SS,mmm`` to milliseconds."""
    m = TIMESTAMP_RE.match(text.strip())
    if m is None:
        raise SubtitleParseError(f"Invalid timestamp format: {text}")
    h, mi, s, ms = (int(g) for g in m.groups())
    return h * 3_600_000 + mi * 60_000 + s * 1000 + ms


def format_timestamp(ms: int) -> str:
    """Render milliseconds as ``HH:MM:SS,mmm``.

    Hours are limited to two digits, the same as ``parse_timestamp`` reads.
    """
    if ms < 0:
        raise ValueError(f"Cannot format negative timestamp: {ms}ms")
    if ms >= MAX_TIMESTAMP_MS:
        raise ValueError(f"Timestamp exceeds 99:59:59,999: {ms}ms")
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, millis = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d},{millis:03d}"


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def same_framerate(a: float, b: float) -> bool:
    return abs(a - b) < FRAMERATE_TOLERANCE


def rescale_ms(ms: int, from_fps: float, to_fps: float) -> int:
    """Remap a timestamp authored at *from_fps* onto *to_fps*.

    Each timestamp is rounded on its own, so the gap between two rescaled
    cues can drift by up to 1ms from the exact value.
    """
    ratio = from_fps / to_fps
    return _round_half_away(ms * ratio)


def convert_timestamp(text: str, from_fps: float, to_fps: float) -> str:
    return format_timestamp(rescale_ms(parse_timestamp(text), from_fps, to_fps))
