"""Advisory checks on subtitle timing and text. Never blocks a conversion."""

from typing import Sequence

from subsync.srtfile import SubtitleEntry

MIN_DURATION_MS = 100
MAX_DURATION_MS = 10_000


def validate(entries: Sequence[SubtitleEntry]) -> list[str]:
    """Return human-readable warnings, in entry order."""
    warnings: list[str] = []

    for i, entry in enumerate(entries):
        duration = entry.end_ms - entry.start_ms

        if entry.start_ms >= entry.end_ms:
            warnings.append(f"Entry {entry.index}: End time is not after start time")
        if duration < MIN_DURATION_MS:
            warnings.append(f"Entry {entry.index}: Very short duration ({duration}ms)")
        if duration > MAX_DURATION_MS:
            warnings.append(f"Entry {entry.index}: Very long duration ({duration}ms)")

        if not any(line.strip() for line in entry.text):
            warnings.append(f"Entry {entry.index}: Empty subtitle text")

        if i + 1 < len(entries) and entry.end_ms > entries[i + 1].start_ms:
            warnings.append(f"Entry {entry.index}: Overlaps with next subtitle")

    return warnings
