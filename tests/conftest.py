"""Shared test fixtures."""

from pathlib import Path
from typing import Callable, Sequence

import pytest

from subsync.models import TimingSample
from subsync.timecode import format_timestamp

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Each duration is a whole number of frames at 24 fps (111, 123, 135, 147)
# and lands at least 0.1 frames away from a whole frame at every other rate.
FILM_24_DURATIONS = (4625, 5125, 5625, 6125)


def make_samples(durations: Sequence[int], gap: int = 500, start: int = 1000) -> list[TimingSample]:
    """Lay cues end to start, ``gap`` ms apart."""
    samples: list[TimingSample] = []
    cursor = start
    for d in durations:
        samples.append(TimingSample(start_ms=cursor, end_ms=cursor + d))
        cursor += d + gap
    return samples


def render_srt(samples: Sequence[TimingSample]) -> str:
    blocks = []
    for i, s in enumerate(samples, 1):
        blocks.append(
            f"{i}\n{format_timestamp(s.start_ms)} --> {format_timestamp(s.end_ms)}\nLine {i}\n"
        )
    return "\n".join(blocks)


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def sample_srt_path() -> Path:
    return FIXTURES_DIR / "sample.srt"


@pytest.fixture
def film_samples() -> list[TimingSample]:
    return make_samples(FILM_24_DURATIONS * 5)


@pytest.fixture
def write_srt(tmp_path: Path) -> Callable[[Sequence[TimingSample], str], Path]:
    def _write(samples: Sequence[TimingSample], name: str = "input.srt") -> Path:
        path = tmp_path / name
        path.write_text(render_srt(samples), encoding="utf-8")
        return path
    return _write
