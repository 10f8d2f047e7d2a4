"""SubRip (.srt) reading and writing."""

import re
from dataclasses import dataclass, field
from pathlib import Path

from subsync.models import TimingSample
from subsync.timecode import SubtitleParseError, format_timestamp, parse_timestamp

TIMING_LINE_RE = re.compile(
    r"^(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})$"
)


@dataclass
class SubtitleEntry:
    """One cue: its index, start/end in milliseconds and its text lines."""

    index: int
    start_ms: int
    end_ms: int
    text: list[str] = field(default_factory=list)

    @property
    def timing(self) -> TimingSample:
        return TimingSample(start_ms=self.start_ms, end_ms=self.end_ms)


def _parse_block(block: str) -> SubtitleEntry | None:
    lines = block.split("\n")
    if len(lines) < 3:
        return None

    try:
        index = int(lines[0].strip())
    except ValueError:
        raise SubtitleParseError(f"Invalid subtitle index: {lines[0]}") from None

    m = TIMING_LINE_RE.match(lines[1].strip())
    if m is None:
        raise SubtitleParseError(f"Invalid timing format: {lines[1]}")

    return SubtitleEntry(
        index=index,
        start_ms=parse_timestamp(m.group(1)),
        end_ms=parse_timestamp(m.group(2)),
        text=lines[2:],
    )


@dataclass
class SubtitleFile:
    entries: list[SubtitleEntry]

    @classmethod
    def from_content(cls, content: str) -> "SubtitleFile":
        """Parse SRT text.

        Blocks with fewer than three lines (index, timing, text) are skipped;
        a malformed index or timing line raises SubtitleParseError.
        """
        content = content.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")

        entries: list[SubtitleEntry] = []
        for block in re.split(r"\n\s*\n", content):
            block = block.strip()
            if not block:
                continue
            entry = _parse_block(block)
            if entry is not None:
                entries.append(entry)

        if not entries:
            raise SubtitleParseError("No valid subtitle entries found")
        return cls(entries=entries)

    @classmethod
    def from_file(cls, path: str | Path) -> "SubtitleFile":
        return cls.from_content(Path(path).read_text(encoding="utf-8-sig"))

    def to_string(self) -> str:
        blocks: list[str] = []
        for entry in self.entries:
            lines = [
                str(entry.index),
                f"{format_timestamp(entry.start_ms)} --> {format_timestamp(entry.end_ms)}",
                *entry.text,
            ]
            blocks.append("".join(line + "\n" for line in lines))
        return "\n".join(blocks)

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.write_text(self.to_string(), encoding="utf-8")
        return path

    def timing_samples(self) -> list[TimingSample]:
        return [entry.timing for entry in self.entries]
