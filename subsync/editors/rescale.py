"""Rescale editor — moves every cue of a subtitle file to a new frame rate."""

from pathlib import Path

from subsync.srtfile import SubtitleFile
from subsync.timecode import rescale_ms


def convert_framerate(subs: SubtitleFile, from_fps: float, to_fps: float) -> SubtitleFile:
    """Rescale start and end of every entry in place.

    Callers should skip this when the rates are equal (see
    ``timecode.same_framerate``) to avoid rounding noise.
    """
    for entry in subs.entries:
        entry.start_ms = rescale_ms(entry.start_ms, from_fps, to_fps)
        entry.end_ms = rescale_ms(entry.end_ms, from_fps, to_fps)
    return subs


def output_filename(input_path: Path, from_fps: float, to_fps: float) -> Path:
    """Default output path, e.g. ``movie_24fps_to_29.97fps.srt``."""
    return input_path.with_name(f"{input_path.stem}_{from_fps:g}fps_to_{to_fps:g}fps.srt")
