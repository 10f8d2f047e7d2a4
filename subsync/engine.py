"""Orchestrator — runs analysis and conversion for a subtitle file."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from subsync.detector import detect, statistics
from subsync.editors.rescale import convert_framerate, output_filename
from subsync.manifest import DetectionConfig, Manifest
from subsync.models import Detection, EnsembleResult
from subsync.srtfile import SubtitleFile
from subsync.timecode import same_framerate
from subsync.validate import validate

logger = logging.getLogger(__name__)


class LowConfidenceError(RuntimeError):
    """Raised when auto-detection is too unsure to convert without --force."""

    def __init__(self, detection: Detection, min_confidence: float):
        self.detection = detection
        self.min_confidence = min_confidence
        super().__init__(
            f"Low confidence framerate detection ({detection.confidence:.1%} confidence "
            f"for {detection.framerate:g} fps). Use --force to proceed anyway, "
            f"or specify --from-fps manually."
        )


@dataclass
class AnalysisReport:
    input_path: Path
    entry_count: int
    first_start_ms: int
    last_end_ms: int
    detection: EnsembleResult
    low_confidence: bool = False
    warnings: list[str] = field(default_factory=list)
    statistics: dict[str, float] = field(default_factory=dict)

    @property
    def duration_minutes(self) -> float:
        return (self.last_end_ms - self.first_start_ms) / 60_000


@dataclass
class ConvertResult:
    input_path: Path
    source_fps: float
    target_fps: float
    output_path: Path | None = None
    detection: Detection | None = None
    converted: bool = False
    warnings: list[str] = field(default_factory=list)
    post_warnings: list[str] = field(default_factory=list)


def analyze(input_path: Path, config: DetectionConfig | None = None) -> AnalysisReport:
    """Parse a subtitle file and report its detected frame rate and health."""
    config = config or DetectionConfig()
    subs = SubtitleFile.from_file(input_path)
    samples = subs.timing_samples()
    result = detect(samples)

    return AnalysisReport(
        input_path=input_path,
        entry_count=len(subs.entries),
        first_start_ms=subs.entries[0].start_ms,
        last_end_ms=subs.entries[-1].end_ms,
        detection=result,
        low_confidence=result.best.confidence < config.warn_below,
        warnings=validate(subs.entries),
        statistics=statistics(samples),
    )


def convert(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> ConvertResult:
    """Convert a subtitle file between frame rates.

    Args:
        manifest: Conversion manifest.
        on_progress: Optional callback(stage_name, fraction_complete).

    Raises:
        ValueError: a target or given source rate is not positive.
        LowConfidenceError: the source rate was auto-detected below
            ``manifest.detection.min_confidence`` and ``force`` is off.
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    if manifest.to_fps <= 0:
        raise ValueError(f"Target framerate must be positive, got {manifest.to_fps:g}")
    if manifest.from_fps is not None and manifest.from_fps <= 0:
        raise ValueError(f"Source framerate must be positive, got {manifest.from_fps:g}")

    _progress("Loading subtitles", 0.0)
    subs = SubtitleFile.from_file(manifest.input)
    warnings = validate(subs.entries)
    for w in warnings:
        logger.info("Validation: %s", w)

    detection = None
    if manifest.from_fps is not None:
        source_fps = manifest.from_fps
        logger.info("Using specified source framerate: %g fps", source_fps)
    else:
        _progress("Detecting source framerate", 0.2)
        detection = detect(subs.timing_samples()).best
        if detection.confidence < manifest.detection.min_confidence and not manifest.force:
            raise LowConfidenceError(detection, manifest.detection.min_confidence)
        logger.info(
            "Detected framerate: %g fps (confidence: %.1f%%, method: %s)",
            detection.framerate, detection.confidence * 100, detection.method.value,
        )
        source_fps = detection.framerate

    result = ConvertResult(
        input_path=manifest.input,
        source_fps=source_fps,
        target_fps=manifest.to_fps,
        detection=detection,
        warnings=warnings,
    )

    if same_framerate(source_fps, manifest.to_fps):
        logger.info("Source and target framerates are the same; nothing to convert")
        _progress("Done", 1.0)
        return result

    _progress(f"Converting {source_fps:g} fps to {manifest.to_fps:g} fps", 0.5)
    convert_framerate(subs, source_fps, manifest.to_fps)

    _progress("Writing output", 0.8)
    output = manifest.output or output_filename(manifest.input, source_fps, manifest.to_fps)
    result.output_path = subs.save(output)
    result.converted = True
    result.post_warnings = validate(subs.entries)

    _progress("Done", 1.0)
    return result
