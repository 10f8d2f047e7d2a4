"""JSON manifest schema — the contract between CLI/API and engine."""

import json
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class DetectionConfig:
    """Confidence thresholds applied to an auto-detected source rate."""

    min_confidence: float = 0.5
    warn_below: float = 0.7


@dataclass
class Manifest:
    """Top-level conversion manifest.

    ``from_fps`` left as None means the source rate is auto-detected, and
    ``output`` left as None derives a name from the input and both rates.
    """

    input: Path
    to_fps: float
    output: Path | None = None
    from_fps: float | None = None
    force: bool = False
    version: str = "1"
    detection: DetectionConfig = field(default_factory=DetectionConfig)


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file."""
    path = Path(path)
    data = json.loads(path.read_text())

    if "input" not in data or "to_fps" not in data:
        raise ValueError("Manifest must contain 'input' and 'to_fps' fields")

    detection = DetectionConfig(**data["detection"]) if "detection" in data else DetectionConfig()

    return Manifest(
        version=data.get("version", "1"),
        input=Path(data["input"]),
        to_fps=float(data["to_fps"]),
        output=Path(data["output"]) if data.get("output") else None,
        from_fps=float(data["from_fps"]) if data.get("from_fps") is not None else None,
        force=bool(data.get("force", False)),
        detection=detection,
    )
