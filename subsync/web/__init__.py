"""Flask application factory for the SubSync web UI."""

import tempfile
from pathlib import Path

from flask import Flask, jsonify

from subsync.manifest import DetectionConfig


def create_app(work_dir: Path | None = None, detection: DetectionConfig | None = None) -> Flask:
    """Build the app.

    Uploads and converted files live under *work_dir* (a fresh temp dir if
    omitted). *detection* sets the confidence thresholds used by the
    analyze and convert endpoints.
    """
    app = Flask(__name__)
    work_dir = Path(work_dir) if work_dir else Path(tempfile.mkdtemp(prefix="subsync_"))
    work_dir.mkdir(parents=True, exist_ok=True)
    app.config["WORK_DIR"] = work_dir
    app.config["DETECTION"] = detection or DetectionConfig()
    app.config["MAX_CONTENT_LENGTH"] = 20 * 1024 * 1024  # subtitle files are small

    from subsync.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return jsonify({"error": "Subtitle file too large"}), 413

    return app
