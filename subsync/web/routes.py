"""Web UI routes for SubSync."""

import logging
import uuid
from pathlib import Path

from flask import (
    Blueprint,
    current_app,
    jsonify,
    render_template,
    request,
    send_file,
)

from subsync.engine import LowConfidenceError, analyze, convert
from subsync.manifest import Manifest
from subsync.models import Detection

logger = logging.getLogger(__name__)

bp = Blueprint("web", __name__, template_folder="templates")

# In-memory job store: job_id -> job dict
_jobs: dict[str, dict] = {}


def _detection_json(d: Detection) -> dict:
    return {"framerate": d.framerate, "confidence": d.confidence, "method": d.method.value}


@bp.route("/")
def index():
    return render_template("index.html")


@bp.route("/api/upload", methods=["POST"])
def upload():
    if "file" not in request.files:
        return jsonify({"error": "No file provided"}), 400

    f = request.files["file"]
    if not f.filename:
        return jsonify({"error": "Empty filename"}), 400

    job_id = uuid.uuid4().hex[:12]
    job_dir = Path(current_app.config["WORK_DIR"]) / job_id
    job_dir.mkdir(parents=True, exist_ok=True)

    input_path = job_dir / "input.srt"
    f.save(input_path)

    _jobs[job_id] = {
        "dir": job_dir,
        "input_path": input_path,
        "filename": f.filename,
        "status": "uploaded",
    }

    return jsonify({"job_id": job_id, "filename": f.filename})


@bp.route("/api/jobs/<job_id>/analyze")
def analyze_job(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    try:
        report = analyze(job["input_path"], current_app.config["DETECTION"])
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "entry_count": report.entry_count,
        "duration_minutes": round(report.duration_minutes, 2),
        "detection": _detection_json(report.detection.best),
        "proposals": [_detection_json(d) for d in report.detection.proposals],
        "low_confidence": report.low_confidence,
        "warnings": report.warnings,
        "statistics": report.statistics,
    })


@bp.route("/api/jobs/<job_id>/convert", methods=["POST"])
def convert_job(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    config = request.get_json(silent=True) or {}
    if "to_fps" not in config:
        return jsonify({"error": "Missing 'to_fps'"}), 400

    try:
        manifest = Manifest(
            input=job["input_path"],
            output=job["dir"] / "output.srt",
            to_fps=float(config["to_fps"]),
            from_fps=float(config["from_fps"]) if config.get("from_fps") is not None else None,
            force=bool(config.get("force", False)),
            detection=current_app.config["DETECTION"],
        )
    except (TypeError, ValueError):
        return jsonify({"error": "Framerates must be numbers"}), 400

    try:
        result = convert(manifest)
    except LowConfidenceError as e:
        job["status"] = "error"
        job["error"] = str(e)
        return jsonify({"error": str(e), "detection": _detection_json(e.detection)}), 422
    except ValueError as e:
        job["status"] = "error"
        job["error"] = str(e)
        return jsonify({"error": str(e)}), 400

    job["status"] = "done"
    job["error"] = None
    job["result"] = {
        "output_path": str(result.output_path) if result.output_path else None,
        "source_fps": result.source_fps,
        "target_fps": result.target_fps,
        "converted": result.converted,
        "detection": _detection_json(result.detection) if result.detection else None,
    }
    logger.info("Job %s: %g fps -> %g fps", job_id, result.source_fps, result.target_fps)
    return jsonify(job["result"])


@bp.route("/api/jobs/<job_id>/result")
def download_result(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    if job["status"] != "done":
        return jsonify({"error": "Job not complete"}), 409

    output_path = job["result"]["output_path"]
    if output_path is None:
        # Same source and target rate; the input is already the answer
        output_path = job["input_path"]
    return send_file(
        Path(output_path),
        mimetype="application/x-subrip",
        as_attachment=True,
        download_name=job["filename"],
    )


@bp.route("/api/jobs/<job_id>/status")
def job_status(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    resp = {"status": job["status"], "filename": job.get("filename")}
    if job["status"] == "done":
        resp["result"] = job.get("result")
    if job["status"] == "error":
        resp["error"] = job.get("error")
    return jsonify(resp)
