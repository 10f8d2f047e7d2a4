"""Unit tests for the SubSync web UI."""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import make_samples, render_srt
from subsync.engine import ConvertResult
from subsync.manifest import DetectionConfig
from subsync.models import TimingSample
from subsync.web import create_app


@pytest.fixture
def app(tmp_path):
    app = create_app(work_dir=tmp_path)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _upload(client, filename="movie.srt", content=None):
    if content is None:
        content = (Path(__file__).parent / "fixtures" / "sample.srt").read_bytes()
    return client.post(
        "/api/upload",
        data={"file": (io.BytesIO(content), filename)},
        content_type="multipart/form-data",
    )


def _job(client, **kwargs) -> str:
    return _upload(client, **kwargs).get_json()["job_id"]


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


class TestIndex:
    def test_serves_html(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"SubSync" in resp.data


class TestUpload:
    def test_upload_success(self, client):
        resp = _upload(client)
        assert resp.status_code == 200
        data = resp.get_json()
        assert "job_id" in data
        assert data["filename"] == "movie.srt"

    def test_upload_no_file(self, client):
        resp = client.post("/api/upload")
        assert resp.status_code == 400

    def test_upload_creates_file(self, client, tmp_path):
        job_id = _job(client, content=b"CONTENT")
        input_file = tmp_path / job_id / "input.srt"
        assert input_file.read_bytes() == b"CONTENT"


class TestAnalyze:
    def test_analyze(self, client):
        resp = client.get(f"/api/jobs/{_job(client)}/analyze")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["entry_count"] == 6
        assert data["detection"] == {
            "framerate": 29.97,
            "confidence": 0.5,
            "method": "common_framerate_heuristic",
        }
        assert data["low_confidence"] is True
        assert data["warnings"] == []

    def test_zero_span_track_is_strict_json(self, client):
        content = render_srt([TimingSample(5000, 5000)] * 5).encode()
        resp = client.get(f"/api/jobs/{_job(client, content=content)}/analyze")
        assert resp.status_code == 200
        data = json.loads(resp.data, parse_constant=_reject_constant)
        assert data["statistics"]["total_span_ms"] == 0.0
        assert "density_per_minute" not in data["statistics"]

    def test_analyze_malformed(self, client):
        resp = client.get(f"/api/jobs/{_job(client, content=b'not subtitles')}/analyze")
        assert resp.status_code == 400
        assert "No valid subtitle entries" in resp.get_json()["error"]

    def test_analyze_unknown_job(self, client):
        assert client.get("/api/jobs/nonexistent/analyze").status_code == 404


class TestConvert:
    def test_convert_unknown_job(self, client):
        resp = client.post("/api/jobs/nonexistent/convert", json={"to_fps": 25})
        assert resp.status_code == 404

    def test_convert_requires_target(self, client):
        resp = client.post(f"/api/jobs/{_job(client)}/convert", json={})
        assert resp.status_code == 400

    @pytest.mark.parametrize("body", [{"to_fps": "fast"}, {"to_fps": 0}, {"to_fps": 25, "from_fps": -1}])
    def test_convert_rejects_bad_rates(self, client, body):
        resp = client.post(f"/api/jobs/{_job(client)}/convert", json=body)
        assert resp.status_code == 400

    def test_convert_and_download(self, client):
        job_id = _job(client)
        resp = client.post(f"/api/jobs/{job_id}/convert", json={"from_fps": 24, "to_fps": 29.97})
        assert resp.status_code == 200
        assert resp.get_json()["converted"] is True

        status = client.get(f"/api/jobs/{job_id}/status").get_json()
        assert status["status"] == "done"

        download = client.get(f"/api/jobs/{job_id}/result")
        assert download.status_code == 200
        assert b"00:00:00,801 --> 00:00:02,803" in download.data

    def test_convert_low_confidence(self, client):
        content = render_srt(make_samples([1500] * 3)).encode()
        job_id = _job(client, content=content)
        resp = client.post(f"/api/jobs/{job_id}/convert", json={"to_fps": 25})
        assert resp.status_code == 422
        assert resp.get_json()["detection"]["method"] == "fallback"

        status = client.get(f"/api/jobs/{job_id}/status").get_json()
        assert status["status"] == "error"
        assert "Low confidence" in status["error"]

    @patch("subsync.web.routes.convert")
    def test_convert_passes_manifest(self, mock_convert, client):
        mock_convert.return_value = ConvertResult(
            input_path=Path("input.srt"), source_fps=29.97, target_fps=25.0
        )
        job_id = _job(client)
        client.post(f"/api/jobs/{job_id}/convert", json={"to_fps": 25, "force": True})
        manifest = mock_convert.call_args[0][0]
        assert manifest.to_fps == 25.0
        assert manifest.from_fps is None
        assert manifest.force is True


class TestStatus:
    def test_status_after_upload(self, client):
        resp = client.get(f"/api/jobs/{_job(client)}/status")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "uploaded"

    def test_status_unknown_job(self, client):
        resp = client.get("/api/jobs/nonexistent/status")
        assert resp.status_code == 404


class TestDownload:
    def test_download_not_complete(self, client):
        resp = client.get(f"/api/jobs/{_job(client)}/result")
        assert resp.status_code == 409

    def test_download_unknown_job(self, client):
        resp = client.get("/api/jobs/nonexistent/result")
        assert resp.status_code == 404


class TestCreateApp:
    def test_creates_work_dir(self, tmp_path):
        work_dir = tmp_path / "jobs" / "nested"
        app = create_app(work_dir=work_dir)
        assert work_dir.is_dir()
        assert app.config["WORK_DIR"] == work_dir

    def test_default_detection_config(self, app):
        assert app.config["DETECTION"] == DetectionConfig()

    def test_detection_config_reaches_convert(self, tmp_path):
        app = create_app(work_dir=tmp_path, detection=DetectionConfig(min_confidence=0.05))
        client = app.test_client()
        content = render_srt(make_samples([1500] * 3)).encode()
        job_id = _job(client, content=content)

        resp = client.post(f"/api/jobs/{job_id}/convert", json={"to_fps": 25})
        assert resp.status_code == 200
        assert resp.get_json()["detection"]["method"] == "fallback"

    def test_detection_config_reaches_analyze(self, tmp_path):
        app = create_app(work_dir=tmp_path, detection=DetectionConfig(warn_below=0.4))
        client = app.test_client()
        data = client.get(f"/api/jobs/{_job(client)}/analyze").get_json()
        assert data["low_confidence"] is False
