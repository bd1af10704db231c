"""CLI tests — click commands with uvicorn stubbed out."""

import json
import os
import subprocess
import sys

from click.testing import CliRunner

from pointsync import __version__
from pointsync.cli import main as cli


def test_version():
    result = CliRunner().invoke(cli.main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_config_prints_effective_settings(monkeypatch):
    monkeypatch.setenv("POINTSYNC_PORT", "9100")
    result = CliRunner().invoke(cli.main, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["port"] == 9100
    assert data["ws_path"] == "/ws"


def test_invalid_environment_reports_cleanly():
    """A fresh process with a bad environment gets the message, not a traceback."""
    env = {**os.environ, "POINTSYNC_ENVIRONMENT": "production"}
    env.pop("POINTSYNC_ALLOWED_ORIGINS", None)
    proc = subprocess.run(
        [sys.executable, "-m", "pointsync.cli.main", "config"],
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert proc.returncode == 1
    assert "Invalid configuration" in proc.stderr
    assert "Traceback" not in proc.stderr


def test_serve_runs_uvicorn_with_overrides(monkeypatch, tmp_path):
    calls = {}

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    result = CliRunner().invoke(
        cli.main,
        ["serve", "--host", "127.0.0.1", "--port", "9200", "--static-dir", str(tmp_path)],
    )

    assert result.exit_code == 0, result.output
    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 9200
    assert calls["log_level"] == "info"
    assert calls["app"].state.settings.static_dir == str(tmp_path)
    assert calls["app"].state.hub.points.precision == 6
