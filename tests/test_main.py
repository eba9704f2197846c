"""
Tests for the command-line entry point.

Usage:
    pytest tests/test_main.py
"""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main
from conftest import CannedEngine
from huntscan.ocr import register_engine
from huntscan.settings import save_settings


@pytest.fixture
def settings_file(tmp_path, template_dir, monkeypatch):
    monkeypatch.chdir(tmp_path)
    register_engine("canned", CannedEngine)
    path = tmp_path / "config.json"
    save_settings({
        "engine": "canned",
        "engine_options": {"texts": {}},
        "template_dir": str(template_dir),
        "upscale_factor": 1.0,
    }, path)
    return path


def test_analyze_prints_fields(settings_file, tmp_path, full_screenshot, capsys):
    image = tmp_path / "shot.png"
    full_screenshot.save(image)

    code = main.main(["--settings", str(settings_file), "analyze", str(image)])

    assert code == main.EXIT_OK
    result = json.loads(capsys.readouterr().out)
    assert set(result) == {"level", "exp_percent", "currency", "counter", "gauge", "fragments"}


def test_session_prints_delta(settings_file, tmp_path, full_screenshot, capsys):
    image = tmp_path / "shot.png"
    full_screenshot.save(image)

    code = main.main(["--settings", str(settings_file), "session", str(image), str(image)])

    assert code == main.EXIT_OK
    result = json.loads(capsys.readouterr().out)
    assert result["exp_gained"] == 0.0
    assert result["counter_rollover_suspected"] is False


def test_bad_image_exit_code(settings_file, tmp_path):
    code = main.main(["--settings", str(settings_file), "analyze", str(tmp_path / "missing.png")])
    assert code == main.EXIT_BAD_IMAGE


def test_engine_unavailable_exit_code(settings_file, tmp_path):
    with patch.dict(sys.modules, {"paddleocr": None}):
        code = main.main(["--settings", str(settings_file), "--engine", "paddle",
                          "analyze", str(tmp_path / "shot.png")])
    assert code == main.EXIT_BAD_ENVIRONMENT


def test_unknown_engine_exit_code(settings_file, tmp_path):
    code = main.main(["--settings", str(settings_file), "--engine", "nonexistent",
                      "analyze", str(tmp_path / "shot.png")])
    assert code == main.EXIT_BAD_ENVIRONMENT


def test_malformed_layout_exit_code(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    register_engine("canned", CannedEngine)
    path = tmp_path / "broken.json"
    save_settings({"engine": "canned", "engine_options": {}, "layout": {"level": [1, 2]}}, path)

    code = main.main(["--settings", str(path), "analyze", str(tmp_path / "shot.png")])

    assert code == main.EXIT_BAD_ENVIRONMENT
