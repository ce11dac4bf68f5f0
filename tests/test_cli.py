"""Tests for the ``apple-maps`` command line entry point."""

from __future__ import annotations

import base64
import json

import pytest

pytest.importorskip(
    "PySide6",
    reason="PySide6 is required for the replay command",
    exc_type=ImportError,
)

from typer.testing import CliRunner

from apple_maps.cli import app

runner = CliRunner()


def test_span_at_base_zoom():
    result = runner.invoke(app, ["span", "0", "0", "21", "--width", "400", "--height", "800"])

    assert result.exit_code == 0
    assert "longitudeDelta=0.000268" in result.stdout


def test_altitude_prints_metres():
    result = runner.invoke(app, ["altitude", "37.33", "-122.03", "12"])

    assert result.exit_code == 0
    assert result.stdout.strip().endswith(" m")


def test_zoom_level_from_longitude_delta():
    result = runner.invoke(app, ["zoom-level", "0", "0", "0.000268", "--width", "400"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "21.00"


def test_zoom_level_rejects_zero_width():
    result = runner.invoke(app, ["zoom-level", "0", "0", "1.0", "--width", "0"])
    assert result.exit_code != 0


def test_replay_runs_commands_against_offscreen_map(tmp_path, png_bytes):
    script = tmp_path / "session.json"
    script.write_text(
        json.dumps(
            [
                {"method": "camera#move", "arguments": {"cameraUpdate": ["zoomTo", 10]}},
                {
                    "method": "markers#add",
                    "arguments": {
                        "markers": [["a", base64.b64encode(png_bytes()).decode("ascii"), [1.0, 2.0]]]
                    },
                },
                {"method": "map#takeSnapshot"},
                {"method": "camera#getZoomLevel"},
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["replay", str(script)])

    assert result.exit_code == 0, result.output
    assert "1 marker(s) on the map" in result.stdout


@pytest.mark.parametrize("content", ["{\"method\": \"camera#move\"}", "[{\"arguments\": {}}]", "not json"])
def test_replay_rejects_bad_scripts(tmp_path, content):
    script = tmp_path / "broken.json"
    script.write_text(content, encoding="utf-8")

    result = runner.invoke(app, ["replay", str(script)])

    assert result.exit_code == 1
