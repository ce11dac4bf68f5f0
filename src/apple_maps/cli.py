"""Typer-based CLI entry point."""

from __future__ import annotations

import base64
import binascii
import json
from functools import wraps
from pathlib import Path
from typing import Any

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .errors import AppleMapsError, MethodNotImplementedError, ScriptError
from .map_controller import MapController
from .map_view import projection
from .map_view.surface import OffscreenMapSurface
from .models.types import CoordinateSpan, GeoPoint, ViewSize
from .utils.logging import configure_logging

app = typer.Typer(help="Camera and marker engine for host-driven map views")

_DEFAULT_WIDTH = 390.0
_DEFAULT_HEIGHT = 844.0
_MARKER_METHODS = {"markers#add", "markers#replace"}


def _handle_errors(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ScriptError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except AppleMapsError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine activity")) -> None:
    """Inspect projection math or replay host commands against a headless map."""

    configure_logging(verbose)


@app.command()
@_handle_errors
def span(
    latitude: float,
    longitude: float,
    zoom: float,
    width: float = typer.Option(_DEFAULT_WIDTH, help="View width in points"),
    height: float = typer.Option(_DEFAULT_HEIGHT, help="View height in points"),
) -> None:
    """Print the coordinate span visible at a zoom level."""

    result = projection.zoom_level_to_span(GeoPoint(latitude, longitude), zoom, ViewSize(width, height))
    print(f"latitudeDelta={result.latitude_delta:.6f} longitudeDelta={result.longitude_delta:.6f}")


@app.command()
@_handle_errors
def altitude(
    latitude: float,
    longitude: float,
    zoom: float,
    width: float = typer.Option(_DEFAULT_WIDTH, help="View width in points"),
    height: float = typer.Option(_DEFAULT_HEIGHT, help="View height in points"),
) -> None:
    """Print the camera altitude in metres for a zoom level."""

    value = projection.zoom_level_to_altitude(GeoPoint(latitude, longitude), zoom, ViewSize(width, height))
    print(f"{value:.1f} m")


@app.command("zoom-level")
@_handle_errors
def zoom_level(
    latitude: float,
    longitude: float,
    longitude_delta: float,
    width: float = typer.Option(_DEFAULT_WIDTH, help="View width in points"),
) -> None:
    """Print the zoom level that shows LONGITUDE_DELTA degrees across the view."""

    try:
        value = projection.region_to_zoom_level(
            GeoPoint(latitude, longitude),
            CoordinateSpan(0.0, longitude_delta),
            width,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    print(f"{value:.2f}")


class _RecordingChannel:
    """Collect outbound host events emitted while one command runs."""

    def __init__(self) -> None:
        self.events: list[str] = []

    def invoke_method(self, method: str, arguments: Any) -> None:
        self.events.append(method)

    def drain(self) -> list[str]:
        events, self.events = self.events, []
        return events


def _decode_icon(value: object) -> object:
    """Scripts carry icons as base64 text; the engine expects raw bytes."""

    if not isinstance(value, str):
        return value
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return value


def _prepare_arguments(method: str, arguments: object) -> object:
    if method not in _MARKER_METHODS:
        return arguments
    payloads = arguments.get("markers") if isinstance(arguments, dict) else arguments
    if not isinstance(payloads, list):
        return arguments
    prepared = [
        [item[0], _decode_icon(item[1]), *item[2:]] if isinstance(item, list) and len(item) >= 2 else item
        for item in payloads
    ]
    return {"markers": prepared}


def _load_script(script: Path) -> list[dict[str, Any]]:
    try:
        payload = json.loads(script.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ScriptError(f"cannot read {script}: {exc}") from exc
    if not isinstance(payload, list):
        raise ScriptError(f"{script} must contain a JSON list of calls")
    calls: list[dict[str, Any]] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict) or not isinstance(entry.get("method"), str):
            raise ScriptError(f"call #{index} needs a string 'method'")
        calls.append(entry)
    return calls


@app.command()
@_handle_errors
def replay(
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of method calls"),
    width: float = typer.Option(_DEFAULT_WIDTH, help="View width in points"),
    height: float = typer.Option(_DEFAULT_HEIGHT, help="View height in points"),
) -> None:
    """Replay host commands against an offscreen map and print each result."""

    calls = _load_script(script)
    surface = OffscreenMapSurface()
    channel = _RecordingChannel()
    controller = MapController(surface, channel=channel)
    surface.resize(width, height)
    channel.drain()

    table = Table(title=f"Replay of {script.name}")
    table.add_column("#", justify="right")
    table.add_column("method")
    table.add_column("result")
    table.add_column("events")

    for index, call in enumerate(calls):
        method = call["method"]
        arguments = _prepare_arguments(method, call.get("arguments"))
        try:
            result = controller.handle_method_call(method, arguments)
        except MethodNotImplementedError:
            result_text = "[yellow]not implemented"
        else:
            result_text = json.dumps(result)
        table.add_row(str(index), method, result_text, ", ".join(channel.drain()))

    Console().print(table)
    print(
        f"[green]zoom {controller.camera.zoom_level:.2f}, "
        f"{len(controller.markers)} marker(s) on the map"
    )


if __name__ == "__main__":
    app()
