"""Camera commands and the parser for the host's ``cameraUpdate`` lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from ..errors import MalformedPayloadError
from ..models.types import CameraPosition, GeoPoint


@dataclass(frozen=True)
class SetPosition:
    position: CameraPosition
    animated: bool = False


@dataclass(frozen=True)
class ZoomBy:
    delta: float
    animated: bool = False


@dataclass(frozen=True)
class ZoomTo:
    level: float
    animated: bool = False


@dataclass(frozen=True)
class ZoomIn:
    animated: bool = False


@dataclass(frozen=True)
class ZoomOut:
    animated: bool = False


CameraCommand = Union[SetPosition, ZoomBy, ZoomTo, ZoomIn, ZoomOut]


def _coerce_number(value: object) -> Optional[float]:
    """Return *value* as a float when it is a real number, else ``None``."""

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _coerce_target(value: object) -> Optional[GeoPoint]:
    try:
        return GeoPoint.from_pair(value)
    except (TypeError, ValueError):
        return None


def parse_camera_position(data: object) -> CameraPosition:
    """Build a :class:`CameraPosition` from a ``newCameraPosition`` mapping.

    Fields with the wrong type are treated as absent so the camera keeps its
    current value for them.
    """

    if not isinstance(data, Mapping):
        raise MalformedPayloadError(f"camera position must be a mapping, got {type(data).__name__}")
    return CameraPosition(
        target=_coerce_target(data.get("target")),
        zoom=_coerce_number(data.get("zoom")),
        pitch=_coerce_number(data.get("pitch")),
        heading=_coerce_number(data.get("heading")),
    )


def _argument(data: Sequence[Any], index: int) -> Any:
    if len(data) <= index:
        raise MalformedPayloadError(f"{data[0]} expects at least {index} argument(s)")
    return data[index]


def parse_camera_update(data: object, animated: bool) -> CameraCommand:
    """Translate ``[opcode, *arguments]`` into a :data:`CameraCommand`.

    Raises :class:`MalformedPayloadError` for unknown opcodes and for
    arguments that cannot be interpreted.
    """

    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence) or not data:
        raise MalformedPayloadError(f"camera update must be a non-empty list, got {data!r}")
    opcode = data[0]
    if not isinstance(opcode, str):
        raise MalformedPayloadError(f"camera update opcode must be a string, got {opcode!r}")

    if opcode == "newCameraPosition":
        return SetPosition(parse_camera_position(_argument(data, 1)), animated)

    if opcode in {"newLatLng", "newLatLngZoom"}:
        target = _coerce_target(_argument(data, 1))
        if target is None:
            raise MalformedPayloadError(f"{opcode} needs a [latitude, longitude] target")
        if opcode == "newLatLng":
            return SetPosition(CameraPosition(target=target), animated)
        # A missing zoom means level 0, which the controller then clamps.
        zoom = _coerce_number(data[2]) if len(data) > 2 else None
        return SetPosition(CameraPosition(target=target, zoom=zoom if zoom is not None else 0.0), animated)

    if opcode in {"zoomBy", "zoomTo"}:
        value = _coerce_number(_argument(data, 1))
        if value is None:
            raise MalformedPayloadError(f"{opcode} needs a numeric argument")
        if opcode == "zoomBy":
            return ZoomBy(value, animated)
        return ZoomTo(value, animated)

    if opcode == "zoomIn":
        return ZoomIn(animated)
    if opcode == "zoomOut":
        return ZoomOut(animated)

    raise MalformedPayloadError(f"unknown camera update {opcode!r}")


__all__ = [
    "CameraCommand",
    "SetPosition",
    "ZoomBy",
    "ZoomIn",
    "ZoomOut",
    "ZoomTo",
    "parse_camera_position",
    "parse_camera_update",
]
