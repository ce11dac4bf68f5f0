"""Marker payloads and the annotation objects handed to the surface."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from PIL import Image

from ..config import ANNOTATION_CLUSTERING_IDENTIFIER, DEFAULT_SCREEN_SCALE
from ..errors import MalformedPayloadError
from ..models.types import GeoPoint
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MarkerIcon:
    """Decoded marker image; ``width``/``height`` are in screen points."""

    data: bytes
    width: float
    height: float

    @classmethod
    def decode(cls, data: bytes, scale: float = DEFAULT_SCREEN_SCALE) -> "MarkerIcon":
        """Decode *data* and measure it at the given screen *scale*."""

        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                width, height = image.size
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise MalformedPayloadError(f"icon is not a decodable image: {exc}") from exc
        scale = scale if scale > 0 else DEFAULT_SCREEN_SCALE
        return cls(bytes(data), width / scale, height / scale)


@dataclass(frozen=True)
class Marker:
    id: str
    icon: MarkerIcon
    coordinate: GeoPoint


@dataclass(eq=False)
class PointAnnotation:
    """Renderer-side object for one marker.

    Equality is identity: a marker that is removed and added again produces a
    new annotation even when its payload did not change.
    """

    marker_id: str
    coordinate: GeoPoint
    icon: MarkerIcon
    center_offset: tuple[float, float] = (0.0, 0.0)
    clustering_identifier: str = field(default=ANNOTATION_CLUSTERING_IDENTIFIER)

    @classmethod
    def from_marker(cls, marker: Marker) -> "PointAnnotation":
        # Anchor the bottom edge of the icon on the coordinate.
        return cls(
            marker_id=marker.id,
            coordinate=marker.coordinate,
            icon=marker.icon,
            center_offset=(0.0, -marker.icon.height / 2.0),
        )


def parse_marker(payload: object, scale: float = DEFAULT_SCREEN_SCALE) -> Marker:
    """Build a :class:`Marker` from an ``(id, icon_bytes, [lat, lon])`` triple."""

    if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence) or len(payload) < 3:
        raise MalformedPayloadError(f"marker must be an (id, icon, position) triple, got {payload!r}")
    marker_id, icon_data, position = payload[0], payload[1], payload[2]
    if not isinstance(marker_id, str):
        raise MalformedPayloadError(f"marker id must be a string, got {marker_id!r}")
    if not isinstance(icon_data, (bytes, bytearray, memoryview)):
        raise MalformedPayloadError(f"marker {marker_id!r} icon must be bytes")
    try:
        coordinate = GeoPoint.from_pair(position)
    except (TypeError, ValueError) as exc:
        raise MalformedPayloadError(f"marker {marker_id!r} has an invalid position: {exc}") from exc
    icon = MarkerIcon.decode(bytes(icon_data), scale)
    return Marker(marker_id, icon, coordinate)


def parse_marker_payloads(payloads: Iterable[object], scale: float = DEFAULT_SCREEN_SCALE) -> list[Marker]:
    """Parse every triple in *payloads*, dropping malformed ones individually."""

    markers: list[Marker] = []
    for payload in payloads:
        try:
            markers.append(parse_marker(payload, scale))
        except MalformedPayloadError as exc:
            logger.debug("Dropping marker payload: %s", exc)
    return markers


__all__ = [
    "Marker",
    "MarkerIcon",
    "PointAnnotation",
    "parse_marker",
    "parse_marker_payloads",
]
