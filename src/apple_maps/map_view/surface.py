"""Interfaces to the rendering surface plus a headless implementation."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..config import CAMERA_HALF_FOV_DEGREES
from ..models.types import GeoPoint, MapCamera, MapRect, Region, ViewSize
from ..utils.logging import get_logger
from . import projection

logger = get_logger(__name__)


class SurfaceDelegate(Protocol):
    """Callbacks a surface issues while its visible region changes."""

    def region_will_change(self, animated: bool) -> None:  # pragma: no cover - interface definition only
        ...

    def region_did_change(self, animated: bool) -> None:  # pragma: no cover - interface definition only
        ...

    def bounds_did_change(self) -> None:  # pragma: no cover - interface definition only
        ...


class MapSurface(Protocol):
    """Minimal interface the engine expects from the map renderer."""

    @property
    def bounds_size(self) -> ViewSize:  # pragma: no cover - interface definition only
        ...

    @property
    def region(self) -> Region:  # pragma: no cover - interface definition only
        ...

    @property
    def visible_rect(self) -> MapRect:  # pragma: no cover - interface definition only
        ...

    @property
    def camera(self) -> MapCamera:  # pragma: no cover - interface definition only
        ...

    @property
    def annotations(self) -> Sequence[Any]:  # pragma: no cover - interface definition only
        ...

    def set_region(self, region: Region, animated: bool) -> None:  # pragma: no cover - interface definition only
        ...

    def set_camera(self, camera: MapCamera, animated: bool) -> None:  # pragma: no cover - interface definition only
        ...

    def add_annotations(self, annotations: Sequence[Any]) -> None:  # pragma: no cover - interface definition only
        ...

    def remove_annotations(self, annotations: Sequence[Any]) -> None:  # pragma: no cover - interface definition only
        ...

    def apply_options(self, options: Mapping[str, Any]) -> None:  # pragma: no cover - interface definition only
        ...

    def set_delegate(self, delegate: Optional[SurfaceDelegate]) -> None:  # pragma: no cover - interface definition only
        ...


class OffscreenMapSurface:
    """Headless :class:`MapSurface` that keeps camera and region consistent.

    The surface derives its visible rectangle from the camera altitude with
    the same top-down 15 degree model the projection helpers use, so a zoom
    level applied through the camera controller can be read back again.  It
    drives the command line replay and integration tests.
    """

    def __init__(
        self,
        width: float = 0.0,
        height: float = 0.0,
        *,
        center: GeoPoint | None = None,
    ) -> None:
        self._size = ViewSize(float(width), float(height))
        self._camera = MapCamera(center or GeoPoint(0.0, 0.0), altitude=0.0)
        self._rect = projection.altitude_to_rect(self._camera.center, 0.0, self._size)
        self._annotations: list[Any] = []
        self._options: dict[str, Any] = {}
        self._delegate: Optional[SurfaceDelegate] = None

    # ------------------------------------------------------------------
    @property
    def bounds_size(self) -> ViewSize:
        return self._size

    # ------------------------------------------------------------------
    @property
    def region(self) -> Region:
        return Region(self._camera.center, projection.rect_to_span(self._rect))

    # ------------------------------------------------------------------
    @property
    def visible_rect(self) -> MapRect:
        return self._rect

    # ------------------------------------------------------------------
    @property
    def camera(self) -> MapCamera:
        return self._camera

    # ------------------------------------------------------------------
    @property
    def annotations(self) -> list[Any]:
        return list(self._annotations)

    # ------------------------------------------------------------------
    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    # ------------------------------------------------------------------
    def set_delegate(self, delegate: Optional[SurfaceDelegate]) -> None:
        """Register the object notified about region and bounds changes."""

        self._delegate = delegate

    # ------------------------------------------------------------------
    def resize(self, width: float, height: float) -> None:
        """Change the surface size, keeping the camera altitude fixed."""

        size = ViewSize(float(width), float(height))
        if size == self._size:
            return
        self._size = size
        self._rect = projection.altitude_to_rect(self._camera.center, self._camera.altitude, size)
        if self._delegate is not None:
            self._delegate.bounds_did_change()

    # ------------------------------------------------------------------
    def set_camera(self, camera: MapCamera, animated: bool) -> None:
        """Point the camera and recompute the visible rectangle."""

        self._notify_will_change(animated)
        self._camera = camera
        self._rect = projection.altitude_to_rect(camera.center, camera.altitude, self._size)
        logger.debug("Offscreen camera at %s, altitude %.1f m", camera.center, camera.altitude)
        self._notify_did_change(animated)

    # ------------------------------------------------------------------
    def set_region(self, region: Region, animated: bool) -> None:
        """Show *region* and place the camera at the matching altitude."""

        self._notify_will_change(animated)
        center = region.center
        edge = GeoPoint(center.latitude - region.span.latitude_delta / 2.0, center.longitude)
        altitude = projection.great_circle_distance(center, edge) / math.tan(
            math.radians(CAMERA_HALF_FOV_DEGREES)
        )
        self._camera = replace(self._camera, center=center, altitude=altitude)
        self._rect = projection.region_to_rect(region)
        self._notify_did_change(animated)

    # ------------------------------------------------------------------
    def add_annotations(self, annotations: Sequence[Any]) -> None:
        self._annotations.extend(annotations)

    # ------------------------------------------------------------------
    def remove_annotations(self, annotations: Sequence[Any]) -> None:
        removed = {id(annotation) for annotation in annotations}
        self._annotations = [item for item in self._annotations if id(item) not in removed]

    # ------------------------------------------------------------------
    def apply_options(self, options: Mapping[str, Any]) -> None:
        self._options.update(options)

    # ------------------------------------------------------------------
    def _notify_will_change(self, animated: bool) -> None:
        if self._delegate is not None:
            self._delegate.region_will_change(animated)

    # ------------------------------------------------------------------
    def _notify_did_change(self, animated: bool) -> None:
        if self._delegate is not None:
            self._delegate.region_did_change(animated)


__all__ = ["MapSurface", "OffscreenMapSurface", "SurfaceDelegate"]
