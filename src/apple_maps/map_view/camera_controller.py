"""Camera command interpreter that owns the zoom state of one map view."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional

from ..config import MAX_CAMERA_ZOOM_LEVEL, ZOOM_SNAP_LEVEL
from ..errors import MalformedPayloadError
from ..models.types import CameraPosition, GeoPoint, MapCamera, Region
from ..utils.logging import get_logger
from . import projection
from .camera_update import (
    CameraCommand,
    SetPosition,
    ZoomBy,
    ZoomIn,
    ZoomOut,
    ZoomTo,
    parse_camera_update,
)
from .surface import MapSurface
from .zoom_state import ZoomState

logger = get_logger(__name__)


class CameraController:
    """Translate high-level camera commands into surface camera updates.

    The controller is the only writer of its :class:`ZoomState`.  Each command
    runs to completion synchronously; a later command simply supersedes the
    effect of an earlier one.
    """

    def __init__(self, surface: MapSurface, zoom_state: Optional[ZoomState] = None) -> None:
        self._surface = surface
        self._state = zoom_state or ZoomState()
        self._camera_listeners: list[Callable[[MapCamera], None]] = []

    # ------------------------------------------------------------------
    @property
    def zoom_level(self) -> float:
        """Return the stored zoom level without consulting the surface."""

        return self._state.zoom_level

    # ------------------------------------------------------------------
    @property
    def min_zoom_level(self) -> float:
        return self._state.min_zoom_level

    # ------------------------------------------------------------------
    @property
    def max_zoom_level(self) -> float:
        return self._state.max_zoom_level

    # ------------------------------------------------------------------
    @property
    def pitch(self) -> float:
        return self._state.pitch

    # ------------------------------------------------------------------
    @property
    def heading(self) -> float:
        return self._state.heading

    # ------------------------------------------------------------------
    def add_camera_listener(self, callback: Callable[[MapCamera], None]) -> None:
        """Register *callback* to receive every camera applied to the surface."""

        if callback not in self._camera_listeners:
            self._camera_listeners.append(callback)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def dispatch(self, update: object, animated: bool) -> None:
        """Parse a host ``cameraUpdate`` list and execute it.

        Malformed updates are logged and dropped; the caller still reports
        success to the host.
        """

        try:
            command = parse_camera_update(update, animated)
        except MalformedPayloadError as exc:
            logger.debug("Dropping camera update %r: %s", update, exc)
            return
        self.execute(command)

    # ------------------------------------------------------------------
    def execute(self, command: CameraCommand) -> None:
        """Run an already parsed camera command."""

        if isinstance(command, SetPosition):
            self.set_position(command.position, command.animated)
        elif isinstance(command, ZoomBy):
            self.zoom_by(command.delta, command.animated)
        elif isinstance(command, ZoomTo):
            self.zoom_to(command.level, command.animated)
        elif isinstance(command, ZoomIn):
            self.zoom_in(command.animated)
        elif isinstance(command, ZoomOut):
            self.zoom_out(command.animated)
        else:  # pragma: no cover - the union is closed
            raise TypeError(f"Unsupported camera command: {command!r}")

    # ------------------------------------------------------------------
    def set_position(self, position: CameraPosition, animated: bool) -> None:
        """Move the camera to *position*, keeping current values for gaps."""

        center = self._resolve_position(position)
        self._apply_camera(center, self._state.zoom_level, animated)

    # ------------------------------------------------------------------
    def set_center_region(self, position: CameraPosition, animated: bool) -> None:
        """Move the camera by setting a region rather than an altitude.

        This is how the initial camera position is applied.  The zoom level
        is truncated to a whole level before the span is computed, and the
        stored pitch and heading are only pushed when the move is not
        animated because camera changes would cancel a running animation.
        """

        center = self._resolve_position(position)
        zoom = int(min(self._state.zoom_level, MAX_CAMERA_ZOOM_LEVEL))
        span = projection.zoom_level_to_span(center, zoom, self._surface.bounds_size)
        self._surface.set_region(Region(center, span), animated)

        if not animated:
            camera = replace(self._surface.camera, pitch=self._state.pitch, heading=self._state.heading)
            self._surface.set_camera(camera, False)
            self._notify_camera(camera)

    # ------------------------------------------------------------------
    def zoom_in(self, animated: bool) -> None:
        """Step one level closer, lifting levels below 2 up to 2 first."""

        start = max(self._state.zoom_level, ZOOM_SNAP_LEVEL)
        if start + 1.0 > self._state.max_zoom_level:
            return
        self._state.zoom_level = start + 1.0
        self._apply_current(animated)

    # ------------------------------------------------------------------
    def zoom_out(self, animated: bool) -> None:
        """Step one level away, collapsing to level 0 at or below level 2."""

        if self._state.zoom_level - 1.0 < self._state.min_zoom_level:
            return
        self._state.zoom_level -= 1.0
        if projection.round_half_away(self._state.zoom_level) <= ZOOM_SNAP_LEVEL:
            self._state.zoom_level = 0.0
        self._apply_current(animated)

    # ------------------------------------------------------------------
    def zoom_by(self, delta: float, animated: bool) -> None:
        """Change the zoom level by *delta*, saturating at the bounds."""

        self._state.zoom_level = self._state.clamp_zoom(self._state.zoom_level + delta)
        self._apply_current(animated)

    # ------------------------------------------------------------------
    def zoom_to(self, level: float, animated: bool) -> None:
        """Jump to *level*, saturating at the bounds."""

        self._state.zoom_level = self._state.clamp_zoom(level)
        self._apply_current(animated)

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------
    def set_min_zoom_level(self, value: float) -> None:
        """Store a new lower bound and pull the camera up to it if needed."""

        self._state.min_zoom_level = float(value)
        if self._state.zoom_level < self._state.min_zoom_level:
            self._state.zoom_level = self._state.min_zoom_level
            self._apply_current(False)

    # ------------------------------------------------------------------
    def set_max_zoom_level(self, value: float) -> None:
        """Store a new upper bound and pull the camera back to it if needed."""

        self._state.max_zoom_level = float(value)
        if self._state.zoom_level > self._state.max_zoom_level:
            self._state.zoom_level = self._state.max_zoom_level
            self._apply_current(False)

    # ------------------------------------------------------------------
    def min_max_zoom_levels(self) -> list[float]:
        return self._state.min_max()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_visible_region(self) -> dict[str, list[float]]:
        """Return the north-east and south-west corners of the visible area."""

        return projection.visible_rect_to_bounds(self._surface.visible_rect)

    # ------------------------------------------------------------------
    def resync(self) -> float:
        """Recompute the zoom level from the region the surface shows.

        Gestures change the region behind the engine's back, so the stored
        level is overwritten with the derived one.  While the surface has no
        width, or shows an empty span, the stored level is kept.
        """

        size = self._surface.bounds_size
        if size.width <= 0:
            return self._state.zoom_level
        region = self._surface.region
        try:
            zoom = projection.region_to_zoom_level(region.center, region.span, size.width)
        except ValueError as exc:
            logger.debug("Keeping zoom level %.2f: %s", self._state.zoom_level, exc)
            return self._state.zoom_level
        self._state.zoom_level = zoom
        return zoom

    # ------------------------------------------------------------------
    def get_zoom_level(self) -> float:
        """Return the zoom level of the region currently on screen."""

        return self.resync()

    # ------------------------------------------------------------------
    def apply_layout(self) -> None:
        """Re-apply the stored camera once the surface has a new size."""

        self._apply_current(False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _resolve_position(self, position: CameraPosition) -> GeoPoint:
        """Fold *position* into the zoom state and return the target centre."""

        center = position.target or self._surface.camera.center
        zoom = self._state.zoom_level if position.zoom is None else position.zoom
        self._state.zoom_level = self._state.clamp_zoom(zoom)
        if position.pitch is not None:
            self._state.set_pitch(position.pitch)
        if position.heading is not None:
            self._state.set_heading(position.heading)
        return center

    # ------------------------------------------------------------------
    def _apply_current(self, animated: bool) -> None:
        self._apply_camera(self._surface.camera.center, self._state.zoom_level, animated)

    # ------------------------------------------------------------------
    def _apply_camera(self, center: GeoPoint, zoom_level: float, animated: bool) -> None:
        """Convert *zoom_level* into an altitude and push the camera."""

        zoom_level = min(zoom_level, MAX_CAMERA_ZOOM_LEVEL)
        altitude = projection.zoom_level_to_altitude(center, zoom_level, self._surface.bounds_size)
        camera = MapCamera(center, altitude, self._state.pitch, self._state.heading)
        logger.debug(
            "Camera to %s at zoom %.2f (altitude %.1f m, animated=%s)",
            center,
            zoom_level,
            altitude,
            animated,
        )
        self._surface.set_camera(camera, animated)
        self._notify_camera(camera)

    # ------------------------------------------------------------------
    def _notify_camera(self, camera: MapCamera) -> None:
        for callback in list(self._camera_listeners):
            try:
                callback(camera)
            except Exception:  # pragma: no cover - best effort notification
                logger.exception("Camera listener failed")


__all__ = ["CameraController"]
