"""Per-view zoom, pitch and heading bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import (
    DEFAULT_MAX_ZOOM_LEVEL,
    DEFAULT_MIN_ZOOM_LEVEL,
    DEFAULT_ZOOM_LEVEL,
    MAX_PITCH_DEGREES,
)


@dataclass
class ZoomState:
    """Mutable camera values owned by exactly one :class:`CameraController`.

    The record itself performs no side effects.  Bound changes that must move
    the camera go through :meth:`CameraController.set_min_zoom_level` and
    :meth:`CameraController.set_max_zoom_level`.
    """

    zoom_level: float = DEFAULT_ZOOM_LEVEL
    min_zoom_level: float = DEFAULT_MIN_ZOOM_LEVEL
    max_zoom_level: float = DEFAULT_MAX_ZOOM_LEVEL
    pitch: float = 0.0
    heading: float = 0.0

    # ------------------------------------------------------------------
    def clamp_zoom(self, zoom_level: float) -> float:
        """Saturate *zoom_level* into ``[min_zoom_level, max_zoom_level]``."""

        if zoom_level < self.min_zoom_level:
            return self.min_zoom_level
        if zoom_level > self.max_zoom_level:
            return self.max_zoom_level
        return zoom_level

    # ------------------------------------------------------------------
    def set_pitch(self, pitch: float) -> None:
        """Store *pitch* limited to a top-down to horizon range."""

        self.pitch = max(0.0, min(MAX_PITCH_DEGREES, float(pitch)))

    # ------------------------------------------------------------------
    def set_heading(self, heading: float) -> None:
        """Store *heading* wrapped into ``[0, 360)`` degrees."""

        self.heading = float(heading) % 360.0

    # ------------------------------------------------------------------
    def min_max(self) -> list[float]:
        return [self.min_zoom_level, self.max_zoom_level]


__all__ = ["ZoomState"]
