"""Command dispatcher that connects a host application to one map view."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from PySide6.QtCore import QObject, Signal

from .config import DEFAULT_SCREEN_SCALE
from .errors import InvalidOptionsError, MalformedPayloadError, MethodNotImplementedError
from .map_view.camera_controller import CameraController
from .map_view.camera_update import parse_camera_position
from .map_view.marker_store import MarkerStore
from .map_view.markers import parse_marker_payloads
from .map_view.surface import MapSurface
from .models.types import ViewSize
from .options import DEFAULT_OPTIONS, merge_options, zoom_preference
from .utils.logging import get_logger

logger = get_logger(__name__)

CAMERA_ON_IDLE = "camera#onIdle"
CAMERA_ON_MOVE_STARTED = "camera#onMoveStarted"


class MethodChannel(Protocol):
    """Outbound half of the host transport."""

    def invoke_method(self, method: str, arguments: Any) -> None:  # pragma: no cover - interface definition only
        ...


def _payload(arguments: object, key: str) -> object:
    """Return ``arguments[key]`` for mapping payloads, else the payload itself."""

    if isinstance(arguments, Mapping):
        return arguments.get(key)
    return arguments


def _as_list(value: object, what: str) -> list[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise MalformedPayloadError(f"{what} must be a list, got {type(value).__name__}")
    return list(value)


class MapController(QObject):
    """Interpret host commands for one map view and report view events.

    The controller registers itself as the surface delegate.  Region changes
    are forwarded to the host as ``camera#onMoveStarted`` and
    ``camera#onIdle`` without payload, and mirrored on Qt signals for
    in-process observers.
    """

    cameraMoveStarted = Signal()
    """Signal emitted when the visible region begins to change."""

    cameraIdle = Signal()
    """Signal emitted once the visible region settles."""

    cameraChanged = Signal(object)
    """Signal emitted with every :class:`MapCamera` pushed to the surface."""

    markersChanged = Signal(list)
    """Signal emitted with the sorted marker ids after the marker set changes."""

    def __init__(
        self,
        surface: MapSurface,
        *,
        channel: Optional[MethodChannel] = None,
        options: Optional[Mapping[str, Any]] = None,
        initial_camera_position: Optional[Mapping[str, Any]] = None,
        markers: Optional[Sequence[object]] = None,
        screen_scale: float = DEFAULT_SCREEN_SCALE,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._surface = surface
        self._channel = channel
        self._screen_scale = screen_scale
        self._camera = CameraController(surface)
        self._markers = MarkerStore(surface)
        self._camera.add_camera_listener(self.cameraChanged.emit)
        self._markers.add_change_listener(lambda ids: self.markersChanged.emit(sorted(ids)))
        self._options: dict[str, Any] = deepcopy(DEFAULT_OPTIONS)
        self._old_bounds: Optional[ViewSize] = None

        self._handlers: dict[str, Callable[[object], Any]] = {
            "map#update": self._handle_update,
            "camera#animate": lambda args: self._handle_camera(args, animated=True),
            "camera#move": lambda args: self._handle_camera(args, animated=False),
            "markers#add": self._handle_markers_add,
            "markers#replace": self._handle_markers_replace,
            "markers#remove": self._handle_markers_remove,
            "markers#clear": lambda _args: self._markers.clear(),
            "map#getVisibleRegion": lambda _args: self._camera.get_visible_region(),
            "camera#getZoomLevel": lambda _args: self._camera.get_zoom_level(),
            "map#getMinMaxZoomLevels": lambda _args: self._camera.min_max_zoom_levels(),
            "map#isCompassEnabled": lambda _args: bool(self._options.get("compassEnabled")),
            "map#isPitchGesturesEnabled": lambda _args: bool(self._options.get("pitchGesturesEnabled")),
            "map#isScrollGesturesEnabled": lambda _args: bool(self._options.get("scrollGesturesEnabled")),
            "map#isZoomGesturesEnabled": lambda _args: bool(self._options.get("zoomGesturesEnabled")),
            "map#isRotateGesturesEnabled": lambda _args: bool(self._options.get("rotateGesturesEnabled")),
            "map#isMyLocationButtonEnabled": lambda _args: bool(self._options.get("myLocationButtonEnabled")),
        }

        surface.set_delegate(self)

        if options is not None:
            self._handle_update({"options": options})
        if initial_camera_position is not None:
            try:
                position = parse_camera_position(initial_camera_position)
            except MalformedPayloadError as exc:
                logger.warning("Ignoring initial camera position: %s", exc)
            else:
                self._camera.set_center_region(position, False)
        if markers:
            self._markers.add(parse_marker_payloads(markers, self._screen_scale))

    # ------------------------------------------------------------------
    @property
    def camera(self) -> CameraController:
        return self._camera

    # ------------------------------------------------------------------
    @property
    def markers(self) -> MarkerStore:
        return self._markers

    # ------------------------------------------------------------------
    @property
    def options(self) -> dict[str, Any]:
        """Return a copy of the options currently in effect."""

        return deepcopy(self._options)

    # ------------------------------------------------------------------
    def methods(self) -> list[str]:
        """Return the command names this controller understands."""

        return sorted(self._handlers)

    # ------------------------------------------------------------------
    def handle_method_call(self, method: str, arguments: object = None) -> Any:
        """Run *method* and return its result for the host.

        Malformed payloads are dropped and reported as success (``None``).
        Only unknown method names raise :class:`MethodNotImplementedError`.
        """

        handler = self._handlers.get(method)
        if handler is None:
            raise MethodNotImplementedError(method)
        try:
            return handler(arguments)
        except MalformedPayloadError as exc:
            logger.debug("Dropping %s payload: %s", method, exc)
            return None

    # ------------------------------------------------------------------
    # Surface delegate
    # ------------------------------------------------------------------
    def region_will_change(self, animated: bool) -> None:
        self._invoke_host(CAMERA_ON_MOVE_STARTED)
        self.cameraMoveStarted.emit()

    # ------------------------------------------------------------------
    def region_did_change(self, animated: bool) -> None:
        self._invoke_host(CAMERA_ON_IDLE)
        self.cameraIdle.emit()

    # ------------------------------------------------------------------
    def bounds_did_change(self) -> None:
        """Re-apply options and camera once the surface has a new size.

        Spans and altitudes depend on the view size, so anything applied
        before the first layout is only correct after this runs.
        """

        size = self._surface.bounds_size
        if size == self._old_bounds:
            return
        self._old_bounds = size
        self._apply_options(self._options)
        self._camera.apply_layout()

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _handle_update(self, arguments: object) -> None:
        try:
            merged, accepted = merge_options(self._options, _payload(arguments, "options"))
        except InvalidOptionsError as exc:
            raise MalformedPayloadError(str(exc)) from exc
        self._options = merged
        self._apply_options(accepted)

    # ------------------------------------------------------------------
    def _handle_camera(self, arguments: object, *, animated: bool) -> None:
        self._camera.dispatch(_payload(arguments, "cameraUpdate"), animated)

    # ------------------------------------------------------------------
    def _handle_markers_add(self, arguments: object) -> None:
        payloads = _as_list(_payload(arguments, "markers"), "markers")
        self._markers.add(parse_marker_payloads(payloads, self._screen_scale))

    # ------------------------------------------------------------------
    def _handle_markers_replace(self, arguments: object) -> None:
        payloads = _as_list(_payload(arguments, "markers"), "markers")
        self._markers.replace(parse_marker_payloads(payloads, self._screen_scale))

    # ------------------------------------------------------------------
    def _handle_markers_remove(self, arguments: object) -> None:
        ids = _as_list(_payload(arguments, "markerIds"), "markerIds")
        self._markers.remove([marker_id for marker_id in ids if isinstance(marker_id, str)])

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _apply_options(self, options: Mapping[str, Any]) -> None:
        """Push zoom bounds to the camera and everything else to the surface."""

        minimum, maximum = zoom_preference(options)
        if minimum is not None:
            self._camera.set_min_zoom_level(minimum)
        if maximum is not None:
            self._camera.set_max_zoom_level(maximum)

        forwarded = {key: value for key, value in options.items() if key != "minMaxZoomPreference"}
        if forwarded:
            self._surface.apply_options(forwarded)

    # ------------------------------------------------------------------
    def _invoke_host(self, method: str) -> None:
        if self._channel is None:
            return
        self._channel.invoke_method(method, "")


__all__ = ["CAMERA_ON_IDLE", "CAMERA_ON_MOVE_STARTED", "MapController", "MethodChannel"]
