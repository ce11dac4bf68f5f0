import io
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PIL import Image

from apple_maps.models.types import CoordinateSpan, GeoPoint, MapCamera, MapRect, Region, ViewSize
from apple_maps.map_view.markers import Marker, MarkerIcon

CUPERTINO = GeoPoint(37.33, -122.03)


class RecordingSurface:
    """In-memory surface that records every call the engine makes.

    Unlike :class:`~apple_maps.map_view.surface.OffscreenMapSurface` the region
    and visible rect only change when a test assigns them, which lets tests
    simulate gestures the engine did not cause.
    """

    def __init__(self, width: float = 400.0, height: float = 800.0, center: GeoPoint = CUPERTINO) -> None:
        self.bounds_size = ViewSize(width, height)
        self.camera = MapCamera(center, 1000.0)
        self.region = Region(center, CoordinateSpan(0.01, 0.01))
        self.visible_rect = MapRect(0.0, 0.0, 0.0, 0.0)
        self.annotations: list[Any] = []
        self.camera_calls: list[tuple[MapCamera, bool]] = []
        self.region_calls: list[tuple[Region, bool]] = []
        self.added: list[list[Any]] = []
        self.removed: list[list[Any]] = []
        self.applied_options: list[dict[str, Any]] = []
        self.delegate = None

    def set_delegate(self, delegate) -> None:
        self.delegate = delegate

    def set_camera(self, camera: MapCamera, animated: bool) -> None:
        self.camera_calls.append((camera, animated))
        self.camera = camera

    def set_region(self, region: Region, animated: bool) -> None:
        self.region_calls.append((region, animated))
        self.region = region
        self.camera = replace(self.camera, center=region.center)

    def add_annotations(self, annotations) -> None:
        self.added.append(list(annotations))
        self.annotations.extend(annotations)

    def remove_annotations(self, annotations) -> None:
        self.removed.append(list(annotations))
        gone = {id(item) for item in annotations}
        self.annotations = [item for item in self.annotations if id(item) not in gone]

    def apply_options(self, options) -> None:
        self.applied_options.append(dict(options))


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    """Return a factory producing PNG icons of a given size and colour."""

    def factory(width: int = 20, height: int = 30, color: tuple[int, int, int, int] = (255, 0, 0, 255)) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
        return buffer.getvalue()

    return factory


@pytest.fixture
def make_marker(png_bytes) -> Callable[..., Marker]:
    def factory(marker_id: str, latitude: float = 37.33, longitude: float = -122.03, **icon_kwargs) -> Marker:
        icon = MarkerIcon.decode(png_bytes(**icon_kwargs))
        return Marker(marker_id, icon, GeoPoint(latitude, longitude))

    return factory
