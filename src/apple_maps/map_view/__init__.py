"""Public package interface for the map view engine components.

``MapController`` lives one level up because it depends on Qt; importing this
package only needs the pure-Python pieces and Pillow.
"""

from .camera_controller import CameraController
from .marker_store import MarkerStore
from .markers import Marker, MarkerIcon, PointAnnotation
from .surface import MapSurface, OffscreenMapSurface, SurfaceDelegate
from .zoom_state import ZoomState

__all__ = [
    "CameraController",
    "MapSurface",
    "Marker",
    "MarkerIcon",
    "MarkerStore",
    "OffscreenMapSurface",
    "PointAnnotation",
    "SurfaceDelegate",
    "ZoomState",
]
