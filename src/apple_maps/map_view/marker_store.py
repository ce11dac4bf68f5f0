"""Keyed set of displayed markers reconciled against the surface."""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Optional

from ..utils.logging import get_logger
from .markers import Marker, PointAnnotation
from .surface import MapSurface

logger = get_logger(__name__)


class MarkerStore:
    """Own the ``id -> annotation`` mapping for engine-created markers.

    ``add`` and ``replace`` deliberately differ: ``add`` never touches an id
    that is already displayed, while ``replace`` recreates every annotation,
    including ids present before and after the call.
    """

    def __init__(self, surface: MapSurface, markers: Optional[Iterable[Marker]] = None) -> None:
        self._surface = surface
        self._annotations: dict[str, PointAnnotation] = {}
        self._listeners: list[Callable[[frozenset[str]], None]] = []
        if markers:
            self.add(markers)

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._annotations)

    # ------------------------------------------------------------------
    def __contains__(self, marker_id: object) -> bool:
        return marker_id in self._annotations

    # ------------------------------------------------------------------
    def ids(self) -> frozenset[str]:
        """Return the ids of every marker currently displayed."""

        return frozenset(self._annotations)

    # ------------------------------------------------------------------
    def annotation(self, marker_id: str) -> Optional[PointAnnotation]:
        """Return the annotation shown for *marker_id*, if any."""

        return self._annotations.get(marker_id)

    # ------------------------------------------------------------------
    def add_change_listener(self, callback: Callable[[frozenset[str]], None]) -> None:
        """Register *callback* to receive the id set after each change."""

        if callback not in self._listeners:
            self._listeners.append(callback)

    # ------------------------------------------------------------------
    def add(self, markers: Iterable[Marker]) -> list[str]:
        """Display *markers* whose ids are not shown yet.

        Returns the ids that were added.  The first marker for an id wins
        until that id is removed.
        """

        created = self._materialize(markers, self._annotations)
        if not created:
            return []
        self._surface.add_annotations(list(created.values()))
        self._annotations.update(created)
        self._notify()
        return list(created)

    # ------------------------------------------------------------------
    def remove(self, ids: Iterable[str]) -> list[str]:
        """Stop displaying *ids*; unknown ids are ignored."""

        removed: dict[str, PointAnnotation] = {}
        for marker_id in ids:
            annotation = self._annotations.pop(marker_id, None)
            if annotation is not None:
                removed[marker_id] = annotation
        if not removed:
            return []
        self._surface.remove_annotations(list(removed.values()))
        self._notify()
        return list(removed)

    # ------------------------------------------------------------------
    def replace(self, markers: Iterable[Marker]) -> list[str]:
        """Clear everything and display *markers* as fresh annotations.

        The new mapping is swapped in before the surface is touched and
        listeners hear about the result once, so no empty intermediate state
        is reported.
        """

        stale = self._displayed_annotations()
        created = self._materialize(markers, {})
        self._annotations = dict(created)
        if stale:
            self._surface.remove_annotations(stale)
        if created:
            self._surface.add_annotations(list(created.values()))
        if stale or created:
            self._notify()
        return list(created)

    # ------------------------------------------------------------------
    def clear(self) -> None:
        """Remove every annotation on the surface, tracked or not."""

        stale = self._displayed_annotations()
        self._annotations = {}
        if stale:
            self._surface.remove_annotations(stale)
            self._notify()

    # ------------------------------------------------------------------
    def _displayed_annotations(self) -> list[PointAnnotation]:
        """Return tracked annotations plus anything else the surface shows."""

        seen: set[int] = set()
        annotations: list = []
        for annotation in [*self._surface.annotations, *self._annotations.values()]:
            if id(annotation) in seen:
                continue
            seen.add(id(annotation))
            annotations.append(annotation)
        return annotations

    # ------------------------------------------------------------------
    @staticmethod
    def _materialize(
        markers: Iterable[Marker],
        existing: Mapping[str, PointAnnotation],
    ) -> dict[str, PointAnnotation]:
        created: dict[str, PointAnnotation] = {}
        for marker in markers:
            if marker.id in existing or marker.id in created:
                logger.debug("Marker %r already displayed; keeping the first one", marker.id)
                continue
            created[marker.id] = PointAnnotation.from_marker(marker)
        return created

    # ------------------------------------------------------------------
    def _notify(self) -> None:
        ids = self.ids()
        for callback in list(self._listeners):
            try:
                callback(ids)
            except Exception:  # pragma: no cover - best effort notification
                logger.exception("Marker listener failed")


__all__ = ["MarkerStore"]
