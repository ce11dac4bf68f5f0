"""Schema helpers for the map options sent with ``map#update``."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping, Optional

from jsonschema import Draft202012Validator

from .config import OPTIONS_SCHEMA_ID
from .errors import InvalidOptionsError
from .utils.logging import get_logger

logger = get_logger(__name__)

MAP_TYPES: tuple[str, ...] = ("standard", "satellite", "hybrid")
TRACKING_MODES: tuple[str, ...] = ("none", "follow", "followWithHeading")

_NULLABLE_NUMBER: dict[str, Any] = {"type": ["number", "null"]}

OPTIONS_SCHEMA: dict[str, Any] = {
    "$id": OPTIONS_SCHEMA_ID,
    "type": "object",
    "properties": {
        "compassEnabled": {"type": "boolean"},
        "padding": {
            "type": "array",
            "items": {"type": "number"},
            "maxItems": 4,
        },
        "mapType": {"type": "integer", "minimum": 0, "maximum": len(MAP_TYPES) - 1},
        "trafficEnabled": {"type": "boolean"},
        "rotateGesturesEnabled": {"type": "boolean"},
        "scrollGesturesEnabled": {"type": "boolean"},
        "pitchGesturesEnabled": {"type": "boolean"},
        "zoomGesturesEnabled": {"type": "boolean"},
        "myLocationEnabled": {"type": "boolean"},
        "myLocationButtonEnabled": {"type": "boolean"},
        "trackingMode": {"type": "integer", "minimum": 0, "maximum": len(TRACKING_MODES) - 1},
        "minMaxZoomPreference": {
            "type": "array",
            "prefixItems": [_NULLABLE_NUMBER, _NULLABLE_NUMBER],
            "minItems": 2,
            "maxItems": 2,
        },
    },
    "additionalProperties": True,
}

DEFAULT_OPTIONS: dict[str, Any] = {
    "compassEnabled": True,
    "padding": [0.0, 0.0, 0.0, 0.0],
    "mapType": 0,
    "trafficEnabled": False,
    "rotateGesturesEnabled": True,
    "scrollGesturesEnabled": True,
    "pitchGesturesEnabled": True,
    "zoomGesturesEnabled": True,
    "myLocationEnabled": False,
    "myLocationButtonEnabled": False,
    "trackingMode": 0,
}

_validator = Draft202012Validator(OPTIONS_SCHEMA)


def merge_options(
    current: Optional[Mapping[str, Any]],
    update: object,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Fold *update* into *current* one key at a time.

    Returns ``(merged, accepted)`` where ``accepted`` holds only the keys from
    *update* that passed validation.  Keys with an invalid value are logged
    and skipped so the remaining options still apply.
    """

    if not isinstance(update, Mapping):
        raise InvalidOptionsError(f"options must be a mapping, got {type(update).__name__}")

    merged = deepcopy(dict(current)) if current is not None else deepcopy(DEFAULT_OPTIONS)
    accepted: dict[str, Any] = {}
    for key, value in update.items():
        if not isinstance(key, str):
            logger.warning("Ignoring option with non-string key %r", key)
            continue
        errors = list(_validator.iter_errors({key: value}))
        if errors:
            logger.warning("Ignoring option %s=%r: %s", key, value, errors[0].message)
            continue
        accepted[key] = deepcopy(value)
    merged.update(accepted)
    return merged, accepted


def zoom_preference(options: Mapping[str, Any]) -> tuple[Optional[float], Optional[float]]:
    """Return the ``(min, max)`` zoom preference carried by *options*."""

    preference = options.get("minMaxZoomPreference")
    if not preference:
        return None, None
    minimum, maximum = preference[0], preference[1]
    return (
        float(minimum) if minimum is not None else None,
        float(maximum) if maximum is not None else None,
    )


__all__ = [
    "DEFAULT_OPTIONS",
    "MAP_TYPES",
    "OPTIONS_SCHEMA",
    "TRACKING_MODES",
    "merge_options",
    "zoom_preference",
]
