"""Custom exception hierarchy for the map engine."""

from __future__ import annotations


class AppleMapsError(Exception):
    """Base class for all custom errors raised by the map engine."""


class MethodNotImplementedError(AppleMapsError):
    """Raised when the host invokes a command the engine does not know."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Method not implemented: {method}")
        self.method = method


class MalformedPayloadError(AppleMapsError):
    """Raised when a command payload is missing fields or has the wrong shape."""


class InvalidOptionsError(AppleMapsError):
    """Raised when a map options mapping cannot be interpreted at all."""


class ScriptError(AppleMapsError):
    """Raised when a command replay script cannot be loaded."""


__all__ = [
    "AppleMapsError",
    "InvalidOptionsError",
    "MalformedPayloadError",
    "MethodNotImplementedError",
    "ScriptError",
]
