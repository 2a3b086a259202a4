"""Exception types raised while assembling thumbnail parameters."""

from __future__ import annotations

__all__ = [
    "GeometryError",
    "ParameterArgumentError",
    "ParameterReferenceError",
    "ParameterStateError",
    "ThumbnailParameterError",
]


class ThumbnailParameterError(Exception):
    """Base class for errors raised by the parameter builder."""


class ParameterArgumentError(ThumbnailParameterError, ValueError):
    """Raised when a setter receives a malformed scalar value."""


class ParameterReferenceError(ThumbnailParameterError, TypeError):
    """Raised when ``None`` is supplied where a filter list or resizer is required."""


class ParameterStateError(ThumbnailParameterError, RuntimeError):
    """Raised when finalization is requested before any sizing strategy is set."""


class GeometryError(ValueError):
    """Raised when a source region cannot be resolved against an image."""
