from __future__ import annotations


class InvalidStateError(RuntimeError):
    """Raised when an operation is not allowed for the current state of a shape."""


class InvalidFormatError(ValueError):
    """Raised when coordinate text cannot be parsed into a bounding box."""


class UnsupportedShapeError(NotImplementedError):
    """Raised when a shape operation receives something other than a BBox or Circle."""
