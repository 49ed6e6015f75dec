"""Errors surfaced to callers of the detection engine."""


class ShapeSightError(Exception):
    """Base error for known ShapeSight failures."""


class InvalidImageError(ShapeSightError, ValueError):
    """Raised when a pixel buffer or encoded image cannot be used as input."""


class ImageTooLargeError(ShapeSightError):
    """Raised when an image exceeds the configured pixel limit."""
