"""Exceptions and warning categories raised while rendering inline images."""

from __future__ import annotations


class InlineImageError(Exception):
    """Base class for per-image failures; the filter skips the offending tag."""


class FileNotFound(InlineImageError, LookupError):
    """No file entity matches the placeholder's uuid."""

    def __init__(self, uuid: str) -> None:
        super().__init__(f"No file found for uuid '{uuid}'")
        self.uuid = uuid


class InvalidImage(InlineImageError, ValueError):
    """The resolved file cannot be rendered as an image."""


class StyleNotFound(InlineImageError, LookupError):
    """The configured image style does not exist (anymore)."""

    def __init__(self, style_id: str) -> None:
        super().__init__(f"Unknown image style '{style_id}'")
        self.style_id = style_id


class InlineImageWarning(UserWarning):
    """Emitted for every placeholder that was left untouched."""
