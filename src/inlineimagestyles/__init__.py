"""Apply image styles to inline images embedded in rendered HTML."""

from __future__ import annotations

from .errors import (
    FileNotFound,
    InlineImageError,
    InlineImageWarning,
    InvalidImage,
    StyleNotFound,
)
from .filter import FilterResult, InlineImageFilter
from .rendering import ImageFormatterRenderer
from .services import FileReference, RenderedImage
from .settings import (
    INLINE_IMAGE_STYLE_ORIGINAL,
    LINK_TO_NOTHING,
    LINK_TO_ORIGINAL_IMAGE,
    InlineImageSettings,
    LinkTarget,
    settings_from_mapping,
)
from .styles import StaticStyleCatalog

__all__ = [
    "FileNotFound",
    "FileReference",
    "FilterResult",
    "INLINE_IMAGE_STYLE_ORIGINAL",
    "ImageFormatterRenderer",
    "InlineImageError",
    "InlineImageFilter",
    "InlineImageSettings",
    "InlineImageWarning",
    "InvalidImage",
    "LINK_TO_NOTHING",
    "LINK_TO_ORIGINAL_IMAGE",
    "LinkTarget",
    "RenderedImage",
    "StaticStyleCatalog",
    "StyleNotFound",
    "settings_from_mapping",
]
