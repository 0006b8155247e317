"""Filter settings as stored by the host's plugin configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .errors import StyleNotFound
from .services import ImageStyleCatalog

INLINE_IMAGE_STYLE_ORIGINAL = ""

LINK_TO_NOTHING = ""
LINK_TO_ORIGINAL_IMAGE = "@"


class LinkTarget(Enum):
    NONE = "none"
    ORIGINAL_IMAGE = "original_image"
    STYLE = "style"


@dataclass(frozen=True, slots=True)
class InlineImageSettings:
    """Structured representation of the two filter settings."""

    inline_image_style: str = INLINE_IMAGE_STYLE_ORIGINAL
    inline_image_link: str = LINK_TO_NOTHING

    @property
    def uses_original_style(self) -> bool:
        return self.inline_image_style == INLINE_IMAGE_STYLE_ORIGINAL

    @property
    def link_target(self) -> LinkTarget:
        """Classify ``inline_image_link`` into nothing, original image or a style."""

        if self.inline_image_link == LINK_TO_NOTHING:
            return LinkTarget.NONE
        if self.inline_image_link == LINK_TO_ORIGINAL_IMAGE:
            return LinkTarget.ORIGINAL_IMAGE
        return LinkTarget.STYLE

    def validate(self, catalog: ImageStyleCatalog) -> None:
        """Raise ``StyleNotFound`` if a configured style is missing from the catalog."""

        known = catalog.list_styles()
        if not self.uses_original_style and self.inline_image_style not in known:
            raise StyleNotFound(self.inline_image_style)
        if (
            self.link_target is LinkTarget.STYLE
            and self.inline_image_link not in known
        ):
            raise StyleNotFound(self.inline_image_link)


def settings_from_mapping(values: Mapping[str, Any] | None) -> InlineImageSettings:
    """Build settings from the host's configuration mapping."""

    values = values or {}
    return InlineImageSettings(
        inline_image_style=_setting_value(values, "inline_image_style"),
        inline_image_link=_setting_value(values, "inline_image_link"),
    )


def image_style_options(catalog: ImageStyleCatalog) -> dict[str, str]:
    """Options for the "Inline image style" setting."""

    return {
        INLINE_IMAGE_STYLE_ORIGINAL: "Show the original image",
        **catalog.list_styles(),
    }


def link_target_options(catalog: ImageStyleCatalog) -> dict[str, str]:
    """Options for the "Link image to" setting."""

    return {
        LINK_TO_NOTHING: "Nothing",
        LINK_TO_ORIGINAL_IMAGE: "The original image",
        **catalog.list_styles(),
    }


def _setting_value(values: Mapping[str, Any], key: str) -> str:
    value = values.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"Setting '{key}' must be a string, got {type(value).__name__}")
    return value.strip()
