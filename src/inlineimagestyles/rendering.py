"""Default renderer producing plain ``<img>`` markup for a file."""

from __future__ import annotations

from typing import Mapping

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from .errors import InvalidImage, StyleNotFound
from .services import FileReference, ImageStyleCatalog, RenderedImage


class SourceOrderFormatter(HTMLFormatter):
    """Minimal HTML formatter that keeps attributes in insertion order."""

    def __init__(self) -> None:
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag):
        return list(tag.attrs.items())


SOURCE_ORDER = SourceOrderFormatter()


def serialize(node: Tag) -> str:
    """Serialize ``node`` without reordering attributes."""

    return node.decode(formatter=SOURCE_ORDER)


class ImageFormatterRenderer:
    """Render an image at a given style, optionally wrapped in a link."""

    def __init__(self, styles: ImageStyleCatalog | None = None) -> None:
        self._styles = styles

    def render(
        self,
        file: FileReference,
        attributes: Mapping[str, str],
        image_style: str,
        link_url: str | None,
    ) -> RenderedImage:
        if file.mime_type and not file.mime_type.startswith("image/"):
            raise InvalidImage(
                f"File '{file.uuid}' has MIME type {file.mime_type}, not an image"
            )

        cache_tags: frozenset[str] = frozenset()
        if image_style:
            if self._styles is None:
                raise StyleNotFound(image_style)
            src = self._styles.build_url(image_style, file)
            cache_tags = self._styles.cache_tags(image_style)
        else:
            src = file.url

        soup = BeautifulSoup("", "html.parser")
        image_attrs = {"src": src}
        image_attrs.update(
            (name, value) for name, value in attributes.items() if name != "src"
        )
        node = soup.new_tag("img", attrs=image_attrs)
        if link_url:
            anchor = soup.new_tag("a", attrs={"href": link_url})
            anchor.append(node)
            node = anchor

        return RenderedImage(markup=serialize(node), cache_tags=cache_tags)
