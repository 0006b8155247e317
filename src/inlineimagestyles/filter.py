"""Replace editor image placeholders with rendered, styled image markup.

A placeholder is an ``<img>`` inserted by the rich-text editor that points at
a stored file through its uuid, either with the legacy
``data-editor-file-uuid`` attribute or with the
``data-entity-type="file" data-entity-uuid="..."`` pair. Each placeholder is
resolved to a file, rendered through the configured image style and swapped
for a ``<div class="field-type-image inline-image">`` holding the result.

Failures are handled per placeholder: the tag is left as it was, an
``InlineImageWarning`` is emitted and the remaining placeholders are still
processed.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Comment, NavigableString, PageElement, Tag

from .errors import InlineImageWarning, InvalidImage, StyleNotFound
from .rendering import serialize
from .services import FileReference, FileResolver, ImageRenderer, ImageStyleCatalog
from .settings import InlineImageSettings, LinkTarget

LEGACY_UUID_ATTRIBUTE = "data-editor-file-uuid"
ENTITY_TYPE_ATTRIBUTE = "data-entity-type"
ENTITY_UUID_ATTRIBUTE = "data-entity-uuid"

MARKER_CLASS = "inline-image"
WRAPPER_CLASSES = ("field-type-image", MARKER_CLASS)

_EXCLUDED_ATTRIBUTES = frozenset(
    {"src", LEGACY_UUID_ATTRIBUTE, ENTITY_TYPE_ATTRIBUTE, ENTITY_UUID_ATTRIBUTE}
)
_ALIGN_CLASSES = {
    "align-left": "align-left",
    "align-center": "text-align-center",
    "align-right": "align-right",
}


@dataclass(frozen=True, slots=True)
class FilterResult:
    """Filtered text plus the cache tags collected from the renderer."""

    text: str
    cache_tags: frozenset[str] = field(default_factory=frozenset)
    skipped: tuple[str, ...] = ()


@dataclass(slots=True)
class ImageAttributes:
    """Pass-through attributes of a placeholder, with ``class`` as tokens."""

    values: dict[str, str]
    classes: list[str]
    align_class: str | None = None

    @classmethod
    def from_tag(cls, image: Tag) -> ImageAttributes:
        values: dict[str, str] = {}
        classes: list[str] = []
        for name, value in image.attrs.items():
            if name in _EXCLUDED_ATTRIBUTES:
                continue
            if name == "class":
                for token in _tokens(value):
                    if token not in classes:
                        classes.append(token)
                # keeps the attribute's position; the value comes from ``classes``
                values[name] = ""
                continue
            values[name] = _attribute_text(value)

        attributes = cls(values=values, classes=classes)
        attributes._pop_align_class()
        if MARKER_CLASS not in attributes.classes:
            attributes.classes.append(MARKER_CLASS)
        return attributes

    def add_dimensions(self, file: FileReference) -> None:
        """Fill in missing width/height from the file's intrinsic size."""

        for name, dimension in (("width", file.width), ("height", file.height)):
            if dimension is not None and name not in self.values:
                self.values[name] = str(dimension)

    def as_mapping(self) -> dict[str, str]:
        mapping: dict[str, str] = {}
        for name, value in self.values.items():
            mapping[name] = " ".join(self.classes) if name == "class" else value
        if "class" not in mapping:
            mapping["class"] = " ".join(self.classes)
        return mapping

    def wrapper_classes(self) -> list[str]:
        classes = list(WRAPPER_CLASSES)
        if self.align_class:
            classes.append(self.align_class)
        return classes

    def _pop_align_class(self) -> None:
        kept: list[str] = []
        for token in self.classes:
            replacement = _ALIGN_CLASSES.get(token.lower())
            if replacement is None:
                kept.append(token)
            else:
                self.align_class = replacement
        self.classes = kept


class InlineImageFilter:
    """Apply image styles to inline images in rendered HTML."""

    def __init__(
        self,
        resolver: FileResolver,
        renderer: ImageRenderer,
        *,
        styles: ImageStyleCatalog | None = None,
        settings: InlineImageSettings | None = None,
    ) -> None:
        self._resolver = resolver
        self._renderer = renderer
        self._styles = styles
        self.settings = settings or InlineImageSettings()

    def transform(self, html: str, settings: InlineImageSettings | None = None) -> str:
        """Return ``html`` with every resolvable placeholder replaced."""

        return self._process(html, settings).text

    def process(
        self, text: str, settings: InlineImageSettings | None = None
    ) -> FilterResult:
        """Filter ``text`` and report cache tags and skipped uuids."""

        return self._process(text, settings)

    def _process(
        self, text: str, settings: InlineImageSettings | None
    ) -> FilterResult:
        settings = settings or self.settings
        soup = BeautifulSoup(text, "html.parser")

        placeholders: list[tuple[Tag, str]] = []
        for image in soup.find_all("img"):
            uuid = placeholder_uuid(image)
            if uuid:
                placeholders.append((image, uuid))
        if not placeholders:
            return FilterResult(text=text)

        cache_tags: set[str] = set()
        skipped: list[str] = []
        for image, uuid in placeholders:
            try:
                wrapper, tags = self._build_wrapper(soup, image, uuid, settings)
            except Exception as exc:  # reported per placeholder, which stays as is
                skipped.append(uuid)
                warnings.warn(
                    f"Inline image '{uuid}' left untouched: {exc}",
                    InlineImageWarning,
                    stacklevel=3,
                )
                continue
            image.replace_with(wrapper)
            cache_tags.update(tags)

        if len(skipped) == len(placeholders):
            return FilterResult(text=text, skipped=tuple(skipped))
        return FilterResult(
            text=serialize(soup),
            cache_tags=frozenset(cache_tags),
            skipped=tuple(skipped),
        )

    def _build_wrapper(
        self,
        soup: BeautifulSoup,
        image: Tag,
        uuid: str,
        settings: InlineImageSettings,
    ) -> tuple[Tag, frozenset[str]]:
        attributes = ImageAttributes.from_tag(image)
        file = self._resolver.resolve(uuid)
        if settings.uses_original_style:
            attributes.add_dimensions(file)

        rendered = self._renderer.render(
            file,
            attributes.as_mapping(),
            settings.inline_image_style,
            self._link_url(file, settings),
        )
        nodes = rendered_nodes(rendered.markup)
        if not nodes:
            raise InvalidImage(f"Renderer produced no markup for file '{uuid}'")

        wrapper = soup.new_tag(
            "div", attrs={"class": " ".join(attributes.wrapper_classes())}
        )
        for node in nodes:
            wrapper.append(node)
        return wrapper, rendered.cache_tags

    def _link_url(
        self, file: FileReference, settings: InlineImageSettings
    ) -> str | None:
        target = settings.link_target
        if target is LinkTarget.NONE:
            return None
        if target is LinkTarget.ORIGINAL_IMAGE:
            return file.url
        if self._styles is None:
            raise StyleNotFound(settings.inline_image_link)
        return self._styles.build_url(settings.inline_image_link, file)


def placeholder_uuid(image: Tag) -> str | None:
    """Return the file uuid referenced by an editor placeholder, if any."""

    if image.name != "img":
        return None
    uuid = _attribute_text(image.get(LEGACY_UUID_ATTRIBUTE)).strip()
    if uuid:
        return uuid
    if _attribute_text(image.get(ENTITY_TYPE_ATTRIBUTE)).strip() != "file":
        return None
    return _attribute_text(image.get(ENTITY_UUID_ATTRIBUTE)).strip() or None


def rendered_nodes(markup: str) -> list[PageElement]:
    """Parse rendered markup, dropping surrounding blank text and comments."""

    fragment = BeautifulSoup(markup, "html.parser")
    nodes = list(fragment.contents)
    while nodes and _is_insignificant(nodes[0]):
        nodes.pop(0)
    while nodes and _is_insignificant(nodes[-1]):
        nodes.pop()
    return nodes


def _is_insignificant(node: PageElement) -> bool:
    if isinstance(node, Comment):
        return True
    return isinstance(node, NavigableString) and not node.strip()


def _tokens(value: object) -> list[str]:
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [token for part in value for token in str(part).split()]
    return []


def _attribute_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(part) for part in value)
    return str(value)
