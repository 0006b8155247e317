"""Collaborator interfaces injected into the inline image filter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol


@dataclass(frozen=True, slots=True)
class FileReference:
    """A stored file resolved from its uuid."""

    uuid: str
    uri: str
    url: str
    mime_type: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True, slots=True)
class RenderedImage:
    """Markup produced for one image plus the cache tags it depends on."""

    markup: str
    cache_tags: frozenset[str] = field(default_factory=frozenset)


class FileResolver(Protocol):
    """Looks up files by uuid; raises ``FileNotFound`` when there is none."""

    def resolve(self, uuid: str) -> FileReference: ...


class ImageRenderer(Protocol):
    """Renders an image, optionally linked, for the given style."""

    def render(
        self,
        file: FileReference,
        attributes: Mapping[str, str],
        image_style: str,
        link_url: str | None,
    ) -> RenderedImage: ...


class ImageStyleCatalog(Protocol):
    """Named image styles known to the host."""

    def list_styles(self) -> dict[str, str]: ...

    def build_url(self, style_id: str, file: FileReference) -> str: ...

    def cache_tags(self, style_id: str) -> frozenset[str]: ...
