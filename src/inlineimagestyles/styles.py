"""Static image-style catalog and URL derivation.

Files are addressed by stream-wrapper URIs such as ``public://2024/cat.jpg``.
The ``thumbnail`` derivative of that file lives at
``<files_base_url>/styles/thumbnail/public/2024/cat.jpg``.
"""

from __future__ import annotations

from typing import Mapping

from .errors import StyleNotFound
from .services import FileReference

_SCHEME_SEPARATOR = "://"
_DEFAULT_SCHEME = "public"


class StaticStyleCatalog:
    """Image styles declared up front as an ordered id -> label mapping."""

    CACHE_TAG_PREFIX = "config:image.style."

    def __init__(self, styles: Mapping[str, str], *, files_base_url: str) -> None:
        self._styles = dict(styles)
        self._files_base_url = files_base_url.rstrip("/")

    def list_styles(self) -> dict[str, str]:
        return dict(self._styles)

    def build_url(self, style_id: str, file: FileReference) -> str:
        if style_id not in self._styles:
            raise StyleNotFound(style_id)
        scheme, path = _split_uri(file.uri)
        return f"{self._files_base_url}/styles/{style_id}/{scheme}/{path}"

    def cache_tags(self, style_id: str) -> frozenset[str]:
        if style_id not in self._styles:
            raise StyleNotFound(style_id)
        return frozenset({f"{self.CACHE_TAG_PREFIX}{style_id}"})


def _split_uri(uri: str) -> tuple[str, str]:
    if _SCHEME_SEPARATOR not in uri:
        return _DEFAULT_SCHEME, uri.lstrip("/")
    scheme, path = uri.split(_SCHEME_SEPARATOR, 1)
    return scheme.lower(), path.lstrip("/")
