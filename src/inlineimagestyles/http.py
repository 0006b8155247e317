"""HTTP helpers and a JSON:API-backed file resolver."""

from __future__ import annotations

from http.cookiejar import CookieJar
from typing import Any, Mapping
from urllib.parse import quote, urljoin

import requests

from .errors import FileNotFound, InvalidImage
from .services import FileReference

_USER_AGENT = "inlineimagestyles/0.1 (+https://pypi.org/project/inlineimagestyles/)"
_DEFAULT_HEADERS = {
    "User-Agent": _USER_AGENT,
    "Accept": "application/vnd.api+json, application/json;q=0.9",
}
_DEFAULT_TIMEOUT = 10.0
_SESSION = requests.Session()


def configure_session(
    *,
    cookies: CookieJar | None = None,
    auth: tuple[str, str] | None = None,
) -> None:
    """Configure the default HTTP session."""

    global _SESSION
    _SESSION = requests.Session()
    if hasattr(_SESSION, "headers"):
        _SESSION.headers.update(_DEFAULT_HEADERS)
    if cookies is not None:
        for cookie in cookies:
            _SESSION.cookies.set_cookie(cookie)
    if auth is not None:
        _SESSION.auth = auth


def request(
    method: str,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    session: requests.Session | None = None,
    timeout: float | tuple[float, float] | None = _DEFAULT_TIMEOUT,
    **kwargs: Any,
) -> requests.Response:
    """Perform an HTTP request via requests with our defaults."""

    final_headers = dict(_DEFAULT_HEADERS)
    if headers:
        final_headers.update(headers)

    requester_session = session or _SESSION
    response = requester_session.request(
        method,
        url,
        headers=final_headers,
        timeout=timeout,
        **kwargs,
    )
    response.raise_for_status()
    return response


def get_json(url: str, **kwargs: Any) -> Any:
    """GET ``url`` and decode the JSON body."""

    return request("GET", url, **kwargs).json()


class JsonApiFileResolver:
    """Resolve file uuids through a JSON:API ``file--file`` resource."""

    RESOURCE_PATH = "jsonapi/file/file"

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float | tuple[float, float] | None = _DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        self._session = session
        self._timeout = timeout

    def resolve(self, uuid: str) -> FileReference:
        url = urljoin(self._base_url, f"{self.RESOURCE_PATH}/{quote(uuid, safe='')}")
        try:
            payload = get_json(url, session=self._session, timeout=self._timeout)
        except requests.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 404:
                raise FileNotFound(uuid) from exc
            raise
        return self._file_from_payload(uuid, payload)

    def _file_from_payload(self, uuid: str, payload: Any) -> FileReference:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise FileNotFound(uuid)

        attributes = data.get("attributes")
        if not isinstance(attributes, dict):
            raise InvalidImage(f"File '{uuid}' has no attributes")
        uri = attributes.get("uri")
        if not isinstance(uri, dict):
            raise InvalidImage(f"File '{uuid}' has no URI")
        value = uri.get("value")
        relative_url = uri.get("url")
        if not value or not relative_url:
            raise InvalidImage(f"File '{uuid}' has no URI")

        mime_type = attributes.get("filemime")
        if mime_type and not str(mime_type).startswith("image/"):
            raise InvalidImage(f"File '{uuid}' has MIME type {mime_type}, not an image")

        return FileReference(
            uuid=str(data.get("id") or uuid),
            uri=value,
            url=urljoin(self._base_url, relative_url),
            mime_type=mime_type,
        )


configure_session()
