"""HTTP transport layer - wraps httpx with auth, retries, and error mapping."""

from __future__ import annotations

import logging
import time
from typing import Mapping

import httpx

from ..exceptions import (
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    RemoteError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_MAP: dict[int, type[RemoteError]] = {
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
}

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 0
_RETRYABLE = frozenset({408, 429, 502, 503, 504})

_DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _build_auth(username: str | None, password: str | None) -> httpx.BasicAuth | None:
    if username is None and password is None:
        return None
    return httpx.BasicAuth(username or "", password or "")


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return

    body = response.text
    status = response.status_code
    method = response.request.method
    url = str(response.request.url)

    exc_cls = _STATUS_MAP.get(status, RemoteError)
    raise exc_cls(
        f"Unexpected response code '{status}' for {method} {url}: {body}",
        status_code=status,
        body=body,
        method=method,
        url=url,
    )


class SyncTransport:
    """Synchronous HTTP transport using httpx."""

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        insecure: bool = False,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._max_retries = max_retries
        self._client = httpx.Client(
            base_url=base_url,
            auth=_build_auth(username, password),
            headers={**_DEFAULT_HEADERS, **(headers or {})},
            timeout=timeout,
            verify=not insecure,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    def request(
        self,
        method: str,
        path: str,
        *,
        content: str | None = None,
    ) -> httpx.Response:
        """Send one request and return the response if its status is a success.

        Non-success statuses raise the matching :class:`RemoteError` subclass
        carrying the status code and raw body. Connection failures and
        timeouts raise :class:`RemoteError` with no status code. A path that
        cannot form a URL raises :class:`ValidationError`.
        """
        url = self._full_url(path)
        last_exc: Exception | None = None
        for attempt in range(1 + self._max_retries):
            try:
                logger.debug("%s %s (attempt %d)", method, url, attempt + 1)
                response = self._client.request(method, path, content=content)
                if response.status_code in _RETRYABLE and attempt < self._max_retries:
                    _backoff(attempt, response)
                    continue
                _raise_for_status(response)
                return response
            except httpx.InvalidURL as exc:
                raise ValidationError(f"Invalid URL for {method} {path!r}: {exc}") from exc
            except httpx.HTTPError as exc:
                last_exc = exc
                if attempt < self._max_retries:
                    time.sleep(0.5 * 2**attempt)
                    continue
                raise RemoteError(
                    f"Request {method} {url} failed: {exc}",
                    method=method,
                    url=url,
                ) from exc
        raise RemoteError(
            f"Request {method} {url} failed after {self._max_retries + 1} attempts",
            method=method,
            url=url,
        ) from last_exc

    def _full_url(self, path: str) -> str:
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")

    def close(self) -> None:
        self._client.close()


def _get_backoff(attempt: int, response: httpx.Response) -> float:
    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            pass
    return 0.5 * 2**attempt


def _backoff(attempt: int, response: httpx.Response) -> None:
    time.sleep(_get_backoff(attempt, response))
