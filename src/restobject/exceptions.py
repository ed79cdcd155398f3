"""Typed exceptions for REST object reconciliation."""

from __future__ import annotations

from typing import Any


class RestObjectError(Exception):
    """Base exception for all restobject errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ValidationError(RestObjectError):
    """Caller-supplied input is malformed (bad JSON, bad import id, non-object data)."""


class RemoteError(RestObjectError):
    """The server answered with a non-success status, or the request never completed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body)
        self.method = method
        self.url = url


class NotFoundError(RemoteError):
    """404 Not Found - the object does not exist on the server."""


class AuthenticationError(RemoteError):
    """401 Unauthorized - invalid or missing credentials."""


class ForbiddenError(RemoteError):
    """403 Forbidden - insufficient permissions."""
