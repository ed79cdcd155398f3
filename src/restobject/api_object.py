"""Remote object reconciliation - one managed REST resource instance."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from .exceptions import NotFoundError, RemoteError, RestObjectError, ValidationError
from .render import display, flatten

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)

_NO_BODY = object()


class RemoteObject:
    """An object living at ``path/id`` on a JSON REST API.

    ``desired_data`` is what the caller wants the object to look like and is
    sent on create and update. ``observed_data`` is whatever the server last
    returned, replaced wholesale after every successful round trip.

    Instances are cheap and meant to be built fresh for every operation::

        obj = RemoteObject(client, "/widgets", data='{"name": "foo"}')
        obj.create()
        obj.id            # assigned by the server
        obj.observed_data # server's view of the object
    """

    def __init__(
        self,
        client: Client,
        path: str,
        id: str = "",
        data: str = "",
        *,
        debug: bool = False,
        extension: str = "",
    ) -> None:
        self._client = client
        self._path = path
        self._extension = extension or ""
        self.id = str(id) if id else ""
        self.debug = debug or client.options.debug
        self.observed_data: dict[str, Any] = {}

        if data and data.strip():
            try:
                self.desired_data: Any = json.loads(data)
            except ValueError as exc:
                raise ValidationError(f"Data for {path} is not valid JSON: {exc}") from exc
        else:
            self.desired_data = {}

        self._trace("Constructed object:\n%s", self)

    # -- Identity --------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def extension(self) -> str:
        return self._extension

    @property
    def url(self) -> str:
        """Item endpoint once the id is known, otherwise the collection endpoint."""
        if self.id:
            return f"{self._path}/{self.id}{self._extension}"
        return self._path

    @property
    def api_data(self) -> dict[str, str]:
        """``observed_data`` with every value rendered as a display string."""
        return flatten(self.observed_data)

    # -- Operations ------------------------------------------------------------

    def create(self) -> None:
        """POST ``desired_data`` to the collection and adopt the server's id."""
        options = self._client.options
        declared_id = self._find_id(self.desired_data)
        if not options.create_returns_object and declared_id is None:
            raise ValidationError(
                f"Server does not return objects on create and the data for {self._path} "
                f"has no '{options.id_attribute}' to read it back by"
            )

        response = self._send("POST", self._path, self.desired_data)

        data = self._parse(response) if options.create_returns_object else None
        if data is None:
            if declared_id is None:
                raise RemoteError(
                    f"Create of {self._path} returned no object and the data declares no "
                    f"'{options.id_attribute}'",
                    status_code=response.status_code,
                    body=response.text,
                )
            previous_id = self.id
            self.id = declared_id
            try:
                self.read()
            except Exception:
                self.id = previous_id
                raise
            return

        new_id = self._find_id(data)
        if new_id is None:
            raise RemoteError(
                f"Create of {self._path} returned no '{options.id_attribute}' in the response",
                status_code=response.status_code,
                body=response.text,
            )
        self.id = new_id
        self.observed_data = data

    def read(self) -> None:
        """GET the item endpoint and replace ``observed_data``.

        Raises :class:`NotFoundError` when the server answers 404.
        """
        self._require_id("read")
        response = self._send("GET", self.url)
        data = self._parse(response)
        if data is None:
            raise RemoteError(
                f"Read of {self.url} returned an empty body",
                status_code=response.status_code,
                body=response.text,
            )
        self.observed_data = data

    def update(self) -> None:
        """PUT ``desired_data`` to the item endpoint.

        When the client declares copy keys, the object is read first and
        those keys are copied from ``observed_data`` into ``desired_data``
        so the server sees the values it handed out.
        """
        self._require_id("update")
        options = self._client.options
        if options.copy_keys:
            if not isinstance(self.desired_data, dict):
                raise ValidationError(
                    f"Cannot copy keys {list(options.copy_keys)} into non-object data "
                    f"for {self.url}"
                )
            self.read()
            self._copy_keys(options.copy_keys)

        response = self._send("PUT", self.url, self.desired_data)

        data = self._parse(response) if options.write_returns_object else None
        if data is None:
            self.read()
            return
        self.observed_data = data

    def delete(self) -> None:
        """DELETE the item endpoint. An object that is already gone counts as deleted."""
        self._require_id("delete")
        try:
            self._send("DELETE", self.url)
        except NotFoundError:
            self._trace("%s already absent; nothing to delete", self.url)

    def exists(self) -> bool:
        """Whether a read succeeds.

        Every failure, including transport errors and unparseable bodies, is
        reported as "does not exist".
        """
        try:
            self.read()
        except RestObjectError as exc:
            logger.debug("Treating %s as absent: %s", self.url, exc)
            return False
        return True

    # -- Helpers ---------------------------------------------------------------

    def _require_id(self, operation: str) -> None:
        if not self.id:
            raise ValidationError(f"Cannot {operation} an object under {self._path} without an id")

    def _copy_keys(self, keys: tuple[str, ...]) -> None:
        for key in keys:
            if key in self.observed_data:
                self._trace("Copying '%s' from observed data into desired data", key)
                self.desired_data[key] = self.observed_data[key]

    def _find_id(self, data: Any) -> str | None:
        """Look up the id attribute, following ``/``-separated nested keys."""
        value = data
        for part in self._client.options.id_attribute.strip("/").split("/"):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        if value is None or isinstance(value, (dict, list)):
            return None
        return display(value)

    def _send(self, method: str, url: str, payload: Any = _NO_BODY) -> httpx.Response:
        content = json.dumps(payload) if payload is not _NO_BODY else None
        self._trace("Request %s %s body=%s", method, url, content)
        try:
            response = self._client.transport.request(method, url, content=content)
        except RestObjectError as exc:
            self._trace("Request %s %s failed: %s", method, url, exc)
            raise
        self._trace("Response %s %s: %s", response.status_code, url, response.text)
        return response

    def _parse(self, response: httpx.Response) -> dict[str, Any] | None:
        """Decode a response body into a field map; ``None`` for an empty body."""
        text = response.text
        prefix = self._client.options.xssi_prefix
        if prefix and text.startswith(prefix):
            text = text[len(prefix):]
        if not text.strip():
            return None
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise RemoteError(
                f"Response from {response.request.url} is not valid JSON: {exc}",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        if not isinstance(data, dict):
            raise RemoteError(
                f"Response from {response.request.url} is not a JSON object",
                status_code=response.status_code,
                body=response.text,
            )
        return data

    def _trace(self, msg: str, *args: Any) -> None:
        logger.log(logging.INFO if self.debug else logging.DEBUG, msg, *args)

    def __str__(self) -> str:
        return "\n".join(
            [
                f"path: {self._path}",
                f"id: {self.id}",
                f"extension: {self._extension}",
                f"debug: {self.debug}",
                f"desired_data: {json.dumps(self.desired_data, sort_keys=True)}",
                f"observed_data: {json.dumps(self.observed_data, sort_keys=True)}",
            ]
        )

    def __repr__(self) -> str:
        return f"<RemoteObject {self.url!r}>"
