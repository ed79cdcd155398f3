"""REST API client - transport plus the options that shape reconciliation."""

from __future__ import annotations

import os
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, field_validator

from ._transport import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, SyncTransport

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class ClientOptions(BaseModel):
    """Server conventions the reconciliation core needs to know about."""

    model_config = ConfigDict(frozen=True)

    id_attribute: str = "id"
    copy_keys: tuple[str, ...] = ()
    create_returns_object: bool = True
    write_returns_object: bool = True
    xssi_prefix: str = ""
    debug: bool = False

    @field_validator("id_attribute")
    @classmethod
    def _id_attribute_not_empty(cls, value: str) -> str:
        if not value.strip("/"):
            raise ValueError("id_attribute must name a field")
        return value

    @field_validator("copy_keys", mode="before")
    @classmethod
    def _split_copy_keys(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(k.strip() for k in value.split(",") if k.strip())
        return value


class Client:
    """Synchronous client for a generic JSON REST API.

    Usage::

        client = Client(base_url="https://api.example.com", copy_keys=["version"])
        obj = RemoteObject(client, "/widgets", data='{"name": "foo"}')
        obj.create()
        client.close()

    Or as a context manager::

        with Client(base_url="https://api.example.com") as client:
            ...
    """

    def __init__(
        self,
        *,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        insecure: bool = False,
        max_retries: int = DEFAULT_MAX_RETRIES,
        id_attribute: str = "id",
        copy_keys: Sequence[str] | str = (),
        create_returns_object: bool = True,
        write_returns_object: bool = True,
        xssi_prefix: str = "",
        debug: bool = False,
    ) -> None:
        self.options = ClientOptions(
            id_attribute=id_attribute,
            copy_keys=copy_keys,
            create_returns_object=create_returns_object,
            write_returns_object=write_returns_object,
            xssi_prefix=xssi_prefix,
            debug=debug,
        )
        self._transport = SyncTransport(
            base_url=base_url,
            username=username,
            password=password,
            headers=headers,
            timeout=timeout,
            insecure=insecure,
            max_retries=max_retries,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> Client:
        """Build a client from ``REST_API_*`` environment variables.

        Keyword arguments take precedence over the environment.
        """
        env = os.environ
        kwargs: dict[str, Any] = {}
        if "REST_API_URI" in env:
            kwargs["base_url"] = env["REST_API_URI"]
        if "REST_API_USERNAME" in env:
            kwargs["username"] = env["REST_API_USERNAME"]
        if "REST_API_PASSWORD" in env:
            kwargs["password"] = env["REST_API_PASSWORD"]
        if "REST_API_INSECURE" in env:
            kwargs["insecure"] = env["REST_API_INSECURE"].strip().lower() in _TRUTHY
        if "REST_API_TIMEOUT" in env:
            kwargs["timeout"] = float(env["REST_API_TIMEOUT"])
        if "REST_API_ID_ATTRIBUTE" in env:
            kwargs["id_attribute"] = env["REST_API_ID_ATTRIBUTE"]
        if "REST_API_COPY_KEYS" in env:
            kwargs["copy_keys"] = env["REST_API_COPY_KEYS"]
        kwargs.update(overrides)
        if not kwargs.get("base_url"):
            raise ValueError(
                "Provide `base_url` or set REST_API_URI to configure the REST API client."
            )
        return cls(**kwargs)

    @property
    def transport(self) -> SyncTransport:
        return self._transport

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    @property
    def copy_keys(self) -> tuple[str, ...]:
        return self.options.copy_keys

    # -- Lifecycle -------------------------------------------------------------

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Client {self.base_url} copy_keys={list(self.copy_keys)}>"
