"""Host-facing resource operations - one fresh RemoteObject per call.

Each function takes the resource's declared state as an immutable
:class:`ResourceData` and returns a new one; nothing is carried between
calls except what the host hands back in.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .api_object import RemoteObject
from .exceptions import ValidationError

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)


class ResourceData(BaseModel):
    """Declared and computed attributes of one managed API object."""

    model_config = ConfigDict(frozen=True)

    path: str
    data: str = ""
    id: str = ""
    debug: bool = False
    ext: str = ""
    api_data: dict[str, str] = Field(default_factory=dict)


def _build(client: Client, resource: ResourceData) -> RemoteObject:
    logger.debug("Building object for id '%s'", resource.id)
    return RemoteObject(
        client,
        resource.path,
        resource.id,
        resource.data,
        debug=resource.debug,
        extension=resource.ext,
    )


def _state(resource: ResourceData, obj: RemoteObject) -> ResourceData:
    return resource.model_copy(update={"id": obj.id, "api_data": obj.api_data})


def create_resource(client: Client, resource: ResourceData) -> ResourceData:
    obj = _build(client, resource)
    obj.create()
    return _state(resource, obj)


def read_resource(client: Client, resource: ResourceData) -> ResourceData:
    obj = _build(client, resource)
    obj.read()
    logger.debug("Read resource; returned id is '%s'", obj.id)
    return _state(resource, obj)


def update_resource(client: Client, resource: ResourceData) -> ResourceData:
    obj = _build(client, resource)
    obj.update()
    return _state(resource, obj)


def delete_resource(client: Client, resource: ResourceData) -> None:
    _build(client, resource).delete()


def resource_exists(client: Client, resource: ResourceData) -> bool:
    return _build(client, resource).exists()


def parse_import_id(import_id: str) -> tuple[str, str]:
    """Split ``/<full path from server root>/<object id>`` at the last ``/``."""
    path, sep, object_id = import_id.rpartition("/")
    if not sep:
        raise ValidationError(
            f"Invalid path to import api_object: '{import_id}'. "
            "Must be /<full path from server root>/<object id>"
        )
    return path, object_id


def import_resource(client: Client, import_id: str) -> list[ResourceData]:
    """Recover a resource from its full item path and read it from the server."""
    path, object_id = parse_import_id(import_id)
    resource = ResourceData(
        path=path,
        id=object_id,
        data=json.dumps({"id": object_id}),
        debug=True,
    )
    obj = _build(client, resource)
    logger.info("Importing object:\n%s", obj)
    obj.read()
    return [_state(resource, obj)]
