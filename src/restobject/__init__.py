"""restobject - manage arbitrary JSON REST API objects as declared resources."""

from .api_object import RemoteObject
from .client import Client, ClientOptions
from .exceptions import (
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    RemoteError,
    RestObjectError,
    ValidationError,
)
from .render import display, flatten
from .resource import (
    ResourceData,
    create_resource,
    delete_resource,
    import_resource,
    read_resource,
    resource_exists,
    update_resource,
)

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientOptions",
    "RemoteObject",
    "ResourceData",
    "create_resource",
    "read_resource",
    "update_resource",
    "delete_resource",
    "resource_exists",
    "import_resource",
    "display",
    "flatten",
    "RestObjectError",
    "ValidationError",
    "RemoteError",
    "NotFoundError",
    "AuthenticationError",
    "ForbiddenError",
]
