"""REST API client and its transport."""

from .client import Client, ClientOptions

__all__ = ["Client", "ClientOptions"]
