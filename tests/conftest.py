"""Shared fixtures for restobject tests."""

from __future__ import annotations

import pytest
import respx

import restobject


BASE_URL = "http://test-api.restobject.local"


@pytest.fixture()
def mock_api():
    """Activate a respx mock router scoped to the test API base URL."""
    with respx.mock(base_url=BASE_URL) as router:
        yield router


@pytest.fixture()
def client():
    """Create a client pointed at the test base URL."""
    c = restobject.Client(base_url=BASE_URL)
    yield c
    c.close()


@pytest.fixture()
def copy_keys_client():
    """Create a client that echoes ``version`` back on update."""
    c = restobject.Client(base_url=BASE_URL, copy_keys=["version"])
    yield c
    c.close()
