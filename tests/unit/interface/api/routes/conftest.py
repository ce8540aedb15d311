"""Fixtures for API route tests: app on in-memory persistence."""

from typing import TypeVar

import pytest
from fastapi.testclient import TestClient

from huddle.interface.api.app import create_app
from tests.di import build_test_container

T = TypeVar("T")


class ApiHarness:
    """Test client plus access to the app's container on its event loop."""

    def __init__(self, client: TestClient, container) -> None:
        self.client = client
        self.container = container

    def get(self, dependency: type[T]) -> T:
        """Resolve an APP-scoped dependency."""
        return self.client.portal.call(self.container.get, dependency)

    def run(self, func, *args):
        """Run ``func`` (sync or async) on the app's event loop."""
        return self.client.portal.call(func, *args)


@pytest.fixture
def api():
    """App wired to in-memory repositories, one container per test."""
    container = build_test_container(with_fastapi=True)
    with TestClient(create_app(container)) as client:
        yield ApiHarness(client, container)
