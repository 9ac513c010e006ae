"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from configbind.drivers import DriverRegistry
from configbind.object_registry import ObjectRegistry
from tests.helpers.stub_targets import StubDriver


@pytest.fixture(autouse=True)
def _isolate_configuration_file(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's CONFIGBIND_CONFIGURATION_FILE out of the tests."""
    monkeypatch.delenv("CONFIGBIND_CONFIGURATION_FILE", raising=False)


@pytest.fixture
def stub_driver() -> StubDriver:
    return StubDriver()


@pytest.fixture
def driver_registry(stub_driver: StubDriver) -> DriverRegistry:
    registry = DriverRegistry()
    registry.register(stub_driver)
    return registry


@pytest.fixture
def object_registry() -> ObjectRegistry:
    return ObjectRegistry()
