import pytest

from configbind.drivers import DriverRegistry, NoSuitableDriverError
from tests.helpers.stub_targets import StubDriver


def test_first_accepting_driver_wins():
    registry = DriverRegistry()
    first = StubDriver("stub:")
    second = StubDriver("stub:")
    registry.register(first)
    registry.register(second)

    assert registry.get_driver("stub:db") is first


def test_register_is_idempotent_and_deregister_removes():
    registry = DriverRegistry()
    driver = StubDriver()
    registry.register(driver)
    registry.register(driver)
    assert registry.drivers() == [driver]

    registry.deregister(driver)
    assert registry.drivers() == []


def test_no_suitable_driver():
    registry = DriverRegistry()
    registry.register(StubDriver("stub:"))
    with pytest.raises(NoSuitableDriverError):
        registry.get_driver("other:db")
