"""Tests for PoolDataSource sealing its configuration on first use."""

import pytest

from configbind.drivers import DriverRegistry
from configbind.exceptions import FactoryConstructionError, SealedConfigError, WriteRejectedError
from configbind.pool_config import PoolConfig
from configbind.pool_data_source import PoolDataSource
from configbind.property_binder import set_target_from_properties
from tests.helpers.stub_targets import StubConnection, StubDriver, StubLogWriter


def _config(**overrides):
    properties = {"url": "stub:db", "username": "app", "password": "pw", "dataSource.timeout": "5"}
    properties.update(overrides)
    return PoolConfig(properties)


class TestAcquire:
    def test_first_acquire_seals_config(self, driver_registry, stub_driver):
        config = _config()
        source = PoolDataSource(config, registry=driver_registry)
        assert not config.sealed

        connection = source.acquire()

        assert config.sealed
        assert connection.properties == {"timeout": "5", "user": "app", "password": "pw"}
        assert stub_driver.connects == [connection]

    def test_sealed_config_rejects_static_writes(self, driver_registry):
        config = _config()
        source = PoolDataSource(config, registry=driver_registry)
        source.acquire()

        with pytest.raises(SealedConfigError):
            config.url = "stub:other"
        with pytest.raises(WriteRejectedError):
            set_target_from_properties(config, {"autoCommit": "false"})

    def test_runtime_credentials_apply_to_new_connections(self, driver_registry):
        config = _config()
        source = PoolDataSource(config, registry=driver_registry)
        source.acquire()

        config.username = "rotated"
        config.password = "rotated-pw"
        connection = source.acquire()

        assert connection.properties["user"] == "rotated"
        assert connection.properties["password"] == "rotated-pw"

    def test_explicit_credentials_override_for_call(self, driver_registry):
        source = PoolDataSource(_config(), registry=driver_registry)
        connection = source.acquire("other", "other-pw")
        assert connection.properties["user"] == "other"
        assert source.acquire().properties["user"] == "app"

    def test_factory_failure_leaves_config_mutable(self, driver_registry):
        config = _config(url="nope:db")
        source = PoolDataSource(config, registry=driver_registry)

        with pytest.raises(FactoryConstructionError):
            source.acquire()

        assert not config.sealed
        config.url = "stub:db"
        source.acquire()
        assert config.sealed

    def test_missing_url(self, driver_registry):
        source = PoolDataSource(PoolConfig(), registry=driver_registry)
        with pytest.raises(FactoryConstructionError, match="url"):
            source.acquire()

    def test_configured_driver_used(self, stub_driver):
        config = _config()
        config.driver = stub_driver
        connection = PoolDataSource(config).acquire()
        assert stub_driver.connects == [connection]

    def test_unresolved_driver_name_rejected(self, driver_registry):
        config = _config(driver="not.registered.Driver")
        assert config.driver == "not.registered.Driver"
        with pytest.raises(FactoryConstructionError, match="driver instance"):
            PoolDataSource(config, registry=driver_registry).acquire()


class TestDriverClassName:
    def test_driver_built_from_registered_name(self, object_registry):
        object_registry.register("stub-driver", StubDriver)
        config = PoolConfig(
            {"url": "stub:db", "driverClassName": "stub-driver"},
            registry=object_registry,
        )
        source = PoolDataSource(config, registry=DriverRegistry())

        connection = source.acquire()

        assert isinstance(connection, StubConnection)
        assert "StubDriver" in repr(source)

    def test_driver_instance_takes_precedence(self, object_registry, stub_driver):
        object_registry.register("stub-driver", StubDriver)
        config = PoolConfig({"url": "stub:db", "driverClassName": "stub-driver"}, registry=object_registry)
        config.driver = stub_driver

        connection = PoolDataSource(config).acquire()

        assert stub_driver.connects == [connection]

    def test_unregistered_driver_class(self, object_registry, driver_registry):
        config = PoolConfig({"url": "stub:db", "driverClassName": "missing.Driver"}, registry=object_registry)
        source = PoolDataSource(config, registry=driver_registry)

        with pytest.raises(FactoryConstructionError, match="Failed to load driver class missing.Driver"):
            source.acquire()
        assert not config.sealed

    def test_driver_class_must_build_a_driver(self, object_registry, driver_registry):
        object_registry.register("not-a-driver", StubLogWriter)
        config = PoolConfig({"url": "stub:db", "driverClassName": "not-a-driver"}, registry=object_registry)

        with pytest.raises(FactoryConstructionError, match="driver instance"):
            PoolDataSource(config, registry=driver_registry).acquire()


def test_repr_masks_password(driver_registry):
    source = PoolDataSource(_config(url="stub:db?password=secret"), registry=driver_registry)
    assert repr(source) == "PoolDataSource(unstarted)"
    source.acquire()
    assert "secret" not in repr(source)
