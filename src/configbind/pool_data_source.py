"""Connection source that seals its PoolConfig on first successful acquisition."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from configbind.driver_data_source import DriverDataSource
from configbind.drivers import Driver, DriverRegistry
from configbind.exceptions import FactoryConstructionError
from configbind.object_registry import UnregisteredFactoryError
from configbind.pool_config import PoolConfig

logger = logging.getLogger(__name__)


def _load_driver_class(config: PoolConfig) -> Any:
    """Build the driver registered under ``driverClassName``."""
    name = config.driver_class_name
    try:
        driver = config.object_registry.create(name)
    except UnregisteredFactoryError as exc:
        raise FactoryConstructionError(f"Failed to load driver class {name}: no factory registered under that name") from exc
    except Exception as exc:
        raise FactoryConstructionError(f"Failed to load driver class {name}: {exc}") from exc
    logger.debug("Driver class %s instantiated", name)
    return driver


class PoolDataSource:
    """
    Lazily builds a DriverDataSource from a PoolConfig.

    Credentials are read from the configuration on every acquisition, so
    runtime changes to ``username`` and ``password`` apply to new connections.
    """

    def __init__(self, config: PoolConfig, *, registry: Optional[DriverRegistry] = None) -> None:
        self._config = config
        self._registry = registry
        self._factory: Optional[DriverDataSource] = None
        self._factory_lock = threading.Lock()

    @property
    def config(self) -> PoolConfig:
        return self._config

    def _get_factory(self) -> DriverDataSource:
        with self._factory_lock:
            if self._factory is None:
                config = self._config
                if not config.url:
                    raise FactoryConstructionError("Property url is required to build a connection factory")
                driver = config.driver
                if driver is None and config.driver_class_name:
                    driver = _load_driver_class(config)
                if driver is not None and not isinstance(driver, Driver):
                    raise FactoryConstructionError(f"Property driver must be a driver instance, got {driver!r}")
                config.log_configuration()
                self._factory = DriverDataSource(
                    config.url,
                    driver,
                    config.data_source_properties,
                    config.username,
                    config.password,
                    registry=self._registry,
                )
            return self._factory

    def acquire(self, username: Optional[str] = None, password: Optional[str] = None) -> Any:
        """
        Open a connection and seal the configuration.

        Raises:
            FactoryConstructionError: If no connection factory can be built
        """
        factory = self._get_factory()
        connection = factory.acquire(
            username if username is not None else self._config.username,
            password if password is not None else self._config.password,
        )
        if not self._config.sealed:
            self._config.seal()
            logger.info("%s - first connection acquired, configuration sealed", self._config.pool_name or "pool")
        return connection

    def __repr__(self) -> str:
        if self._factory is None:
            return "PoolDataSource(unstarted)"
        return f"PoolDataSource({self._factory!r})"


__all__ = ["PoolDataSource"]
