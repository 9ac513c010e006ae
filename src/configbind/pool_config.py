"""
Bindable connection pool configuration.

PoolConfig is the reference target for the property binder. Every setting is a
``bindable`` attribute with a camelCase external name, so a flat property file
such as::

    url=redis://cache:6379/0
    minimumIdle=5
    connectionTimeout=30s
    dataSource.socket_timeout=5

binds directly onto it. ``dataSource.*`` keys collect into
``data_source_properties`` and are forwarded to the connection driver.

The configuration seals on first use; pool sizing, timeouts and credentials
stay writable afterwards for runtime tuning.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from configbind.attribute_resolver import get_property, property_names
from configbind.attributes import AttributeKind, BindableProperty, bindable, writable_attributes
from configbind.config import CONFIGURATION_FILE_ENV, env_str
from configbind.driver_data_source import mask_url
from configbind.object_registry import ObjectRegistry, default_registry
from configbind.property_binder import set_target_from_properties
from configbind.property_sources import load_property_file
from configbind.sealable import SealableConfig

logger = logging.getLogger(__name__)

SECONDS = 1_000
MINUTES = 60 * SECONDS

CONNECTION_TIMEOUT = 30 * SECONDS
VALIDATION_TIMEOUT = 5 * SECONDS
IDLE_TIMEOUT = 10 * MINUTES
MAX_LIFETIME = 30 * MINUTES
KEEPALIVE_TIME = 2 * MINUTES
DEFAULT_POOL_SIZE = 10

_MASKED = "<masked>"


def _setting(kind: AttributeKind, key: str, *, runtime: bool = False, doc: Optional[str] = None) -> BindableProperty:
    def fget(self: "PoolConfig") -> Any:
        return self._settings[key]

    def fset(self: "PoolConfig", value: Any) -> None:
        self._settings[key] = value

    return BindableProperty(kind, fget, fset, runtime=runtime, doc=doc)


class PoolConfig(SealableConfig):
    """Settings for a pool of driver connections."""

    url = _setting(AttributeKind.STRING, "url", doc="Connection URL handed to the driver.")
    driver_class_name = _setting(
        AttributeKind.STRING, "driver_class_name", doc="Registered factory name used to build the driver when driver is unset."
    )
    username = _setting(AttributeKind.STRING, "username", runtime=True)
    password = _setting(AttributeKind.STRING, "password", runtime=True)
    pool_name = _setting(AttributeKind.STRING, "pool_name")
    catalog = _setting(AttributeKind.STRING, "catalog")
    schema = _setting(AttributeKind.STRING, "schema")
    transaction_isolation = _setting(AttributeKind.STRING, "transaction_isolation")
    connection_test_query = _setting(AttributeKind.STRING, "connection_test_query")
    connection_init_sql = _setting(AttributeKind.STRING, "connection_init_sql")

    minimum_idle = _setting(AttributeKind.INT, "minimum_idle", runtime=True)
    maximum_pool_size = _setting(AttributeKind.INT, "maximum_pool_size", runtime=True)

    connection_timeout = _setting(AttributeKind.LONG, "connection_timeout", runtime=True)
    validation_timeout = _setting(AttributeKind.LONG, "validation_timeout", runtime=True)
    idle_timeout = _setting(AttributeKind.LONG, "idle_timeout", runtime=True)
    leak_detection_threshold = _setting(AttributeKind.LONG, "leak_detection_threshold", runtime=True)
    max_lifetime = _setting(AttributeKind.LONG, "max_lifetime", runtime=True)
    keepalive_time = _setting(AttributeKind.LONG, "keepalive_time")
    initialization_fail_timeout = _setting(AttributeKind.LONG, "initialization_fail_timeout")

    auto_commit = _setting(AttributeKind.BOOL, "auto_commit")
    read_only = _setting(AttributeKind.BOOL, "read_only")
    isolate_internal_queries = _setting(AttributeKind.BOOL, "isolate_internal_queries")
    allow_pool_suspension = _setting(AttributeKind.BOOL, "allow_pool_suspension")
    register_mbeans = _setting(AttributeKind.BOOL, "register_mbeans")

    driver = _setting(AttributeKind.OBJECT, "driver", doc="Driver instance, or the name of a registered driver factory.")
    health_check_registry = _setting(AttributeKind.OBJECT, "health_check_registry")
    metric_registry = _setting(AttributeKind.OBJECT, "metric_registry")

    def __init__(
        self,
        properties: Optional[Mapping[str, Any]] = None,
        *,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        """
        Create a configuration with pool defaults.

        The file named by ``CONFIGBIND_CONFIGURATION_FILE`` is bound first when
        that variable is set, then *properties*.

        Args:
            properties: Flat property bag to bind
            registry: Factory registry for OBJECT attributes

        Raises:
            BindingError: If a property cannot be bound
        """
        super().__init__()
        self._registry = registry
        self._data_source_properties: Dict[str, Any] = {}
        self._settings: Dict[str, Any] = {
            "url": None,
            "driver_class_name": None,
            "username": None,
            "password": None,
            "pool_name": None,
            "catalog": None,
            "schema": None,
            "transaction_isolation": None,
            "connection_test_query": None,
            "connection_init_sql": None,
            "minimum_idle": DEFAULT_POOL_SIZE,
            "maximum_pool_size": DEFAULT_POOL_SIZE,
            "connection_timeout": CONNECTION_TIMEOUT,
            "validation_timeout": VALIDATION_TIMEOUT,
            "idle_timeout": IDLE_TIMEOUT,
            "leak_detection_threshold": 0,
            "max_lifetime": MAX_LIFETIME,
            "keepalive_time": KEEPALIVE_TIME,
            "initialization_fail_timeout": 1,
            "auto_commit": True,
            "read_only": False,
            "isolate_internal_queries": False,
            "allow_pool_suspension": False,
            "register_mbeans": False,
            "driver": None,
            "health_check_registry": None,
            "metric_registry": None,
        }

        configuration_file = env_str(CONFIGURATION_FILE_ENV)
        if configuration_file:
            self.load_properties(configuration_file)

        if properties is not None:
            set_target_from_properties(self, properties, registry=self._registry)

    @property
    def object_registry(self) -> ObjectRegistry:
        """Registry used for OBJECT attributes and ``driverClassName``."""
        return self._registry if self._registry is not None else default_registry

    @classmethod
    def from_properties_file(cls, path: Path | str, *, registry: Optional[ObjectRegistry] = None) -> "PoolConfig":
        config = cls(registry=registry)
        config.load_properties(path)
        return config

    def load_properties(self, path: Path | str) -> None:
        """Bind every property from a ``.properties``, ``.env`` or ``.json`` file."""
        logger.debug("Loading pool configuration from %s", path)
        set_target_from_properties(self, load_property_file(path), registry=self._registry)

    @bindable(AttributeKind.ANY)
    def data_source_properties(self) -> Dict[str, Any]:
        """Nested driver properties collected from ``dataSource.*`` keys."""
        return self._data_source_properties

    @data_source_properties.setter
    def data_source_properties(self, properties: Mapping[str, Any]) -> None:
        self._data_source_properties.update(properties)

    def add_data_source_property(self, name: str, value: Any) -> None:
        self.check_if_sealed("dataSourceProperties")
        self._data_source_properties[name] = value

    def copy_state_to(self, other: "PoolConfig") -> None:
        """
        Copy every configurable attribute, driver properties included, onto *other*.

        Raises:
            SealedConfigError: If *other* is sealed
        """
        writers = writable_attributes(type(other))
        for name in sorted(property_names(type(self))):
            writers[name].__set__(other, get_property(name, self))

    def log_configuration(self) -> None:
        """Log every setting at DEBUG with credentials masked."""
        pool_name = self.pool_name or type(self).__name__
        logger.debug("%s - configuration:", pool_name)
        for name in sorted(property_names(type(self))):
            value = get_property(name, self)
            if name == "password":
                value = _MASKED
            elif name == "url" and isinstance(value, str):
                value = mask_url(value)
            elif name == "dataSourceProperties":
                value = {key: _MASKED if "password" in key.lower() else item for key, item in value.items()}
            logger.debug("%-32s%s", name, value)


__all__ = [
    "CONNECTION_TIMEOUT",
    "DEFAULT_POOL_SIZE",
    "IDLE_TIMEOUT",
    "MAX_LIFETIME",
    "PoolConfig",
    "VALIDATION_TIMEOUT",
]
