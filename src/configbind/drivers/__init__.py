"""Connection drivers and the process-wide driver registry."""

from .redis_driver import REDIS_URL_SCHEMES, RedisDriver
from .registry import Driver, DriverRegistry, NoSuitableDriverError

driver_registry = DriverRegistry()
driver_registry.register(RedisDriver())

__all__ = [
    "Driver",
    "DriverRegistry",
    "NoSuitableDriverError",
    "REDIS_URL_SCHEMES",
    "RedisDriver",
    "driver_registry",
]
