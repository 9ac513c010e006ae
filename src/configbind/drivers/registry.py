"""Process-wide registry of drivers that open connections for a URL."""

from __future__ import annotations

import logging
import threading
from typing import Any, List, Mapping, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Driver(Protocol):
    """Opens connections for the URLs it accepts."""

    def accepts_url(self, url: str) -> bool:
        """Return True when this driver can connect to *url*."""
        ...

    def connect(self, url: str, properties: Mapping[str, str]) -> Any:
        """Open a connection using the merged driver properties."""
        ...


class NoSuitableDriverError(LookupError):
    """Raised when no registered driver accepts a URL."""


class DriverRegistry:
    """Ordered set of drivers; the first driver accepting a URL wins."""

    def __init__(self) -> None:
        self._drivers: List[Driver] = []
        self._lock = threading.Lock()

    def register(self, driver: Driver) -> None:
        with self._lock:
            if driver not in self._drivers:
                self._drivers.append(driver)
        logger.debug("Registered driver %s", type(driver).__name__)

    def deregister(self, driver: Driver) -> None:
        with self._lock:
            if driver in self._drivers:
                self._drivers.remove(driver)

    def drivers(self) -> List[Driver]:
        with self._lock:
            return list(self._drivers)

    def get_driver(self, url: str) -> Driver:
        """
        Find the first registered driver accepting *url*.

        Raises:
            NoSuitableDriverError: If no driver accepts the URL
        """
        for driver in self.drivers():
            if driver.accepts_url(url):
                return driver
        raise NoSuitableDriverError("No suitable driver")


__all__ = ["Driver", "DriverRegistry", "NoSuitableDriverError"]
