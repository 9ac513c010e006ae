"""
Connection factory built from a URL, a driver and a driver property bag.

The URL may carry credentials in its query string; every diagnostic string
produced here (log lines, exception messages, ``repr``) uses the masked form.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping, Optional

from configbind.drivers import Driver, DriverRegistry, NoSuitableDriverError, driver_registry
from configbind.exceptions import FactoryConstructionError, type_name
from configbind.property_binder import copy_properties

logger = logging.getLogger(__name__)

USER = "user"
PASSWORD = "password"

_PASSWORD_FRAGMENT = re.compile(r"([?&;][^&#;=]*[pP]assword=)[^&#;]*")


def mask_url(url: str) -> str:
    """Replace the value of any ``password=`` query fragment with ``<masked>``."""
    return _PASSWORD_FRAGMENT.sub(r"\1<masked>", url)


class DriverDataSource:
    """
    Produces connections for one URL through one driver.

    Explicit username and password only fill in ``user`` / ``password`` when
    the property bag does not already define them.
    """

    def __init__(
        self,
        url: str,
        driver: Optional[Driver] = None,
        properties: Optional[Mapping[str, Any]] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        *,
        registry: Optional[DriverRegistry] = None,
    ) -> None:
        """
        Resolve the driver and merge credentials into the driver properties.

        Args:
            url: Connection URL
            driver: Driver to use; resolved from the URL when None
            properties: Nested driver properties, copied with string values
            username: Fallback ``user`` property
            password: Fallback ``password`` property
            registry: Registry used to resolve a driver; defaults to the
                process-wide registry

        Raises:
            FactoryConstructionError: If the driver rejects the URL or no
                registered driver accepts it
        """
        self._url = url
        self._sanitized_url = mask_url(url)
        self._driver_properties: Dict[str, str] = copy_properties(properties or {})

        if username is not None:
            self._driver_properties.setdefault(USER, username)
        if password is not None:
            self._driver_properties.setdefault(PASSWORD, password)

        if driver is None:
            active_registry = registry if registry is not None else driver_registry
            try:
                driver = active_registry.get_driver(url)
            except NoSuitableDriverError as exc:
                raise FactoryConstructionError.no_driver(self._sanitized_url) from exc
            logger.debug("Loaded driver with class name %s for url=%s", type_name(driver), self._sanitized_url)
        elif not driver.accepts_url(url):
            raise FactoryConstructionError.driver_rejected_url(driver, self._sanitized_url)

        self._driver = driver

    @property
    def driver(self) -> Driver:
        return self._driver

    @property
    def sanitized_url(self) -> str:
        return self._sanitized_url

    @property
    def driver_properties(self) -> Dict[str, str]:
        return dict(self._driver_properties)

    def acquire(self, username: Optional[str] = None, password: Optional[str] = None) -> Any:
        """
        Open a connection.

        Credentials given here apply to this call only; the stored properties
        are left untouched.
        """
        if username is None and password is None:
            return self._driver.connect(self._url, self._driver_properties)

        overridden = dict(self._driver_properties)
        if username is not None:
            overridden[USER] = username
            if "username" in overridden:
                overridden["username"] = username
        if password is not None:
            overridden[PASSWORD] = password
        return self._driver.connect(self._url, overridden)

    def __repr__(self) -> str:
        return f"DriverDataSource(url={self._sanitized_url!r}, driver={type_name(self._driver)})"


__all__ = ["DriverDataSource", "PASSWORD", "USER", "mask_url"]
