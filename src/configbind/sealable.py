"""Two-state configuration objects that freeze once put to use."""

from __future__ import annotations

import logging
import threading
from enum import Enum

from configbind.exceptions import SealedConfigError

logger = logging.getLogger(__name__)


class ConfigState(Enum):
    """Lifecycle of a sealable configuration; the transition is one-way."""

    MUTABLE = "mutable"
    SEALED = "sealed"


class SealableConfig:
    """
    Base class for configuration targets that reject writes after first use.

    Bindable attributes consult ``sealed`` before every write; attributes
    declared ``runtime`` stay writable after sealing.
    """

    def __init__(self) -> None:
        self._state = ConfigState.MUTABLE
        self._state_lock = threading.Lock()

    @property
    def state(self) -> ConfigState:
        return self._state

    @property
    def sealed(self) -> bool:
        return self._state is ConfigState.SEALED

    def seal(self) -> None:
        """Move to SEALED; later calls are no-ops."""
        with self._state_lock:
            if self._state is ConfigState.SEALED:
                return
            self._state = ConfigState.SEALED
        logger.debug("%s sealed", type(self).__name__)

    def check_if_sealed(self, attribute: str) -> None:
        """
        Raise if this configuration no longer accepts writes.

        Raises:
            SealedConfigError: If the configuration is sealed
        """
        if self.sealed:
            raise SealedConfigError.for_attribute(attribute)


__all__ = ["ConfigState", "SealableConfig"]
