"""Closed registry of named no-argument factories for OBJECT attributes."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Iterator

logger = logging.getLogger(__name__)

Factory = Callable[[], Any]


class UnregisteredFactoryError(LookupError):
    """Raised when a name has no registered factory."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No factory registered under {name!r}")
        self.name = name


class ObjectRegistry:
    """
    Maps names to factories that build configuration objects.

    Property values for OBJECT attributes are looked up here by name; the
    embedding application decides which names are constructible.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, Factory] = {}
        self._lock = threading.Lock()

    def register(self, name: str, factory: Factory) -> None:
        with self._lock:
            self._factories[name] = factory
        logger.debug("Registered factory %s", name)

    def register_type(self, cls: type) -> None:
        """Register *cls* under its module-qualified name."""
        self.register(f"{cls.__module__}.{cls.__qualname__}", cls)

    def unregister(self, name: str) -> None:
        with self._lock:
            self._factories.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._factories))

    def create(self, name: str) -> Any:
        """
        Build a new instance registered under *name*.

        Raises:
            UnregisteredFactoryError: If *name* is not registered
        """
        try:
            factory = self._factories[name]
        except KeyError as exc:  # policy_guard: allow-silent-handler
            raise UnregisteredFactoryError(name) from exc
        return factory()


default_registry = ObjectRegistry()


__all__ = ["Factory", "ObjectRegistry", "UnregisteredFactoryError", "default_registry"]
