"""
Bind flat string-keyed property mappings onto configuration targets.

Each entry is resolved to a writer on the target, coerced to the writer's
declared kind and applied. Keys beginning with ``dataSource.`` are forwarded
verbatim to targets that collect nested driver properties.

Binding is fail-fast and not atomic: entries applied before a failing entry
stay applied, and the failure is raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from configbind.attribute_resolver import resolve_writer
from configbind.exceptions import CoercionError, WriteRejectedError, type_name
from configbind.object_registry import ObjectRegistry
from configbind.value_coercion import coerce_value

logger = logging.getLogger(__name__)

NESTED_PREFIX = "dataSource."


@runtime_checkable
class NestedPropertySink(Protocol):
    """Target that accumulates properties for a downstream connection factory."""

    def add_data_source_property(self, name: str, value: Any) -> None: ...


def bind_property(target: Any, name: str, raw_value: Any, *, registry: Optional[ObjectRegistry] = None) -> None:
    """
    Resolve, coerce and apply a single property.

    Args:
        target: Bindable configuration object
        name: Property name
        raw_value: Raw string, or an object for OBJECT / ANY attributes
        registry: Factory registry for OBJECT attributes

    Raises:
        UnknownAttributeError: If no writer matches *name*
        CoercionError: If *raw_value* does not fit the writer's kind
        WriteRejectedError: If the writer itself fails
    """
    writer = resolve_writer(target, name)
    try:
        value = coerce_value(writer.kind, raw_value, field_path=name, registry=registry)
    except CoercionError:
        logger.error("Failed to coerce property %s on target %s", name, type_name(target))
        raise

    try:
        writer(value)
    except Exception as exc:
        logger.error("Failed to set property %s on target %s", name, type_name(target), exc_info=True)
        raise WriteRejectedError.for_target(name, target, exc) from exc


def _add_nested_property(target: NestedPropertySink, key_name: str, value: Any) -> None:
    try:
        target.add_data_source_property(key_name[len(NESTED_PREFIX) :], value)
    except Exception as exc:
        logger.error("Failed to add nested property %s on target %s", key_name, type_name(target), exc_info=True)
        raise WriteRejectedError.for_target(key_name, target, exc) from exc


def set_target_from_properties(
    target: Any,
    properties: Optional[Mapping[str, Any]],
    *,
    registry: Optional[ObjectRegistry] = None,
) -> None:
    """
    Bind every entry of *properties* onto *target* in mapping order.

    A None target or None mapping is a no-op.

    Raises:
        BindingError: On the first entry that cannot be bound; earlier entries
            remain applied
    """
    if target is None or properties is None:
        return

    accepts_nested = isinstance(target, NestedPropertySink)
    for key, value in properties.items():
        key_name = str(key)
        if accepts_nested and key_name.startswith(NESTED_PREFIX):
            _add_nested_property(target, key_name, value)
        else:
            bind_property(target, key_name, value, registry=registry)


def copy_properties(properties: Mapping[Any, Any]) -> Dict[str, str]:
    """Return a copy of *properties* with keys and values stringified."""
    return {str(key): str(value) for key, value in properties.items()}


__all__ = [
    "NESTED_PREFIX",
    "NestedPropertySink",
    "bind_property",
    "copy_properties",
    "set_target_from_properties",
]
