"""
Attribute name resolution against a target's declared attribute surface.

Writers are located with two naming conventions:

1. ``set`` + first letter capitalized (``minimumIdle`` -> ``setMinimumIdle``)
2. ``set`` + whole name upper-cased (``url`` -> ``setURL``), tried only when
   the first convention finds nothing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Set

from configbind.attributes import (
    AttributeKind,
    BindableProperty,
    readable_attributes,
    writable_attributes,
)
from configbind.exceptions import UnknownAttributeError, type_name

logger = logging.getLogger(__name__)


def capitalized_property_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def _writer_method_name(name: str) -> str:
    return "set" + capitalized_property_name(name)


@dataclass(frozen=True)
class Writer:
    """A resolved writer bound to one target."""

    name: str
    kind: AttributeKind
    target: Any
    attribute: BindableProperty

    def __call__(self, value: Any) -> None:
        self.attribute.__set__(self.target, value)


def property_names(target_type: type) -> Set[str]:
    """
    Return the attribute names that are both readable and writable.

    A reader is kept only when a writer of the same name accepts the kind the
    reader returns; anything else is simply not configurable.

    Args:
        target_type: Bindable class to inspect

    Returns:
        Set of camelCase attribute names
    """
    names: Set[str] = set()
    writers = writable_attributes(target_type)
    for name, reader in readable_attributes(target_type).items():
        writer = writers.get(name)
        if writer is not None and writer.writer_kind == reader.kind:
            names.add(name)
    return names


def _find_writer(target_type: type, method_name: str) -> Optional[BindableProperty]:
    for candidate in writable_attributes(target_type).values():
        if _writer_method_name(str(candidate.name)) == method_name:
            return candidate
    return None


def resolve_writer(target: Any, name: str) -> Writer:
    """
    Locate the writer for *name* on *target*.

    Args:
        target: Object whose class declares bindable attributes
        name: Property name from the property bag

    Returns:
        Writer bound to *target*

    Raises:
        UnknownAttributeError: If neither naming convention matches
    """
    target_type = type(target)
    attribute = _find_writer(target_type, _writer_method_name(name))
    if attribute is None:
        attribute = _find_writer(target_type, "set" + name.upper())

    if attribute is None:
        logger.error("Property %s does not exist on target %s", name, type_name(target))
        raise UnknownAttributeError.for_target(name, target)

    return Writer(name=name, kind=attribute.writer_kind, target=target, attribute=attribute)


def get_property(name: str, target: Any) -> Any:
    """Read *name* from *target*, returning None when no reader exists."""
    method_name = capitalized_property_name(name)
    for candidate in readable_attributes(type(target)).values():
        if capitalized_property_name(str(candidate.name)) == method_name:
            return candidate.__get__(target, type(target))
    upper_name = name.upper()
    for candidate in readable_attributes(type(target)).values():
        if capitalized_property_name(str(candidate.name)) == upper_name:
            return candidate.__get__(target, type(target))
    return None


__all__ = [
    "Writer",
    "capitalized_property_name",
    "get_property",
    "property_names",
    "resolve_writer",
]
