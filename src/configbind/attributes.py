"""
Declared attribute surface for bindable configuration targets.

A bindable class lists its configurable attributes explicitly with the
``bindable`` descriptor instead of relying on runtime introspection of method
names. Each descriptor carries:

- the external camelCase name used in property files (``minimumIdle``),
- a reader and a writer, either of which may be absent,
- the ``AttributeKind`` the value is coerced to before the writer runs.

``readable_attributes`` and ``writable_attributes`` expose the resulting
static tables to the resolver.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Optional

from configbind.exceptions import SealedConfigError

Reader = Callable[[Any], Any]
WriterFunc = Callable[[Any, Any], None]


class AttributeKind(Enum):
    """Declared value kinds understood by the coercion table."""

    INT = "int32"
    LONG = "int64"
    SHORT = "int16"
    BOOL = "bool"
    CHARS = "chars"
    STRING = "string"
    OBJECT = "object"
    ANY = "any"


def camel_case(snake_name: str) -> str:
    """Convert ``minimum_idle`` to ``minimumIdle``."""
    head, *rest = snake_name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class BindableProperty:
    """A typed ``property`` that registers itself in the attribute table.

    Writes to instances exposing a truthy ``sealed`` attribute are rejected
    with SealedConfigError unless the attribute is declared ``runtime``.
    """

    def __init__(
        self,
        kind: AttributeKind,
        fget: Optional[Reader] = None,
        fset: Optional[WriterFunc] = None,
        *,
        name: Optional[str] = None,
        writer_kind: Optional[AttributeKind] = None,
        runtime: bool = False,
        doc: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.writer_kind = writer_kind if writer_kind is not None else kind
        self.fget = fget
        self.fset = fset
        self.name = name
        self.runtime = runtime
        self.attr_name: Optional[str] = None
        if doc is None and fget is not None:
            doc = fget.__doc__
        self.__doc__ = doc

    def __set_name__(self, owner: type, attr_name: str) -> None:
        self.attr_name = attr_name
        if self.name is None:
            self.name = camel_case(attr_name)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        if self.fget is None:
            raise AttributeError(f"{self.name} is not readable")
        return self.fget(instance)

    def __set__(self, instance: Any, value: Any) -> None:
        if self.fset is None:
            raise AttributeError(f"{self.name} is not writable")
        if getattr(instance, "sealed", False) and not self.runtime:
            raise SealedConfigError.for_attribute(str(self.name))
        self.fset(instance, value)

    @property
    def readable(self) -> bool:
        return self.fget is not None

    @property
    def writable(self) -> bool:
        return self.fset is not None

    def setter(self, fset: WriterFunc) -> "BindableProperty":
        return BindableProperty(
            self.kind,
            self.fget,
            fset,
            name=self.name,
            writer_kind=self.writer_kind,
            runtime=self.runtime,
            doc=self.__doc__,
        )


def bindable(
    kind: AttributeKind, *, name: Optional[str] = None, runtime: bool = False
) -> Callable[[Reader], BindableProperty]:
    """Decorate a reader to declare a bindable attribute; add the writer with ``.setter``."""

    def decorator(fget: Reader) -> BindableProperty:
        return BindableProperty(kind, fget, name=name, runtime=runtime)

    return decorator


def write_only(
    kind: AttributeKind, *, name: Optional[str] = None, runtime: bool = False
) -> Callable[[WriterFunc], BindableProperty]:
    """Declare a writer with no reader; it can be bound but is not enumerated."""

    def decorator(fset: WriterFunc) -> BindableProperty:
        return BindableProperty(kind, fset=fset, name=name, runtime=runtime, doc=fset.__doc__)

    return decorator


def declared_attributes(target_type: type) -> Dict[str, BindableProperty]:
    """Collect bindable descriptors across the MRO; subclasses override by name."""
    found: Dict[str, BindableProperty] = {}
    for klass in reversed(target_type.__mro__):
        for value in vars(klass).values():
            if isinstance(value, BindableProperty) and value.name:
                found[value.name] = value
    return found


def readable_attributes(target_type: type) -> Dict[str, BindableProperty]:
    return {name: attr for name, attr in declared_attributes(target_type).items() if attr.readable}


def writable_attributes(target_type: type) -> Dict[str, BindableProperty]:
    return {name: attr for name, attr in declared_attributes(target_type).items() if attr.writable}


__all__ = [
    "AttributeKind",
    "BindableProperty",
    "bindable",
    "camel_case",
    "declared_attributes",
    "readable_attributes",
    "writable_attributes",
    "write_only",
]
