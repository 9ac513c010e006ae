"""Bind flat string-keyed property mappings onto declared configuration targets."""

from .attribute_resolver import get_property, property_names, resolve_writer
from .attributes import AttributeKind, BindableProperty, bindable, write_only
from .driver_data_source import DriverDataSource, mask_url
from .duration import parse_duration
from .exceptions import (
    BindingError,
    CoercionError,
    ConfigurationError,
    FactoryConstructionError,
    SealedConfigError,
    UnknownAttributeError,
    WriteRejectedError,
)
from .object_registry import ObjectRegistry, default_registry
from .pool_config import PoolConfig
from .pool_data_source import PoolDataSource
from .property_binder import (
    NESTED_PREFIX,
    bind_property,
    copy_properties,
    set_target_from_properties,
)
from .sealable import ConfigState, SealableConfig

__all__ = [
    "AttributeKind",
    "BindableProperty",
    "BindingError",
    "CoercionError",
    "ConfigState",
    "ConfigurationError",
    "DriverDataSource",
    "FactoryConstructionError",
    "NESTED_PREFIX",
    "ObjectRegistry",
    "PoolConfig",
    "PoolDataSource",
    "SealableConfig",
    "SealedConfigError",
    "UnknownAttributeError",
    "WriteRejectedError",
    "bind_property",
    "bindable",
    "copy_properties",
    "default_registry",
    "get_property",
    "mask_url",
    "parse_duration",
    "property_names",
    "resolve_writer",
    "set_target_from_properties",
    "write_only",
]
