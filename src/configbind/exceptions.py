"""Common exception classes for configbind.

All custom exceptions inherit from ApplicationError so callers can catch the
whole family at once.

Exception classes support two patterns:
1. No-argument raise: raise ConfigurationError()
2. Contextual attributes: err = BindingError(attribute="x", target_type="Cfg"); raise err
"""

from __future__ import annotations

from typing import Any


def type_name(target: object) -> str:
    """Return the fully-qualified type name of *target* for error messages."""
    cls = target if isinstance(target, type) else type(target)
    return f"{cls.__module__}.{cls.__qualname__}"


class ApplicationError(Exception):
    """Base exception for all application errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class ConfigurationError(ApplicationError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Configuration is invalid or missing"
        super().__init__(message, **kwargs)

    @classmethod
    def invalid_format(cls, param_name: str, received_value: str, expected_format: str = "") -> "ConfigurationError":
        """Create error for invalid format."""
        msg = f"{param_name} has invalid format (received {received_value!r})"
        if expected_format:
            msg += f". Expected {expected_format}"
        return cls(msg)

    @classmethod
    def load_failed(cls, resource: str, identifier: str = "") -> "ConfigurationError":
        """Create error for failed resource load."""
        msg = f"Failed to load {resource}"
        if identifier:
            msg += f" for {identifier}"
        return cls(msg)


class BindingError(ConfigurationError):
    """A property could not be bound onto its target."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "A property could not be bound onto its target"
        super().__init__(message, **kwargs)


class UnknownAttributeError(BindingError):
    """Property name matches no writer on the target."""

    @classmethod
    def for_target(cls, attribute: str, target: object) -> "UnknownAttributeError":
        target_type = type_name(target)
        return cls(
            f"Property {attribute} does not exist on target {target_type}",
            attribute=attribute,
            target_type=target_type,
        )


class CoercionError(BindingError):
    """Raw value cannot be converted to the attribute's declared kind."""

    @classmethod
    def for_value(cls, attribute: str, value: object, expected: str) -> "CoercionError":
        return cls(
            f"Property {attribute} must be {expected} (received {value!r})",
            attribute=attribute,
            value=value,
            expected=expected,
        )


class WriteRejectedError(BindingError):
    """Target refused the attribute write."""

    @classmethod
    def for_target(cls, attribute: str, target: object, cause: BaseException) -> "WriteRejectedError":
        target_type = type_name(target)
        return cls(
            f"Failed to set property {attribute} on target {target_type}: {cause}",
            attribute=attribute,
            target_type=target_type,
        )


class SealedConfigError(ApplicationError):
    """Configuration is sealed and rejects further writes."""

    @classmethod
    def for_attribute(cls, attribute: str) -> "SealedConfigError":
        return cls(
            f"The configuration is sealed once started; {attribute} can no longer be changed",
            attribute=attribute,
        )


class FactoryConstructionError(ConfigurationError):
    """Connection factory could not be constructed."""

    @classmethod
    def driver_rejected_url(cls, driver: object, sanitized_url: str) -> "FactoryConstructionError":
        return cls(f"Driver {type_name(driver)} claims to not accept url, {sanitized_url}")

    @classmethod
    def no_driver(cls, sanitized_url: str) -> "FactoryConstructionError":
        return cls(f"Failed to get driver instance for url={sanitized_url}")


__all__ = [
    "ApplicationError",
    "BindingError",
    "CoercionError",
    "ConfigurationError",
    "FactoryConstructionError",
    "SealedConfigError",
    "UnknownAttributeError",
    "WriteRejectedError",
    "type_name",
]
