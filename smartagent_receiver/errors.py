"""Errors raised while reading and validating Smart Agent receiver configs."""

from typing import Any

from smartagent_receiver.constants import TYPE_STR


class ConfigError(Exception):
    """Base class for all receiver configuration errors."""


class ReceiverConfigError(ConfigError):
    """Wraps a failure with the receiver instance it belongs to."""

    def __init__(self, receiver_name: str, cause: Exception) -> None:
        self.receiver_name = receiver_name
        self.cause = cause
        super().__init__(
            f"error reading receivers configuration for {receiver_name}: {cause}"
        )


class MissingMonitorType(ConfigError):
    """Raised when a receiver entry does not declare a monitor type."""

    def __init__(self) -> None:
        super().__init__(f'you must specify a "type" for a {TYPE_STR} receiver')


class UnknownMonitorType(ConfigError):
    """Raised when the monitor type is not in the catalog."""

    def __init__(self, monitor_type: Any) -> None:
        self.monitor_type = monitor_type
        super().__init__(f'no known monitor type "{monitor_type}"')


class CustomConfigError(ConfigError):
    """Raised when the monitor-specific fields cannot be decoded."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"failed creating Smart Agent Monitor custom config: {detail}")


class UnsupportedField(CustomConfigError):
    def __init__(self, field: str, schema: str) -> None:
        self.field = field
        self.schema = schema
        super().__init__(f"field {field} not found in type {schema}")


class FieldTypeMismatch(CustomConfigError):
    def __init__(self, field: str, expected: str, value: Any = None) -> None:
        self.field = field
        self.expected = expected
        self.value = value
        super().__init__(f"cannot unmarshal {value!r} into field {field} of type {expected}")


class InvalidEndpointPort(ConfigError):
    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(
            f'cannot determine port via Endpoint: parsing "{raw}": {reason}'
        )


class UnsupportedEndpointTarget(ConfigError):
    """Raised when the schema has no field to receive an endpoint-derived value."""

    def __init__(self, field: str, value: Any, expected: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"unable to set monitor {field} field using Endpoint-derived value of {value}: "
            f"no field {field} of type {expected} detected"
        )


class InvalidDimensionClients(ConfigError):
    def __init__(self) -> None:
        super().__init__(
            "dimensionClients must be an array of compatible exporter names"
        )


class RequiredFieldMissing(ConfigError):
    def __init__(self, struct_name: str, field: str, value: Any) -> None:
        self.struct_name = struct_name
        self.field = field
        self.value = value
        super().__init__(
            f"Validation error in field '{struct_name}.{field}': "
            f"{field} is a required field (got '{'' if value is None else value}')"
        )


class IntervalMustBePositive(ConfigError):
    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"intervalSeconds must be greater than 0s ({value} provided)")


class FilterSyntaxError(ConfigError):
    """Raised when a metric or dimension filter pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid filter pattern {pattern!r}: {reason}")


class CatalogError(ConfigError):
    """Raised on invalid monitor catalog registrations."""
