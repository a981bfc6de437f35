"""Derive monitor host and port fields from a receiver's ``endpoint``."""

import logging
from typing import Any

from smartagent_receiver.constants import MAX_PORT
from smartagent_receiver.errors import InvalidEndpointPort, UnsupportedEndpointTarget
from smartagent_receiver.monitors import MonitorConfig, SchemaDescriptor

logger = logging.getLogger(__name__)


def parse_port(raw: str) -> int:
    """Parse an unsigned 16-bit port number.

    Raises:
        InvalidEndpointPort: If the value is not a valid port
    """
    if not raw.isascii() or not raw.isdigit():
        raise InvalidEndpointPort(raw, "invalid syntax")
    port = int(raw)
    if port > MAX_PORT:
        raise InvalidEndpointPort(raw, "value out of range")
    return port


def parse_endpoint(endpoint: str) -> tuple[str, int | None]:
    """Split ``host[:port]`` on its last colon.

    Bracketed IPv6 hosts (``[::1]:80``) are unwrapped. A bare IPv6 address
    without brackets is treated as a host with no port.

    Returns:
        tuple[str, int | None]: The host and the port, if one was given

    Raises:
        InvalidEndpointPort: If the port segment is not an unsigned integer
    """
    if endpoint.startswith("["):
        host, sep, rest = endpoint[1:].partition("]")
        if sep and rest.startswith(":"):
            return host, parse_port(rest[1:])
        if sep and not rest:
            return host, None

    if endpoint.count(":") > 1:
        return endpoint, None

    host, sep, raw_port = endpoint.rpartition(":")
    if not sep:
        return endpoint, None
    return host, parse_port(raw_port)


def apply_endpoint(
    endpoint: str, config: MonitorConfig, descriptor: SchemaDescriptor
) -> MonitorConfig:
    """Derive a monitor config with host and port taken from an endpoint.

    Values configured explicitly on the monitor take precedence: a host or
    port is only filled in while the field still holds its zero value. An
    empty host or a zero port in the endpoint is ignored.

    Args:
        endpoint: The receiver's ``host[:port]`` endpoint
        config: The bound monitor config, left unchanged
        descriptor: Schema descriptor of the config's monitor type

    Returns:
        MonitorConfig: A copy with the endpoint applied, or ``config`` itself
        when there is nothing to fill in

    Raises:
        InvalidEndpointPort: If the port segment is invalid
        UnsupportedEndpointTarget: If the schema has no Host or Port field
    """
    if not endpoint:
        return config

    host, port = parse_endpoint(endpoint)

    if host and not descriptor.supports_endpoint_host:
        raise UnsupportedEndpointTarget("Host", host, "string")
    if port and not descriptor.supports_endpoint_port:
        raise UnsupportedEndpointTarget("Port", port, "int")

    update: dict[str, Any] = {}
    if host and not getattr(config, descriptor.endpoint_host_field):
        update[descriptor.endpoint_host_field] = host
        logger.debug("Set %s host to %s from endpoint", descriptor.name, host)
    if port and not getattr(config, descriptor.endpoint_port_field):
        update[descriptor.endpoint_port_field] = port
        logger.debug("Set %s port to %d from endpoint", descriptor.name, port)

    if not update:
        return config
    return config.model_copy(update=update)
