"""Catalog mapping monitor type names to their config schemas."""

import functools
import logging
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict

from smartagent_receiver.errors import CatalogError, UnknownMonitorType

from .collectd import ConsulConfig, HadoopConfig, RedisConfig
from .filesystems import FilesystemsConfig
from .haproxy import HAProxyConfig
from .nagios import NagiosConfig
from .prometheus import PrometheusExporterConfig
from .telegraf import NtpqConfig
from .types import MonitorConfig

logger = logging.getLogger(__name__)

# Built-in monitors: add new monitor types here
BUILTIN_MONITORS: dict[str, type[MonitorConfig]] = {
    "haproxy": HAProxyConfig,
    "collectd/redis": RedisConfig,
    "collectd/hadoop": HadoopConfig,
    "collectd/consul": ConsulConfig,
    "prometheus-exporter": PrometheusExporterConfig,
    "etcd": PrometheusExporterConfig,
    "telegraf/ntpq": NtpqConfig,
    "filesystems": FilesystemsConfig,
    "nagios": NagiosConfig,
}


class SchemaDescriptor(BaseModel):
    """What the binder needs to know about a monitor type's config schema."""

    model_config = ConfigDict(frozen=True)

    monitor_type: str
    config_class: type[MonitorConfig]
    required_fields: tuple[str, ...]
    endpoint_host_field: str | None = None
    endpoint_port_field: str | None = None

    @property
    def name(self) -> str:
        return self.config_class.__name__

    @property
    def supports_endpoint_host(self) -> bool:
        return self.endpoint_host_field is not None

    @property
    def supports_endpoint_port(self) -> bool:
        return self.endpoint_port_field is not None

    @classmethod
    def for_config(
        cls, monitor_type: str, config_class: type[MonitorConfig]
    ) -> "SchemaDescriptor":
        """Describe a config class, detecting its endpoint targets.

        A schema can receive an endpoint host if it has a string ``host`` field
        and an endpoint port if it has an integer ``port`` field.
        """
        fields = config_class.model_fields
        host = fields.get("host")
        port = fields.get("port")
        return cls(
            monitor_type=monitor_type,
            config_class=config_class,
            required_fields=config_class.required_fields(),
            endpoint_host_field="host" if host is not None and host.annotation is str else None,
            endpoint_port_field="port" if port is not None and port.annotation is int else None,
        )


class MonitorCatalog:
    """Registry of monitor config schemas.

    The catalog is populated at startup and then frozen; a frozen catalog is
    read-only and can be shared between threads.
    """

    def __init__(self, monitors: Mapping[str, type[MonitorConfig]] | None = None) -> None:
        self._schemas: dict[str, SchemaDescriptor] = {}
        self._frozen = False
        for monitor_type, config_class in (monitors or {}).items():
            self.register(monitor_type, config_class)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(
        self, monitor_type: str, config_class: type[MonitorConfig]
    ) -> SchemaDescriptor:
        """Register the config schema for a monitor type.

        Raises:
            CatalogError: If the catalog is frozen, the type is already
                registered or the class is not a MonitorConfig
        """
        if self._frozen:
            raise CatalogError(
                f"cannot register monitor type {monitor_type!r}: catalog is frozen"
            )
        if monitor_type in self._schemas:
            raise CatalogError(f"monitor type {monitor_type!r} is already registered")
        if not (isinstance(config_class, type) and issubclass(config_class, MonitorConfig)):
            raise CatalogError(
                f"config for monitor type {monitor_type!r} must subclass MonitorConfig"
            )

        descriptor = SchemaDescriptor.for_config(monitor_type, config_class)
        self._schemas[monitor_type] = descriptor
        logger.debug("Registered monitor type %s (%s)", monitor_type, descriptor.name)
        return descriptor

    def freeze(self) -> "MonitorCatalog":
        if not self._frozen:
            self._schemas = MappingProxyType(dict(self._schemas))
            self._frozen = True
        return self

    def lookup(self, monitor_type: str) -> SchemaDescriptor | None:
        """Find the schema for a monitor type (exact, case-sensitive match)."""
        if not isinstance(monitor_type, str):
            return None
        return self._schemas.get(monitor_type)

    def get(self, monitor_type: str) -> SchemaDescriptor:
        descriptor = self.lookup(monitor_type)
        if descriptor is None:
            raise UnknownMonitorType(monitor_type)
        return descriptor

    def monitor_types(self) -> list[str]:
        return sorted(self._schemas)

    def __contains__(self, monitor_type: object) -> bool:
        return isinstance(monitor_type, str) and monitor_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


@functools.cache
def default_catalog() -> MonitorCatalog:
    """Frozen catalog of the built-in monitors, shared process-wide."""
    return MonitorCatalog(BUILTIN_MONITORS).freeze()
