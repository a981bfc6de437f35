"""Monitor config schemas and the catalog that maps type names to them."""

from .types import REQUIRED, Duration, MonitorConfig, Port, SchemaModel

from .catalog import BUILTIN_MONITORS, MonitorCatalog, SchemaDescriptor, default_catalog
from .collectd import ConsulConfig, HadoopConfig, RedisConfig
from .filesystems import FilesystemsConfig
from .haproxy import HAProxyConfig
from .nagios import NagiosConfig
from .prometheus import PrometheusExporterConfig
from .telegraf import NtpqConfig

__all__ = [
    "REQUIRED",
    "Duration",
    "MonitorConfig",
    "Port",
    "SchemaModel",
    "BUILTIN_MONITORS",
    "MonitorCatalog",
    "SchemaDescriptor",
    "default_catalog",
    "ConsulConfig",
    "HadoopConfig",
    "RedisConfig",
    "FilesystemsConfig",
    "HAProxyConfig",
    "NagiosConfig",
    "PrometheusExporterConfig",
    "NtpqConfig",
]
