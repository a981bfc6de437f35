"""Configs for monitors backed by collectd plugins."""

from typing import Annotated

from pydantic import Field

from .types import REQUIRED, MonitorConfig, Port, SchemaModel


class PythonCommonConfig(SchemaModel):
    """Options shared by the collectd Python-plugin based monitors."""

    python_binary: str = ""


class RedisListLength(SchemaModel):
    database_index: int = 0
    key_pattern: str = ""


class RedisConfig(MonitorConfig):
    host: str = ""
    port: Port = 0
    name: str = ""
    auth: str = ""
    send_list_lengths: list[RedisListLength] = Field(default_factory=list)
    verbose: bool = False


class HadoopConfig(MonitorConfig, PythonCommonConfig):
    host: Annotated[str, REQUIRED] = ""
    port: Annotated[Port, REQUIRED] = 0
    verbose: bool = False


class ConsulConfig(MonitorConfig):
    host: Annotated[str, REQUIRED] = ""
    port: Annotated[Port, REQUIRED] = 0
    acl_token: str = ""
    use_https: bool = Field(default=False, alias="useHTTPS")
    enhanced_metrics: bool = False
    telemetry_server: bool = False
    telemetry_host: str = "0.0.0.0"
    telemetry_port: Port = 8125
    exclude_metrics: list[str] = Field(default_factory=list)
