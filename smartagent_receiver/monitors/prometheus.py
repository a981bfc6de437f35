from datetime import timedelta
from typing import Annotated

from pydantic import Field

from .types import REQUIRED, Duration, MonitorConfig, Port, SchemaModel


class HTTPConfig(SchemaModel):
    """HTTP client options for monitors that scrape over HTTP(S)."""

    http_timeout: Duration = timedelta(seconds=10)
    username: str = ""
    password: str = ""
    use_https: bool = Field(default=False, alias="useHTTPS")
    http_headers: dict[str, str] = Field(default_factory=dict)
    skip_verify: bool = False
    ca_cert_path: str = ""
    client_cert_path: str = ""
    client_key_path: str = ""


class PrometheusExporterConfig(MonitorConfig, HTTPConfig):
    """Config for the prometheus-exporter monitor and monitors built on it (etcd)."""

    host: Annotated[str, REQUIRED] = ""
    port: Annotated[Port, REQUIRED] = 0
    use_service_account: bool = False
    metric_path: str = "/metrics"
    send_all_metrics: bool = False
