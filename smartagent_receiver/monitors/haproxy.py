from datetime import timedelta

from pydantic import Field

from .types import Duration, MonitorConfig, Port


class HAProxyConfig(MonitorConfig):
    """Config for the haproxy monitor, which scrapes the HAProxy stats page."""

    host: str = ""
    port: Port = 0
    path: str = "stats?stats;csv"
    url: str = ""
    username: str = ""
    password: str = ""
    use_https: bool = Field(default=False, alias="useHTTPS")
    ssl_verify: bool = True
    timeout: Duration = timedelta(seconds=5)
    proxies: list[str] = Field(default_factory=list)
