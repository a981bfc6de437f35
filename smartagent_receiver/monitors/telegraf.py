from .types import MonitorConfig


class NtpqConfig(MonitorConfig):
    """Config for telegraf/ntpq. dnsLookup is optional and defaults to on."""

    dns_lookup: bool | None = True
