"""Bind and validate Smart Agent receiver configs for the collector."""

from smartagent_receiver.config import (
    ReceiverConfig,
    load_receiver_config,
    load_receivers,
)
from smartagent_receiver.monitors import MonitorCatalog, default_catalog

__all__ = [
    "ReceiverConfig",
    "load_receiver_config",
    "load_receivers",
    "MonitorCatalog",
    "default_catalog",
]
