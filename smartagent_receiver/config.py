"""Smart Agent receiver config: assembly from a generic entry and validation.

A receiver entry is the raw mapping decoded from the collector config file,
for example::

    receivers:
      smartagent/redis:
        type: collectd/redis
        endpoint: redishost:6379
        dimensionClients: [signalfx]
        intervalSeconds: 10

``endpoint`` and ``dimensionClients`` belong to the receiver; every other key
is bound onto the config schema of the monitor named by ``type``.
"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

from smartagent_receiver.binder import bind_monitor_config
from smartagent_receiver.constants import (
    DIMENSION_CLIENTS_KEY,
    ENDPOINT_KEY,
    RECEIVER_KEYS,
    RECEIVER_NAME_SEPARATOR,
    TYPE_STR,
)
from smartagent_receiver.endpoint import apply_endpoint
from smartagent_receiver.errors import (
    ConfigError,
    FieldTypeMismatch,
    IntervalMustBePositive,
    InvalidDimensionClients,
    ReceiverConfigError,
    RequiredFieldMissing,
)
from smartagent_receiver.filtering import DatapointFilterSet
from smartagent_receiver.monitors import MonitorCatalog, MonitorConfig, default_catalog

logger = logging.getLogger(__name__)


class ReceiverConfig(BaseModel):
    """A fully bound Smart Agent receiver.

    Instances are immutable; validate_config() checks them without changing
    anything.
    """

    model_config = ConfigDict(frozen=True)

    type_val: str = TYPE_STR
    name_val: str
    endpoint: str = ""
    dimension_clients: list[str] = Field(default_factory=list)
    monitor_config: SerializeAsAny[MonitorConfig]

    def validate_config(self) -> None:
        """Validate the receiver, raising the first problem found.

        Checks run in order: dimensionClients shape, required monitor fields,
        an explicitly configured interval, then filter pattern syntax. An
        interval that was never set is not checked.

        Raises:
            InvalidDimensionClients: If dimensionClients holds non-strings
            RequiredFieldMissing: If a required monitor field is unset
            IntervalMustBePositive: If intervalSeconds was set to <= 0
            FilterSyntaxError: If a datapointsToExclude pattern is malformed
        """
        check_dimension_clients(self.dimension_clients)

        monitor = self.monitor_config
        schema = type(monitor)
        for field in schema.required_fields():
            value = getattr(monitor, field)
            if not value:
                key = schema.model_fields[field].alias or field
                raise RequiredFieldMissing(schema.__name__, key, value)

        if monitor.interval_explicitly_set and monitor.interval_seconds <= 0:
            raise IntervalMustBePositive(monitor.interval_seconds)

        monitor.exclusion_filter()

    def datapoint_filter(self) -> DatapointFilterSet:
        """Compiled datapointsToExclude of the monitor."""
        return self.monitor_config.exclusion_filter()


def check_dimension_clients(value: Any) -> list[str]:
    """Ensure dimensionClients is a list of exporter names.

    Raises:
        InvalidDimensionClients: On any other shape
    """
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidDimensionClients()
    return value


def receiver_family(name: str) -> str:
    """Return the receiver type part of a ``type/identifier`` instance name."""
    return name.split(RECEIVER_NAME_SEPARATOR, 1)[0]


def load_receiver_config(
    name: str,
    fields: Mapping[str, Any] | None,
    catalog: MonitorCatalog | None = None,
) -> ReceiverConfig:
    """Build the receiver config for one named entry.

    Args:
        name: Receiver instance name, e.g. ``smartagent/redis``
        fields: Decoded config body of the entry
        catalog: Monitor catalog; the built-in one when omitted

    Returns:
        ReceiverConfig: The assembled, not yet validated, config

    Raises:
        ReceiverConfigError: Wrapping the cause, prefixed with the name
    """
    if catalog is None:
        catalog = default_catalog()
    if fields is None:
        fields = {}
    try:
        if not isinstance(fields, Mapping):
            raise FieldTypeMismatch(name, "a mapping of config fields", fields)
        endpoint = fields.get(ENDPOINT_KEY)
        if endpoint is None:
            endpoint = ""
        if not isinstance(endpoint, str):
            raise FieldTypeMismatch(ENDPOINT_KEY, "a valid string", endpoint)

        dimension_clients = fields.get(DIMENSION_CLIENTS_KEY)
        if dimension_clients is None:
            dimension_clients = []
        check_dimension_clients(dimension_clients)

        monitor_fields = {k: v for k, v in fields.items() if k not in RECEIVER_KEYS}
        monitor_config = bind_monitor_config(monitor_fields, catalog)
        monitor_config = apply_endpoint(
            endpoint, monitor_config, catalog.get(monitor_config.type)
        )

        config = ReceiverConfig(
            type_val=TYPE_STR,
            name_val=name,
            endpoint=endpoint,
            dimension_clients=list(dimension_clients),
            monitor_config=monitor_config,
        )
    except ConfigError as e:
        raise ReceiverConfigError(name, e) from e

    logger.debug("Loaded receiver %s (monitor type %s)", name, monitor_config.type)
    return config


def load_receivers(
    receivers: Mapping[str, Mapping[str, Any] | None],
    catalog: MonitorCatalog | None = None,
    validate: bool = True,
) -> dict[str, ReceiverConfig]:
    """Build and optionally validate every Smart Agent receiver entry.

    Entries of other receiver types are skipped. The first failing entry
    fails the whole load.

    Raises:
        ReceiverConfigError: For the first entry that cannot be loaded or,
            when ``validate`` is set, does not pass validation
    """
    if catalog is None:
        catalog = default_catalog()
    configs: dict[str, ReceiverConfig] = {}
    for name, fields in receivers.items():
        if receiver_family(name) != TYPE_STR:
            logger.debug("Skipping receiver %s, not a %s receiver", name, TYPE_STR)
            continue

        config = load_receiver_config(name, fields, catalog)
        if validate:
            try:
                config.validate_config()
            except ConfigError as e:
                raise ReceiverConfigError(name, e) from e
        configs[name] = config

    logger.info("Loaded %d %s receivers", len(configs), TYPE_STR)
    return configs
