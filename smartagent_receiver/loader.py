"""Read Smart Agent receivers from a collector config file."""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from smartagent_receiver.config import ReceiverConfig, load_receivers
from smartagent_receiver.constants import RECEIVERS_SECTION
from smartagent_receiver.errors import ConfigError
from smartagent_receiver.monitors import MonitorCatalog

logger = logging.getLogger(__name__)

_ENV_TOKEN_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-(.*?))?\}")


def read_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file and expand ``${VAR}`` references.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        ConfigError: If the document is not a mapping or references an
            undefined environment variable without a default
    """
    if not path.exists():
        raise FileNotFoundError(f"config file does not exist: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    return expand_env(raw)


def load_config_file(
    path: Path, catalog: MonitorCatalog | None = None, validate: bool = True
) -> dict[str, ReceiverConfig]:
    """Load every Smart Agent receiver declared under ``receivers:``."""
    logger.info("Loading receivers from %s", path)
    document = read_config_file(path)
    receivers = document.get(RECEIVERS_SECTION) or {}
    if not isinstance(receivers, dict):
        raise ConfigError(f"'{RECEIVERS_SECTION}' must be a mapping of receiver names")
    return load_receivers(receivers, catalog=catalog, validate=validate)


def expand_env(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if isinstance(value, str):
        return _expand_string(value)
    return value


def _expand_string(value: str) -> str:
    if "${" not in value:
        return value

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        default = match.group(2)
        resolved = os.environ.get(name)
        if resolved is not None:
            return resolved
        if default is not None:
            return default
        raise ConfigError(
            f"missing required environment variable '{name}' referenced by '{match.group(0)}'"
        )

    return _ENV_TOKEN_RE.sub(_replace, value)
