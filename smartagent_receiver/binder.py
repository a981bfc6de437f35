"""Bind a generic field map onto the config schema of its monitor type."""

import logging
import types
from typing import Annotated, Any, Mapping, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from smartagent_receiver.constants import MONITOR_TYPE_KEY
from smartagent_receiver.errors import (
    FieldTypeMismatch,
    MissingMonitorType,
    UnsupportedField,
)
from smartagent_receiver.monitors import MonitorCatalog, MonitorConfig, SchemaDescriptor

logger = logging.getLogger(__name__)

_MESSAGE_PREFIX = "Input should be "


def format_location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as ``a.b[0].c``."""
    text = ""
    for part in loc:
        if isinstance(part, int):
            text += f"[{part}]"
        else:
            text += f".{part}" if text else str(part)
    return text


def _unwrap(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if get_origin(annotation) in (Union, types.UnionType):
        members = [m for m in get_args(annotation) if m is not type(None)]
        if len(members) == 1:
            return _unwrap(members[0])
    return annotation


def _field_annotation(model: type[BaseModel], key: int | str) -> Any:
    for name, field in model.model_fields.items():
        if key in (field.alias, name):
            return field.annotation
    return None


def resolve_location(
    model: type[BaseModel], loc: tuple[int | str, ...]
) -> tuple[tuple[int | str, ...], type[BaseModel]]:
    """Map a pydantic error location back onto the config keys.

    Union member tags that pydantic inserts into the location are dropped.

    Returns:
        tuple: The cleaned location and the model owning its last key
    """
    path: list[int | str] = []
    owner = model
    current: Any = model
    for part in loc:
        current = _unwrap(current)
        if get_origin(current) in (Union, types.UnionType):
            # The part names the union member that failed, not a config key
            current = None
            continue
        path.append(part)
        origin = get_origin(current)
        if origin is dict:
            current = get_args(current)[1]
        elif origin in (list, tuple, set, frozenset):
            current = get_args(current)[0]
        elif isinstance(current, type) and issubclass(current, BaseModel):
            owner = current
            current = _field_annotation(current, part)
        else:
            current = None
    return tuple(path), owner


def translate_validation_error(
    error: ValidationError, descriptor: SchemaDescriptor
) -> UnsupportedField | FieldTypeMismatch:
    """Turn the first pydantic error into the matching config error."""
    first = error.errors()[0]
    loc, owner = resolve_location(descriptor.config_class, first["loc"])
    field = format_location(loc)
    if first["type"] == "extra_forbidden":
        return UnsupportedField(field, owner.__name__)

    expected = first["msg"]
    if expected.startswith(_MESSAGE_PREFIX):
        expected = expected[len(_MESSAGE_PREFIX):]
    return FieldTypeMismatch(field, expected, first.get("input"))


def bind_monitor_config(
    fields: Mapping[str, Any], catalog: MonitorCatalog
) -> MonitorConfig:
    """Decode a receiver's monitor fields into the schema for its type.

    Args:
        fields: Monitor fields including ``type``; receiver-level keys must
            already be removed.
        catalog: Catalog used to resolve the monitor type.

    Returns:
        MonitorConfig: A fully bound instance of the type's config class.

    Raises:
        MissingMonitorType: If ``type`` is absent or empty
        UnknownMonitorType: If ``type`` is not in the catalog
        UnsupportedField: If a key does not exist on the schema
        FieldTypeMismatch: If a value cannot be coerced to its field type
    """
    monitor_type = fields.get(MONITOR_TYPE_KEY)
    if monitor_type is None or monitor_type == "":
        raise MissingMonitorType()

    descriptor = catalog.get(monitor_type)
    logger.debug("Binding %s config onto %s", monitor_type, descriptor.name)
    try:
        return descriptor.config_class.model_validate(dict(fields))
    except ValidationError as e:
        raise translate_validation_error(e, descriptor) from e
