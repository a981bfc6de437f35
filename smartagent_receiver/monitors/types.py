"""Field types and the base model shared by all monitor configs."""

import re
from datetime import timedelta
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from smartagent_receiver.constants import MAX_PORT
from smartagent_receiver.filtering import DatapointFilterSet, MetricFilter, compile_filters

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: Any) -> Any:
    """Parse Go-style durations ("5s", "1m30s", "250ms") and plain seconds."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    if not isinstance(value, str):
        raise PydanticCustomError(
            "duration_type", "Input should be a duration such as 5s or 1m30s"
        )

    text = value.strip()
    sign = 1
    if text[:1] in ("-", "+"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if not text or pos != len(text):
        raise PydanticCustomError(
            "duration_parsing",
            "Input should be a duration such as 5s or 1m30s, got {value}",
            {"value": value},
        )
    return timedelta(seconds=sign * total)


def format_duration(value: timedelta) -> str:
    micros = value // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < 1_000_000:
        if micros % 1000 == 0:
            return f"{sign}{micros // 1000}ms"
        return f"{sign}{micros}us"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    text = sign
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    return text + f"{rest / 1_000_000:g}s"


Duration = Annotated[
    timedelta,
    BeforeValidator(parse_duration),
    PlainSerializer(format_duration, return_type=str, when_used="json"),
]

Port = Annotated[int, Field(ge=0, le=MAX_PORT)]


class Required:
    """Marks a field that must hold a non-zero value once the config is complete."""

    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED = Required()


class SchemaModel(BaseModel):
    """Base for every model bound from monitor config fields.

    Keys are the camelCase field names; unknown keys are rejected. Numbers
    given for string fields are bound as their decimal text. Bound configs
    are frozen; use model_copy(update=...) to derive a changed one.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
        frozen=True,
    )

    @classmethod
    def required_fields(cls) -> tuple[str, ...]:
        return tuple(
            name
            for name, field in cls.model_fields.items()
            if any(isinstance(m, Required) for m in field.metadata)
        )


class MonitorConfig(SchemaModel):
    """Fields every monitor accepts."""

    type: str
    interval_seconds: int = 0
    datapoints_to_exclude: list[MetricFilter] = Field(default_factory=list)
    extra_groups: list[str] = Field(default_factory=list)
    extra_metrics: list[str] = Field(default_factory=list)
    extra_dimensions: dict[str, str] = Field(default_factory=dict)
    disable_host_dimensions: bool = False
    disable_endpoint_dimensions: bool = False

    @property
    def interval_explicitly_set(self) -> bool:
        return "interval_seconds" in self.model_fields_set

    def exclusion_filter(self) -> DatapointFilterSet:
        """Compile datapointsToExclude.

        Raises:
            FilterSyntaxError: If a filter pattern is malformed
        """
        return compile_filters(self.datapoints_to_exclude)
