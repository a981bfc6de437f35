"""Datapoint exclusion filters declared under ``datapointsToExclude``."""

import logging
from typing import Annotated, Any, Iterable, Mapping

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from smartagent_receiver.filtering.patterns import StringMatcher

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> Any:
    if isinstance(value, (str, int, float)):
        return [value]
    return value


# A single pattern or a list of them; dimension values accept both spellings
PatternList = Annotated[list[str], BeforeValidator(_as_list)]


class MetricFilter(BaseModel):
    """One exclusion rule as written in the monitor config.

    Patterns are kept as plain strings here; they are compiled when the
    receiver config is validated so that syntax errors are reported there.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
        frozen=True,
    )

    metric_name: str = ""
    metric_names: list[str] = Field(default_factory=list)
    dimensions: dict[str, PatternList] = Field(default_factory=dict)
    negated: bool = False

    def metric_name_patterns(self) -> list[str]:
        patterns = list(self.metric_names)
        if self.metric_name:
            patterns.insert(0, self.metric_name)
        return patterns


class DatapointFilter:
    """Compiled form of a single MetricFilter."""

    def __init__(
        self,
        metric_names: StringMatcher,
        dimensions: dict[str, StringMatcher],
        negated: bool = False,
    ) -> None:
        self.metric_names = metric_names
        self.dimensions = dimensions
        self.negated = negated

    def matches(self, metric_name: str, dimensions: Mapping[str, str] | None = None) -> bool:
        """Check whether a datapoint is matched by this filter.

        Args:
            metric_name: Name of the datapoint's metric
            dimensions: The datapoint's dimensions

        Returns:
            bool: True if the metric name and every declared dimension match,
            inverted when the filter is negated.
        """
        matched = self.metric_names.matches(metric_name) and self._dimensions_match(
            dimensions or {}
        )
        return matched != self.negated

    def _dimensions_match(self, dimensions: Mapping[str, str]) -> bool:
        for key, matcher in self.dimensions.items():
            value = dimensions.get(key)
            if value is None or not matcher.matches(value):
                return False
        return True


class DatapointFilterSet:
    """Union of compiled filters: a datapoint is excluded if any filter matches."""

    def __init__(self, filters: list[DatapointFilter]) -> None:
        self.filters = filters

    def __len__(self) -> int:
        return len(self.filters)

    def matches(self, metric_name: str, dimensions: Mapping[str, str] | None = None) -> bool:
        return any(f.matches(metric_name, dimensions) for f in self.filters)


def compile_filter(spec: MetricFilter) -> DatapointFilter:
    """Compile one filter spec.

    Raises:
        FilterSyntaxError: If any metric name or dimension pattern is malformed
    """
    dimensions = {}
    for key, patterns in spec.dimensions.items():
        dimensions[key] = StringMatcher(patterns)
    return DatapointFilter(
        metric_names=StringMatcher(spec.metric_name_patterns()),
        dimensions=dimensions,
        negated=spec.negated,
    )


def compile_filters(specs: Iterable[MetricFilter]) -> DatapointFilterSet:
    filters = [compile_filter(spec) for spec in specs]
    logger.debug("Compiled %d datapoint filters", len(filters))
    return DatapointFilterSet(filters)
