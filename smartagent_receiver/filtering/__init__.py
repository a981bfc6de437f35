"""Metric and dimension filtering for datapoint exclusion."""

from .patterns import Pattern, StringMatcher, compile_pattern
from .filters import (
    DatapointFilter,
    DatapointFilterSet,
    MetricFilter,
    compile_filter,
    compile_filters,
)

__all__ = [
    "Pattern",
    "StringMatcher",
    "compile_pattern",
    "DatapointFilter",
    "DatapointFilterSet",
    "MetricFilter",
    "compile_filter",
    "compile_filters",
]
