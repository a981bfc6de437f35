"""String patterns used by metric and dimension filters.

A pattern is one of:

- ``/expr/``: a regular expression, matched anywhere in the value;
- a glob: ``*`` matches any run of characters, ``?`` a single character,
  ``[abc]``, ``[a-z]`` and ``[!abc]`` are character classes, ``{a,b}`` are
  alternatives and ``\\`` escapes the next character;
- anything else is compared literally.

A leading ``!`` negates the pattern.
"""

import logging
import re
from typing import Iterable

from smartagent_receiver.errors import FilterSyntaxError

logger = logging.getLogger(__name__)

GLOB_CHARS = frozenset("*?[{\\")
UNEXPECTED_END = "unexpected end of input"


class Pattern:
    """A single compiled pattern."""

    __slots__ = ("source", "negated", "_literal", "_regex")

    def __init__(
        self,
        source: str,
        negated: bool = False,
        literal: str | None = None,
        regex: re.Pattern[str] | None = None,
    ) -> None:
        self.source = source
        self.negated = negated
        self._literal = literal
        self._regex = regex

    @property
    def is_literal(self) -> bool:
        return self._regex is None

    def match(self, value: str) -> bool:
        """Check the value against the pattern, ignoring negation."""
        if self._regex is None:
            return value == self._literal
        return self._regex.search(value) is not None

    def __repr__(self) -> str:
        return f"Pattern({self.source!r})"


def is_regex(pattern: str) -> bool:
    return len(pattern) > 2 and pattern.startswith("/") and pattern.endswith("/")


def is_glob(pattern: str) -> bool:
    return any(ch in GLOB_CHARS for ch in pattern)


def compile_pattern(pattern: str) -> Pattern:
    """Compile a pattern string.

    Args:
        pattern: Pattern source, optionally prefixed with ``!``.

    Returns:
        Pattern: The compiled pattern.

    Raises:
        FilterSyntaxError: If the regex or glob syntax is malformed.
    """
    negated = pattern.startswith("!")
    body = pattern[1:] if negated else pattern

    if is_regex(body):
        try:
            regex = re.compile(body[1:-1])
        except re.error as e:
            raise FilterSyntaxError(pattern, str(e)) from e
        return Pattern(pattern, negated=negated, regex=regex)

    if is_glob(body):
        translated, _ = _translate_glob(pattern, body, 0, in_group=False)
        try:
            regex = re.compile(rf"\A{translated}\Z", re.DOTALL)
        except re.error as e:
            raise FilterSyntaxError(pattern, str(e)) from e
        return Pattern(pattern, negated=negated, regex=regex)

    return Pattern(pattern, negated=negated, literal=body)


def _translate_glob(
    source: str, glob: str, pos: int, in_group: bool
) -> tuple[str, int]:
    """Translate a glob (or one alternative of a ``{...}`` group) to a regex."""
    parts: list[str] = []
    end = len(glob)
    while pos < end:
        ch = glob[pos]
        if ch == "\\":
            if pos + 1 >= end:
                raise FilterSyntaxError(source, UNEXPECTED_END)
            parts.append(re.escape(glob[pos + 1]))
            pos += 2
        elif ch == "*":
            # Collapse runs of stars, "**" means the same as "*" here
            while pos < end and glob[pos] == "*":
                pos += 1
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
            pos += 1
        elif ch == "[":
            char_class, pos = _translate_class(source, glob, pos + 1)
            parts.append(char_class)
        elif ch == "{":
            alternatives: list[str] = []
            pos += 1
            while True:
                alternative, pos = _translate_glob(source, glob, pos, in_group=True)
                alternatives.append(alternative)
                if pos >= end:
                    raise FilterSyntaxError(source, UNEXPECTED_END)
                pos += 1
                if glob[pos - 1] == "}":
                    break
            parts.append("(?:" + "|".join(alternatives) + ")")
        elif in_group and ch in ",}":
            return "".join(parts), pos
        else:
            parts.append(re.escape(ch))
            pos += 1
    return "".join(parts), pos


def _translate_class(source: str, glob: str, pos: int) -> tuple[str, int]:
    """Translate the body of a ``[...]`` class starting right after the bracket."""
    end = len(glob)
    negate = False
    if pos < end and glob[pos] in "!^":
        negate = True
        pos += 1

    items: list[str] = []
    while True:
        if pos >= end:
            raise FilterSyntaxError(source, UNEXPECTED_END)
        ch = glob[pos]
        if ch == "]":
            if not items:
                raise FilterSyntaxError(source, "empty character class")
            pos += 1
            break
        if ch == "\\":
            if pos + 1 >= end:
                raise FilterSyntaxError(source, UNEXPECTED_END)
            ch = glob[pos + 1]
            pos += 2
        else:
            pos += 1

        if pos < end and glob[pos] == "-":
            if pos + 1 >= end:
                raise FilterSyntaxError(source, UNEXPECTED_END)
            high = glob[pos + 1]
            if high != "]":
                if high < ch:
                    raise FilterSyntaxError(source, f"invalid range {ch}-{high}")
                items.append(f"{re.escape(ch)}-{re.escape(high)}")
                pos += 2
                continue
        items.append(re.escape(ch))

    return "[" + ("^" if negate else "") + "".join(items) + "]", pos


class StringMatcher:
    """Match strings against a set of patterns, some of which may be negated.

    A value matches when none of the negated patterns match it and either one
    of the positive patterns matches it or there are only negated patterns.
    An empty matcher matches nothing.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        compiled = [compile_pattern(p) for p in patterns]
        self.literals = {p._literal for p in compiled if p.is_literal and not p.negated}
        self.positive = [p for p in compiled if not p.is_literal and not p.negated]
        self.negative = [p for p in compiled if p.negated]
        logger.debug(
            "Compiled string matcher with %d literal, %d pattern and %d negated entries",
            len(self.literals),
            len(self.positive),
            len(self.negative),
        )

    @property
    def empty(self) -> bool:
        return not (self.literals or self.positive or self.negative)

    def matches(self, value: str) -> bool:
        if any(p.match(value) for p in self.negative):
            return False
        if self.literals or self.positive:
            return value in self.literals or any(p.match(value) for p in self.positive)
        return bool(self.negative)
