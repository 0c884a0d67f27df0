"""String, number and boolean validators, plus the email and URL variants."""

from __future__ import annotations

import math
from numbers import Real
from re import Pattern as RegexPattern
from typing import Any

from .base import PrimitiveValidator
from .rules import (
    EMAIL_PATTERN,
    EmailFormat,
    Integer,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    NonBlank,
    Pattern,
    url_predicate,
)


class StringValidator(PrimitiveValidator[str]):
    """Validates ``str`` values.

    ``required()`` means *non-blank* here: besides rejecting None it registers
    a rule that fails for strings that are empty after stripping whitespace.
    """

    type_message = "Must be a string"

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def required(self) -> StringValidator:
        super().required()
        if not any(isinstance(rule, NonBlank) for rule in self._rules):
            self._rules.append(NonBlank())
        return self

    def optional(self) -> StringValidator:
        super().optional()
        self._rules = [rule for rule in self._rules if not isinstance(rule, NonBlank)]
        return self

    def min(self, length: int) -> StringValidator:
        """Minimum length in characters (fluent API)."""
        return self._add_rule(MinLength(length), "min")

    def max(self, length: int) -> StringValidator:
        """Maximum length in characters (fluent API)."""
        return self._add_rule(MaxLength(length), "max")

    def pattern(self, regex: str | RegexPattern) -> StringValidator:
        """String must contain a match for ``regex`` (fluent API)."""
        return self._add_rule(Pattern(regex), "pattern")

    def email(self) -> StringValidator:
        """String must look like an email address (fluent API)."""
        return self._add_rule(EmailFormat(), "email")


class NumberValidator(PrimitiveValidator[float]):
    """Validates real numbers. ``bool`` and NaN are rejected."""

    type_message = "Must be a number"

    def _accepts(self, value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, Real):
            return False
        return not (isinstance(value, float) and math.isnan(value))

    def min(self, value: float) -> NumberValidator:
        return self._add_rule(MinValue(value), "min")

    def max(self, value: float) -> NumberValidator:
        return self._add_rule(MaxValue(value), "max")

    def integer(self) -> NumberValidator:
        """Value must be integral; ``3.0`` passes (fluent API)."""
        return self._add_rule(Integer(), "integer")


class BooleanValidator(PrimitiveValidator[bool]):
    type_message = "Must be a boolean"

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, bool)


class EmailValidator(StringValidator):
    """A string validator with an email ``pattern`` rule registered up front.

    Failures report under the ``pattern`` rule, unlike ``string().email()``
    which reports under ``email``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.pattern(EMAIL_PATTERN)


class UrlValidator(StringValidator):
    """A string validator with a URL ``custom`` rule registered up front."""

    def __init__(self) -> None:
        super().__init__()
        self.custom(url_predicate)
