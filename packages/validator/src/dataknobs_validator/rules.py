"""Named rules evaluated by primitive validators.

A rule sees a value that has already passed the validator's type check and
answers with literal ``True`` (pass), a ``str`` (fail with that exact
message) or anything else (fail with the resolved message for ``name``).
"""

from __future__ import annotations

import logging
import math
import re
from abc import ABC, abstractmethod
from numbers import Real
from re import Pattern as RegexPattern
from typing import Any, TYPE_CHECKING
from urllib.parse import urlsplit

from .exceptions import SchemaDefinitionError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(
    r"""^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"""
    r"""(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*\Z"""
)

# Schemes whose URLs are meaningless without a host.
HIERARCHICAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def format_number(value: Real) -> str:
    """Render a bound the way users wrote it: ``18`` rather than ``18.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_absolute_url(text: str) -> bool:
    """True when ``text`` parses as an absolute URL."""
    try:
        parts = urlsplit(text.strip())
        parts.port  # raises ValueError for a malformed port
    except ValueError:
        return False
    if not parts.scheme or any(c.isspace() for c in parts.netloc):
        return False
    if parts.scheme.lower() in HIERARCHICAL_SCHEMES:
        if parts.netloc:
            return bool(parts.hostname)
        # "http:example.com" and "http:/example.com" name the host in the path
        host = parts.path.lstrip("/").split("/", 1)[0]
        return bool(host) and not any(c.isspace() for c in host)
    return bool(parts.netloc or parts.path)


class Rule(ABC):
    """Base class for rules."""

    name: str = "custom"
    default_message: str = "Validation failed"

    @abstractmethod
    def check(self, value: Any) -> Any:
        """Evaluate the rule.

        Args:
            value: Type-checked value

        Returns:
            True to pass; a str or any other value to fail
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class NonBlank(Rule):
    """String must contain something other than whitespace."""

    name = "required"
    default_message = "This field is required"

    def check(self, value: str) -> bool:
        return len(value.strip()) > 0


class _Bound(Rule):
    """Shared argument checking for min/max rules."""

    def __init__(self, bound: Any):
        if isinstance(bound, bool) or not isinstance(bound, Real) or (
            isinstance(bound, float) and math.isnan(bound)
        ):
            raise SchemaDefinitionError(
                f"{self.name} bound must be a number",
                context={"rule": self.name, "argument": bound},
            )
        self.bound = bound


class _LengthBound(_Bound):
    def __init__(self, bound: Any):
        if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
            raise SchemaDefinitionError(
                "Length bound must be a non-negative integer",
                context={"rule": self.name, "argument": bound},
            )
        self.bound = bound


class MinLength(_LengthBound):
    name = "min"

    @property
    def default_message(self) -> str:  # type: ignore[override]
        return f"String length must be at least {self.bound} characters"

    def check(self, value: str) -> bool:
        return len(value) >= self.bound


class MaxLength(_LengthBound):
    name = "max"

    @property
    def default_message(self) -> str:  # type: ignore[override]
        return f"String length must not exceed {self.bound} characters"

    def check(self, value: str) -> bool:
        return len(value) <= self.bound


class MinValue(_Bound):
    name = "min"

    @property
    def default_message(self) -> str:  # type: ignore[override]
        return f"Must be at least {format_number(self.bound)}"

    def check(self, value: Real) -> bool:
        return value >= self.bound


class MaxValue(_Bound):
    name = "max"

    @property
    def default_message(self) -> str:  # type: ignore[override]
        return f"Must not exceed {format_number(self.bound)}"

    def check(self, value: Real) -> bool:
        return value <= self.bound


class Integer(Rule):
    name = "integer"
    default_message = "Must be an integer"

    def check(self, value: Real) -> bool:
        if isinstance(value, int):
            return True
        return math.isfinite(value) and value == math.floor(value)


class Pattern(Rule):
    """String must contain a match for a regular expression."""

    name = "pattern"
    default_message = "Invalid string format"

    def __init__(self, pattern: str | RegexPattern):
        """Initialize pattern rule.

        Args:
            pattern: Regex pattern (string or compiled pattern)
        """
        if isinstance(pattern, str):
            try:
                self.regex = re.compile(pattern)
            except re.error as e:
                raise SchemaDefinitionError(
                    f"Invalid regular expression: {e}",
                    context={"rule": self.name, "pattern": pattern},
                ) from e
        elif isinstance(pattern, RegexPattern):
            self.regex = pattern
        else:
            raise SchemaDefinitionError(
                "pattern() expects a string or compiled regular expression",
                context={"rule": self.name, "argument": pattern},
            )

    def check(self, value: str) -> bool:
        return self.regex.search(value) is not None


class EmailFormat(Pattern):
    """The rule registered by ``StringValidator.email()``."""

    name = "email"
    default_message = "Invalid email format"

    def __init__(self) -> None:
        super().__init__(EMAIL_PATTERN)


class Custom(Rule):
    """Wraps a user predicate; always reports under the ``custom`` rule name."""

    def __init__(self, predicate: Callable[[Any], Any]):
        if not callable(predicate):
            raise SchemaDefinitionError(
                "custom() expects a callable",
                context={"rule": self.name, "argument": predicate},
            )
        self.predicate = predicate

    def check(self, value: Any) -> Any:
        try:
            return self.predicate(value)
        except Exception as e:
            logger.debug("Custom rule raised for %s value: %s", type(value).__name__, e)
            return f"Custom validation error: {e!s}"


def url_predicate(value: str) -> bool | str:
    """Predicate pre-registered by ``UrlValidator``."""
    return True if is_absolute_url(value) else "Invalid URL format"
