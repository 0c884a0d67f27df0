"""Validation result types with a stable, serializable shape.

Error locations are kept as a tuple of segments (``str`` field names and
``int`` array indices) while results travel up through nested validators, and
only rendered to dotted/bracketed text by ``ValidationError.path``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from .exceptions import ValidationFailedError

T = TypeVar("T")

PathSegment = str | int

_INDEX_SEGMENT = re.compile(r"^\[(\d+)\]$")


def render_path(segments: tuple[PathSegment, ...]) -> str:
    """Render path segments as text.

    Field names are joined with ``.`` and indices are written as ``[i]``, so
    ``("items", 0, "sku")`` renders as ``items.[0].sku``. The root is ``""``.
    """
    return ".".join(
        f"[{segment}]" if isinstance(segment, int) else segment
        for segment in segments
    )


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Inverse of ``render_path``."""
    if not path:
        return ()
    segments: list[PathSegment] = []
    for part in path.split("."):
        match = _INDEX_SEGMENT.match(part)
        segments.append(int(match.group(1)) if match else part)
    return tuple(segments)


@dataclass(frozen=True)
class ValidationError:
    """A single failed rule evaluation.

    Attributes:
        segments: Location of the offending value, outermost first
        message: Human-readable message
        value: The offending value
        rule: Name of the failed rule (``required``, ``type``, ``min``, ...)
    """

    segments: tuple[PathSegment, ...]
    message: str
    value: Any
    rule: str | None = None

    @property
    def path(self) -> str:
        return render_path(self.segments)

    def prefixed(self, segment: PathSegment) -> ValidationError:
        """Return a copy of this error located one level deeper."""
        return replace(self, segments=(segment, *self.segments))

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "message": self.message,
            "value": self.value,
            "rule": self.rule,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationError:
        return cls(
            segments=parse_path(data.get("path", "")),
            message=data["message"],
            value=data.get("value"),
            rule=data.get("rule"),
        )


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of validating one value against one validator.

    ``success`` is true iff ``errors`` is empty, and ``data`` is only set on
    success.
    """

    success: bool
    data: T | None = None
    errors: list[ValidationError] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.success

    @classmethod
    def ok(cls, data: T | None = None) -> ValidationResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, errors=[])

    @classmethod
    def fail(cls, errors: list[ValidationError]) -> ValidationResult[T]:
        """Create a failed result from one or more errors."""
        return cls(success=False, data=None, errors=list(errors))

    @classmethod
    def fail_with(cls, rule: str, message: str, value: Any) -> ValidationResult[T]:
        """Create a failed result holding a single root-level error."""
        return cls.fail([ValidationError((), message, value, rule)])

    @property
    def paths(self) -> list[str]:
        """Rendered paths of all errors, in report order."""
        return [error.path for error in self.errors]

    def errors_for(self, path: str) -> list[ValidationError]:
        """Errors reported for one rendered path."""
        return [error for error in self.errors if error.path == path]

    def raise_for_errors(self) -> ValidationResult[T]:
        """Raise ``ValidationFailedError`` when this result failed.

        Returns:
            Self for chaining when the result succeeded
        """
        if not self.success:
            raise ValidationFailedError(self.errors)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to the response-body shape.

        ``data`` is omitted when the result failed or resolved to nothing.
        """
        result: dict[str, Any] = {"success": self.success}
        if self.success and self.data is not None:
            result["data"] = self.data
        result["errors"] = [error.to_dict() for error in self.errors]
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationResult[Any]:
        errors = [ValidationError.from_dict(error) for error in data.get("errors", [])]
        return cls(success=not errors, data=data.get("data") if not errors else None, errors=errors)
