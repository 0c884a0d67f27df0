"""Factories and top-level entry points.

Example:
    ```python
    from dataknobs_validator import number, object, string, validate

    schema = object({
        "name": string().min(2).required(),
        "age": number().min(18).required(),
    })

    result = validate({"name": "Alice", "age": 25}, schema)
    if result:
        print(result.data)
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from .base import OptionsArg, Validator
from .composites import ArrayValidator, ObjectValidator
from .primitives import (
    BooleanValidator,
    EmailValidator,
    NumberValidator,
    StringValidator,
    UrlValidator,
)
from .result import ValidationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def string() -> StringValidator:
    return StringValidator()


def number() -> NumberValidator:
    return NumberValidator()


def boolean() -> BooleanValidator:
    return BooleanValidator()


def email() -> EmailValidator:
    return EmailValidator()


def url() -> UrlValidator:
    return UrlValidator()


def object(schema: Mapping[str, Validator[Any]]) -> ObjectValidator:  # noqa: A001
    """Create an object validator from a field-to-validator mapping."""
    return ObjectValidator(schema)


def array(item_validator: Validator[Any]) -> ArrayValidator:
    """Create an array validator applying ``item_validator`` to every element."""
    return ArrayValidator(item_validator)


def _log_outcome(result: ValidationResult[Any], validator: Any) -> None:
    if not result.success:
        logger.debug(
            f"Validation against {validator!r} failed with {len(result.errors)} error(s): "
            f"{', '.join(result.paths) or '<root>'}"
        )


def validate(
    value: Any,
    validator: Validator[T],
    options: OptionsArg = None,
) -> ValidationResult[T]:
    """Validate a value.

    Args:
        value: Value to validate
        validator: Validator (schema) to apply
        options: Optional ``ValidateOptions`` or ``{"messages": {...}}``;
            messages override the validator's own and the built-in ones

    Returns:
        ValidationResult
    """
    result = validator.validate(value, None, options)
    _log_outcome(result, validator)
    return result


async def validate_async(
    value: Any,
    validator: Validator[T],
    options: OptionsArg = None,
) -> ValidationResult[T]:
    """Validate a value, awaiting the validator's async hook when it has one.

    None of the built-in validators await anything, so this currently yields
    the same result as ``validate``.
    """
    hook = getattr(validator, "validate_async", None)
    if hook is not None:
        result = await hook(value, None, options)
    else:
        result = validator.validate(value, None, options)
    _log_outcome(result, validator)
    return result


def validate_all(
    value: Any,
    validator: Validator[T],
    options: OptionsArg = None,
) -> ValidationResult[T]:
    """Validate a value and collect all errors.

    Composite validators already report every failing field and element, so
    this is the same as ``validate``. Within one field, evaluation still stops
    at the first failing rule.
    """
    return validate(value, validator, options)
