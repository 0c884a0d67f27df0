"""Object and array validators.

Composites delegate to child validators and re-locate child errors. Unlike
the fail-fast rule loop of a primitive, siblings are always all visited and
every child error is kept.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .base import Validator
from .exceptions import SchemaDefinitionError
from .options import ValidateOptions
from .result import ValidationError, ValidationResult
from .rules import MaxLength, MinLength


class ObjectValidator(Validator[dict]):
    """Validates mappings against an ordered field-to-validator schema."""

    type_message = "Must be an object"

    def __init__(self, schema: Mapping[str, Validator[Any]]):
        """Initialize with a schema.

        Args:
            schema: Field name to child validator, in evaluation order
        """
        super().__init__()
        if not isinstance(schema, Mapping):
            raise SchemaDefinitionError(
                "object() expects a mapping of field names to validators",
                context={"argument": schema},
            )
        for key, child in schema.items():
            if not isinstance(key, str) or not isinstance(child, Validator):
                raise SchemaDefinitionError(
                    f"Invalid schema entry for field {key!r}",
                    context={"field": key, "validator": child},
                )
        self._schema: dict[str, Validator[Any]] = dict(schema)

    @property
    def shape(self) -> Mapping[str, Validator[Any]]:
        """Read-only view of the schema."""
        return MappingProxyType(self._schema)

    def _check(
        self,
        value: Any,
        data: Mapping[str, Any] | None,
        options: ValidateOptions | None,
    ) -> ValidationResult[dict]:
        resolver = self._resolver(options)

        if value is None:
            return self._absent(value, resolver)

        if not isinstance(value, Mapping):
            return ValidationResult.fail_with(
                "type", resolver.resolve("type", self.type_message), value
            )

        errors: list[ValidationError] = []
        result: dict[str, Any] = {}

        for key, child in self._schema.items():
            field_result = child.validate(value.get(key), value, options)
            if field_result.success:
                if field_result.data is not None:
                    result[key] = field_result.data
            else:
                errors.extend(error.prefixed(key) for error in field_result.errors)

        if errors:
            return ValidationResult.fail(errors)
        return ValidationResult.ok(result)

    def __repr__(self) -> str:
        return f"ObjectValidator({', '.join(self._schema)})"


class ArrayValidator(Validator[list]):
    """Validates lists or tuples whose items all share one validator.

    Length bounds are checked before any item and stop the validation when
    violated.
    """

    type_message = "Must be an array"

    def __init__(self, item_validator: Validator[Any]):
        super().__init__()
        if not isinstance(item_validator, Validator):
            raise SchemaDefinitionError(
                "array() expects an item validator",
                context={"argument": item_validator},
            )
        self._item_validator = item_validator
        self._min_length: int | None = None
        self._max_length: int | None = None

    @property
    def item_validator(self) -> Validator[Any]:
        return self._item_validator

    def min(self, length: int) -> ArrayValidator:
        """Minimum number of elements (fluent API)."""
        self._ensure_mutable("min")
        self._min_length = MinLength(length).bound
        return self

    def max(self, length: int) -> ArrayValidator:
        """Maximum number of elements (fluent API)."""
        self._ensure_mutable("max")
        self._max_length = MaxLength(length).bound
        return self

    def _check(
        self,
        value: Any,
        data: Mapping[str, Any] | None,
        options: ValidateOptions | None,
    ) -> ValidationResult[list]:
        resolver = self._resolver(options)

        if value is None:
            return self._absent(value, resolver)

        if not isinstance(value, (list, tuple)):
            return ValidationResult.fail_with(
                "type", resolver.resolve("type", self.type_message), value
            )

        if self._min_length is not None and len(value) < self._min_length:
            return ValidationResult.fail_with(
                "min",
                resolver.resolve(
                    "min", f"Array length must be at least {self._min_length} elements"
                ),
                value,
            )

        if self._max_length is not None and len(value) > self._max_length:
            return ValidationResult.fail_with(
                "max",
                resolver.resolve(
                    "max", f"Array length must not exceed {self._max_length} elements"
                ),
                value,
            )

        errors: list[ValidationError] = []
        result: list[Any] = []

        for index, item in enumerate(value):
            item_result = self._item_validator.validate(item, None, options)
            if item_result.success:
                if item_result.data is not None:
                    result.append(item_result.data)
            else:
                errors.extend(error.prefixed(index) for error in item_result.errors)

        if errors:
            return ValidationResult.fail(errors)
        return ValidationResult.ok(result)

    def __repr__(self) -> str:
        return f"ArrayValidator({self._item_validator!r})"
