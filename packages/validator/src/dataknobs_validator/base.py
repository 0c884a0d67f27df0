"""Validator contract and the shared primitive pipeline.

Validators are mutable builders until their first ``validate()`` call, which
freezes them. After that they hold no per-call state and may be shared
freely, including across threads; further builder calls raise
``SchemaFrozenError``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, TypeVar, TYPE_CHECKING

from .exceptions import SchemaDefinitionError, SchemaFrozenError
from .options import MessageResolver, ValidateOptions
from .result import ValidationResult
from .rules import Custom, Rule

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUIRED_MESSAGE = "This field is required"

_NO_DEFAULT: Any = object()

OptionsArg = ValidateOptions | Mapping[str, Any] | None


class Validator(ABC, Generic[T]):
    """Base class for all validators.

    Subclasses implement ``_check``; callers use ``validate``.
    """

    type_message: str = "Invalid type"

    def __init__(self) -> None:
        self._required = False
        self._messages: dict[str, str] = {}
        self._frozen = False

    def validate(
        self,
        value: Any,
        data: Mapping[str, Any] | None = None,
        options: OptionsArg = None,
    ) -> ValidationResult[T]:
        """Validate a value.

        Args:
            value: Untyped input
            data: The enclosing mapping when this validator checks a field
            options: Call-site options; a plain dict is read as
                ``{"messages": {...}}``

        Returns:
            ValidationResult; never raises for any input value
        """
        self._frozen = True
        return self._check(value, data, ValidateOptions.coerce(options))

    async def validate_async(
        self,
        value: Any,
        data: Mapping[str, Any] | None = None,
        options: OptionsArg = None,
    ) -> ValidationResult[T]:
        """Asynchronous hook; the built-in validators never await anything."""
        return self.validate(value, data, options)

    @abstractmethod
    def _check(
        self,
        value: Any,
        data: Mapping[str, Any] | None,
        options: ValidateOptions | None,
    ) -> ValidationResult[T]:
        pass

    @property
    def is_required(self) -> bool:
        return self._required

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _ensure_mutable(self, builder: str) -> None:
        if self._frozen:
            raise SchemaFrozenError(
                f"Cannot call {builder}() on a validator that has already been used",
                context={"validator": type(self).__name__, "builder": builder},
            )

    def _resolver(self, options: ValidateOptions | None) -> MessageResolver:
        return MessageResolver(options, self._messages)

    def _absent(self, value: Any, resolver: MessageResolver) -> ValidationResult[T]:
        """Result for a None input when no default applies."""
        if self._required:
            return ValidationResult.fail_with(
                "required", resolver.resolve("required", REQUIRED_MESSAGE), value
            )
        return ValidationResult.ok(None)

    def required(self):
        """Mark the value as required (fluent API)."""
        self._ensure_mutable("required")
        self._required = True
        return self

    def optional(self):
        """Mark the value as optional (fluent API)."""
        self._ensure_mutable("optional")
        self._required = False
        return self

    def message(self, rule: str, text: str):
        """Override the default message for one rule (fluent API).

        Args:
            rule: Rule name, e.g. ``"min"``
            text: Literal replacement message

        Returns:
            Self for chaining
        """
        self._ensure_mutable("message")
        if not isinstance(rule, str) or not isinstance(text, str):
            raise SchemaDefinitionError(
                "message() expects a rule name and a message string",
                context={"rule": rule, "message": text},
            )
        self._messages[rule] = text
        return self

    def __repr__(self) -> str:
        flag = "required" if self._required else "optional"
        return f"{type(self).__name__}({flag})"


class PrimitiveValidator(Validator[T]):
    """Pipeline shared by scalar validators.

    Order: default/required handling, transform, type check, then registered
    rules in registration order, stopping at the first failure.
    """

    def __init__(self) -> None:
        super().__init__()
        self._rules: list[Rule] = []
        self._default: Any = _NO_DEFAULT
        self._transform_fn: Callable[[Any], Any] | None = None

    @abstractmethod
    def _accepts(self, value: Any) -> bool:
        """Type check for the (possibly transformed) value."""
        pass

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def _add_rule(self, rule: Rule, builder: str):
        self._ensure_mutable(builder)
        self._rules.append(rule)
        return self

    def default(self, value: Any):
        """Value substituted for a missing (None) input (fluent API).

        ``default(None)`` clears any configured default.
        """
        self._ensure_mutable("default")
        self._default = _NO_DEFAULT if value is None else value
        return self

    def custom(self, predicate: Callable[[Any], Any]):
        """Add a rule backed by a callable (fluent API).

        The callable passes by returning literal True; a returned string is
        used verbatim as the error message.
        """
        return self._add_rule(Custom(predicate), "custom")

    def transform(self, fn: Callable[[Any], Any]):
        """Convert present values before the type check (fluent API)."""
        self._ensure_mutable("transform")
        if not callable(fn):
            raise SchemaDefinitionError(
                "transform() expects a callable",
                context={"argument": fn},
            )
        self._transform_fn = fn
        return self

    def _check(
        self,
        value: Any,
        data: Mapping[str, Any] | None,
        options: ValidateOptions | None,
    ) -> ValidationResult[T]:
        resolver = self._resolver(options)

        if value is None:
            if self._default is _NO_DEFAULT:
                return self._absent(value, resolver)
            value = self._default

        if self._transform_fn is not None:
            try:
                value = self._transform_fn(value)
            except Exception as e:
                logger.debug("Transform raised for %s value: %s", type(value).__name__, e)
                return ValidationResult.fail_with(
                    "transform", resolver.resolve("transform", f"Transform failed: {e!s}"), value
                )

        if not self._accepts(value):
            return ValidationResult.fail_with(
                "type", resolver.resolve("type", self.type_message), value
            )

        for rule in self._rules:
            outcome = rule.check(value)
            if outcome is True:
                continue
            if isinstance(outcome, str):
                text = outcome
            else:
                text = resolver.resolve(rule.name, rule.default_message)
            return ValidationResult.fail_with(rule.name, text, value)

        return ValidationResult.ok(value)
