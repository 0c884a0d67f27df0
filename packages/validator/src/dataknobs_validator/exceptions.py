"""Exception hierarchy for dataknobs_validator.

Validation itself never raises: failures are reported through
``ValidationResult.errors``. The exceptions here cover programming errors
made while *building* a schema, misuse of a frozen schema, invalid option
sources, and the opt-in ``ValidationResult.raise_for_errors()`` path.

Example:
    ```python
    from dataknobs_validator import ValidatorError, string

    try:
        string().min(-1)
    except ValidatorError as e:
        logger.error(f"Bad schema: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class ValidatorError(Exception):
    """Base exception for all dataknobs_validator errors.

    Attributes:
        context: Rule, argument or field details for the failure; empty when
            there is nothing to add

    Example:
        ```python
        error = ValidatorError(
            "Bad rule argument",
            context={"rule": "min", "argument": -1}
        )
        str(error)
        # 'Bad rule argument'
        error.context
        # {'rule': 'min', 'argument': -1}
        ```
    """

    def __init__(self, message: str, context: Dict[str, Any] | None = None):
        super().__init__(message)
        self.context = dict(context) if context else {}


class SchemaDefinitionError(ValidatorError):
    """Raised when a builder call receives an unusable argument.

    Common scenarios include:
    - Negative or non-numeric length bounds
    - Regular expressions that do not compile
    - Non-callable ``custom`` or ``transform`` arguments
    - Object schemas whose entries are not validators

    Example:
        ```python
        raise SchemaDefinitionError(
            "Length bound must be a non-negative integer",
            context={"rule": "min", "argument": -1}
        )
        ```
    """

    pass


class SchemaFrozenError(ValidatorError):
    """Raised when a builder is called on a validator that has already validated.

    Validators are configured once and then shared; the first ``validate()``
    call freezes them so concurrent callers never observe a changing rule list.
    """

    pass


class ConfigurationError(ValidatorError):
    """Raised when validation options cannot be loaded.

    Example:
        ```python
        raise ConfigurationError(
            "Message overrides must map strings to strings",
            context={"key": 3}
        )
        ```
    """

    pass


class ValidationFailedError(ValidatorError):
    """Raised by ``ValidationResult.raise_for_errors()`` for a failed result.

    The serialized errors are available as ``context["errors"]``.
    """

    def __init__(self, errors: list[Any]):
        self.errors = list(errors)
        count = len(self.errors)
        first = self.errors[0] if self.errors else None
        if first is not None:
            where = first.path or "<root>"
            message = f"Validation failed with {count} error(s); first at {where}: {first.message}"
        else:
            message = "Validation failed"
        super().__init__(
            message,
            context={"errors": [error.to_dict() for error in self.errors]},
        )


__all__ = [
    "ValidatorError",
    "SchemaDefinitionError",
    "SchemaFrozenError",
    "ConfigurationError",
    "ValidationFailedError",
]
