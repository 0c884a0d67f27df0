"""Runtime schema validation with composable validators.

This package provides:
- Primitive validators (string, number, boolean, email, url) with ordered,
  fail-fast rules
- Object and array validators that aggregate errors across all fields and
  elements, each error carrying the path of the offending value
- Message overrides per validator or per call
- A stable, serializable ``ValidationResult`` shape
"""

from .api import (
    array,
    boolean,
    email,
    number,
    object,
    string,
    url,
    validate,
    validate_all,
    validate_async,
)
from .base import PrimitiveValidator, Validator
from .composites import ArrayValidator, ObjectValidator
from .exceptions import (
    ConfigurationError,
    SchemaDefinitionError,
    SchemaFrozenError,
    ValidationFailedError,
    ValidatorError,
)
from .options import RULE_NAMES, MessageResolver, ValidateOptions
from .primitives import (
    BooleanValidator,
    EmailValidator,
    NumberValidator,
    StringValidator,
    UrlValidator,
)
from .result import ValidationError, ValidationResult, parse_path, render_path

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Result types
    "ValidationError",
    "ValidationResult",
    "render_path",
    "parse_path",
    # Options
    "ValidateOptions",
    "MessageResolver",
    "RULE_NAMES",
    # Validators
    "Validator",
    "PrimitiveValidator",
    "StringValidator",
    "NumberValidator",
    "BooleanValidator",
    "EmailValidator",
    "UrlValidator",
    "ObjectValidator",
    "ArrayValidator",
    # Factories
    "string",
    "number",
    "boolean",
    "email",
    "url",
    "object",
    "array",
    # Entry points
    "validate",
    "validate_async",
    "validate_all",
    # Exceptions
    "ValidatorError",
    "SchemaDefinitionError",
    "SchemaFrozenError",
    "ConfigurationError",
    "ValidationFailedError",
]
