"""Validation options and error message resolution."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

RULE_NAMES = frozenset({
    "required",
    "type",
    "transform",
    "min",
    "max",
    "pattern",
    "email",
    "integer",
    "custom",
})


@dataclass(frozen=True)
class ValidateOptions:
    """Call-site options for a validation run.

    Attributes:
        messages: Rule name to replacement message. Consulted before any
            message configured on the validator itself. Values are literal;
            the offending value is never interpolated.
    """

    messages: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for key, text in self.messages.items():
            if not isinstance(key, str) or not isinstance(text, str):
                raise ConfigurationError(
                    "Message overrides must map rule names to strings",
                    context={"key": key, "value": text},
                )
            if key not in RULE_NAMES:
                logger.warning(f"Message override for unknown rule: {key}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ValidateOptions:
        """Create options from a dictionary such as ``{"messages": {...}}``.

        Args:
            data: Options dictionary, or None for the defaults

        Returns:
            ValidateOptions instance
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Invalid options type: {type(data).__name__}")
        messages = data.get("messages") or {}
        if not isinstance(messages, Mapping):
            raise ConfigurationError(
                "'messages' must be a mapping",
                context={"messages": messages},
            )
        return cls(messages=dict(messages))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ValidateOptions:
        """Load options from a YAML or JSON file.

        Args:
            path: Path to a ``.yaml``, ``.yml`` or ``.json`` file

        Returns:
            ValidateOptions instance
        """
        path = Path(path).resolve()

        if not path.exists():
            raise ConfigurationError(f"Options file not found: {path}")

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                try:
                    data = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
            elif suffix == ".json":
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
            else:
                raise ConfigurationError(f"Unsupported file format: {suffix}")

        logger.debug(f"Loaded validation options from {path}")
        return cls.from_dict(data)

    @classmethod
    def coerce(cls, options: ValidateOptions | Mapping[str, Any] | None) -> ValidateOptions | None:
        """Accept options objects, plain dictionaries or None."""
        if options is None or isinstance(options, ValidateOptions):
            return options
        return cls.from_dict(options)

    def merged(self, other: ValidateOptions | None) -> ValidateOptions:
        """Layer another options table over this one."""
        if other is None:
            return self
        return ValidateOptions(messages={**self.messages, **other.messages})


class MessageResolver:
    """Resolves the message for a failing rule.

    Precedence: ``options.messages[rule]`` (any present key), then the
    validator's own ``message(rule, text)`` (non-empty only), then the
    built-in default.
    """

    __slots__ = ("_overrides", "_local")

    def __init__(self, options: ValidateOptions | None, local: Mapping[str, str] | None = None):
        self._overrides = options.messages if options is not None else {}
        self._local = local or {}

    def resolve(self, rule: str, default: str) -> str:
        if rule in self._overrides:
            return self._overrides[rule]
        local = self._local.get(rule)
        if local:
            return local
        return default
