"""Tests for individual rules."""

import re
from fractions import Fraction

import pytest

from dataknobs_validator import SchemaDefinitionError
from dataknobs_validator.rules import (
    Custom,
    EmailFormat,
    Integer,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    NonBlank,
    Pattern,
    format_number,
    is_absolute_url,
)


class TestStringRules:
    """Test rules that apply to strings."""

    def test_non_blank(self):
        """Test the non-blank rule registered by required()."""
        rule = NonBlank()
        assert rule.name == "required"
        assert rule.check("a") is True
        assert rule.check("") is False
        assert rule.check(" \t\n") is False

    def test_length_bounds(self):
        """Test min/max length rules and their messages."""
        assert MinLength(3).check("abc") is True
        assert MinLength(3).check("ab") is False
        assert MinLength(3).default_message == "String length must be at least 3 characters"
        assert MaxLength(3).check("abcd") is False
        assert MaxLength(3).default_message == "String length must not exceed 3 characters"

    @pytest.mark.parametrize("bad", [-1, 1.5, "3", None, True])
    def test_length_bound_arguments(self, bad):
        """Test that length bounds must be non-negative integers."""
        with pytest.raises(SchemaDefinitionError):
            MinLength(bad)

    def test_pattern_searches(self):
        """Test that a pattern matches anywhere unless anchored."""
        assert Pattern(r"\d").check("abc1") is True
        assert Pattern(r"^\d+$").check("12a") is False
        assert Pattern(re.compile("x", re.I)).check("X") is True

    def test_invalid_pattern(self):
        """Test that broken regular expressions fail at build time."""
        with pytest.raises(SchemaDefinitionError):
            Pattern("(unclosed")
        with pytest.raises(SchemaDefinitionError):
            Pattern(42)

    @pytest.mark.parametrize(
        "address, valid",
        [
            ("test@example.com", True),
            ("first.last+tag@sub.example.co", True),
            ("user@localhost", True),
            ("invalid", False),
            ("a@b@c.com", False),
            ("user@-bad.com", False),
            ("user@example.com\n", False),
        ],
    )
    def test_email(self, address, valid):
        """Test the email-shaped pattern."""
        assert EmailFormat().check(address) is valid


class TestNumberRules:
    """Test rules that apply to numbers."""

    def test_value_bounds(self):
        """Test inclusive min/max."""
        assert MinValue(18).check(18) is True
        assert MinValue(18).check(17.5) is False
        assert MaxValue(10).check(10) is True
        assert MaxValue(10).check(11) is False

    def test_bound_messages(self):
        """Test that whole-number float bounds render without a fraction."""
        assert MinValue(18.0).default_message == "Must be at least 18"
        assert MaxValue(2.5).default_message == "Must not exceed 2.5"
        assert format_number(3) == "3"

    @pytest.mark.parametrize("bad", ["1", None, float("nan"), False])
    def test_bound_arguments(self, bad):
        """Test that value bounds must be real numbers."""
        with pytest.raises(SchemaDefinitionError):
            MinValue(bad)

    @pytest.mark.parametrize(
        "value, expected",
        [(3, True), (3.0, True), (3.5, False), (float("inf"), False), (Fraction(4, 2), True)],
    )
    def test_integer(self, value, expected):
        """Test integral checks across numeric types."""
        assert Integer().check(value) is expected


class TestCustom:
    """Test the custom rule wrapper."""

    def test_passes_through_result(self):
        """Test that the predicate's answer is returned unchanged."""
        assert Custom(lambda v: True).check(1) is True
        assert Custom(lambda v: "nope").check(1) == "nope"
        assert Custom(lambda v: None).check(1) is None

    def test_exception_becomes_message(self):
        """Test that a raising predicate reports instead of propagating."""
        def explode(value):
            raise ValueError("kaboom")

        assert Custom(explode).check(1) == "Custom validation error: kaboom"

    def test_requires_callable(self):
        """Test that non-callables are rejected at build time."""
        with pytest.raises(SchemaDefinitionError):
            Custom("not callable")


class TestUrl:
    """Test absolute URL detection."""

    @pytest.mark.parametrize(
        "text",
        [
            "https://example.com",
            "http://localhost:8080/path?q=1#frag",
            "ftp://files.example.org/a.txt",
            "mailto:someone@example.com",
            "file:///etc/hosts",
            "urn:isbn:0451450523",
            "http:example.com",
            "https:/example.com/path",
        ],
    )
    def test_valid(self, text):
        """Test URLs that parse."""
        assert is_absolute_url(text) is True

    @pytest.mark.parametrize(
        "text",
        ["", "not a url", "example.com", "/relative/path", "http://", "https://exa mple.com", "http://host:99999999", "http:", "http:ex ample.com"],
    )
    def test_invalid(self, text):
        """Test strings that are not absolute URLs."""
        assert is_absolute_url(text) is False
