"""Tests for the top-level entry points and end-to-end behavior."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from dataknobs_validator import (
    ValidateOptions,
    ValidationResult,
    array,
    number,
    object,
    string,
    validate,
    validate_all,
    validate_async,
)


class TestValidate:
    """Test validate()."""

    def test_simple_values(self):
        """Test delegation to the validator."""
        assert validate("hello", string()).success
        assert not validate("", string().required()).success
        assert not validate(5, number().min(10)).success

    def test_success_iff_no_errors(self, person_schema):
        """Test the success/errors invariant across inputs."""
        for value in [None, {}, {"name": "A", "age": 15}, {"name": "Ann", "age": 30}, "x"]:
            result = validate(value, person_schema)
            assert result.success == (len(result.errors) == 0)
            if not result.success:
                assert result.data is None

    def test_end_to_end_failure(self, person_schema):
        """Test the canonical two-field failure."""
        result = validate({"name": "A", "age": 15}, person_schema)
        assert result.success is False
        assert [(e.path, e.rule) for e in result.errors] == [("name", "min"), ("age", "min")]
        assert result.errors[0].message == "String length must be at least 2 characters"
        assert result.errors[1].message == "Must be at least 18"

    def test_end_to_end_success(self, person_schema):
        """Test the canonical success."""
        result = validate({"name": "Alice", "age": 25}, person_schema)
        assert result.to_dict() == {
            "success": True,
            "data": {"name": "Alice", "age": 25},
            "errors": [],
        }

    def test_options_override_wins(self):
        """Test that call-site messages beat validator-local ones."""
        schema = string().required().message("required", "OTHER")
        result = validate(None, schema, {"messages": {"required": "CUSTOM"}})
        assert result.errors[0].message == "CUSTOM"
        result = validate("", schema, ValidateOptions(messages={"required": "CUSTOM"}))
        assert result.errors[0].message == "CUSTOM"
        assert validate(None, schema).errors[0].message == "OTHER"

    def test_nested_order_schema(self, order_schema):
        """Test aggregation across nested objects and arrays."""
        payload = {
            "id": "o-1",
            "items": [
                {"sku": "ABC-1", "qty": 2},
                {"sku": "bad", "qty": 0},
                {"qty": 1.5},
            ],
            "note": "x" * 30,
        }
        result = validate(payload, order_schema)
        assert [(e.path, e.rule) for e in result.errors] == [
            ("items.[1].sku", "pattern"),
            ("items.[1].qty", "min"),
            ("items.[2].sku", "required"),
            ("items.[2].qty", "integer"),
            ("note", "max"),
        ]

    def test_nested_order_schema_success(self, order_schema):
        """Test that valid nested data is returned without absent fields."""
        payload = {"id": "o-2", "items": [{"sku": "XYZ-9", "qty": 3}]}
        result = validate(payload, order_schema)
        assert result.success
        assert result.data == payload

    def test_empty_items_short_circuit(self, order_schema):
        """Test the array length rule inside an object."""
        result = validate({"id": "o-3", "items": []}, order_schema)
        assert [(e.path, e.rule) for e in result.errors] == [("items", "min")]

    def test_idempotent(self, order_schema):
        """Test that repeated calls are structurally identical."""
        payload = {"id": "", "items": [{"sku": 1}]}
        options = {"messages": {"type": "T"}}
        first = validate(payload, order_schema, options)
        second = validate(payload, order_schema, options)
        assert first.to_dict() == second.to_dict()

    def test_failure_is_logged(self, caplog):
        """Test that failed validations emit a debug record."""
        with caplog.at_level(logging.DEBUG, logger="dataknobs_validator.api"):
            validate({}, object({"a": string().required()}))
        assert "failed with 1 error(s): a" in caplog.text

    def test_concurrent_use(self, person_schema):
        """Test that a frozen validator can be shared between threads."""
        validate({"name": "Warm", "age": 40}, person_schema)
        inputs = [{"name": "A" * (i % 3), "age": i} for i in range(200)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda v: validate(v, person_schema), inputs))
        expected = [validate(v, person_schema).to_dict() for v in inputs]
        assert [r.to_dict() for r in results] == expected


class TestValidateAll:
    """Test validate_all()."""

    def test_same_as_validate(self, person_schema):
        """Test that validate_all reports what validate reports."""
        value = {"name": "", "age": "x"}
        assert validate_all(value, person_schema) == validate(value, person_schema)

    def test_first_rule_per_field_only(self):
        """Test that rules within one field still stop at the first failure."""
        result = validate_all("abcd", string().max(2).pattern(r"^\d+$"))
        assert len(result.errors) == 1


class TestValidateAsync:
    """Test validate_async()."""

    @pytest.mark.asyncio
    async def test_matches_sync(self, person_schema):
        """Test that the async entry point returns the sync result."""
        value = {"name": "A", "age": 15}
        result = await validate_async(value, person_schema)
        assert result == validate(value, person_schema)

    @pytest.mark.asyncio
    async def test_uses_async_hook(self):
        """Test that a validator's own async hook is awaited."""

        class Remote:
            def validate(self, value, data=None, options=None):
                raise AssertionError("sync path should not be used")

            async def validate_async(self, value, data=None, options=None):
                return ValidationResult.ok(value)

        result = await validate_async("v", Remote())
        assert result.data == "v"

    @pytest.mark.asyncio
    async def test_falls_back_to_sync(self):
        """Test validators without an async hook."""

        class SyncOnly:
            def validate(self, value, data=None, options=None):
                return ValidationResult.fail_with("custom", "no", value)

        result = await validate_async("v", SyncOnly())
        assert not result.success
        assert result.errors[0].message == "no"

    @pytest.mark.asyncio
    async def test_options(self):
        """Test that options reach the validator."""
        result = await validate_async(None, number().required(), {"messages": {"required": "R"}})
        assert result.errors[0].message == "R"
