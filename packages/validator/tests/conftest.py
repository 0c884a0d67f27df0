"""Pytest configuration for dataknobs_validator tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_validator import array, number, object, string  # noqa: E402


@pytest.fixture
def person_schema():
    """Schema used by the end-to-end scenarios."""
    return object({
        "name": string().min(2).required(),
        "age": number().min(18).required(),
    })


@pytest.fixture
def order_schema():
    """Nested schema: an object holding an array of objects."""
    return object({
        "id": string().required(),
        "items": array(object({
            "sku": string().pattern(r"^[A-Z]{3}-\d+$").required(),
            "qty": number().integer().min(1).required(),
        })).min(1).required(),
        "note": string().max(20),
    })
