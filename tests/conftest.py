"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
import pytest
from pathlib import Path
from typing import Any, Dict

from redacted_model.config import RedactionSettings
from redacted_model.policy import RedactedRecord, RedactionPolicy
from redacted_model.records import DictRecord


@pytest.fixture
def test_settings() -> RedactionSettings:
    """Test settings with explicit values, independent of the environment."""
    return RedactionSettings(
        PLACEHOLDER="[Hidden Data]",
        REDACT_ENABLED=True,
        OMIT_NULL_REDACTED_KEYS=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_customer_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load sample customer fixture as dict (insertion order preserved)."""
    with open(fixtures_dir / "sample_customer.json") as f:
        return json.load(f)


@pytest.fixture
def sample_record(sample_customer_data: Dict[str, Any]) -> DictRecord:
    """DictRecord over the sample customer."""
    return DictRecord(sample_customer_data)


@pytest.fixture
def ssn_policy() -> RedactionPolicy:
    """Policy redacting only ssn, with explicit defaults."""
    return RedactionPolicy(
        ["ssn"],
        redact_enabled=True,
        placeholder="[Hidden Data]",
        omit_null_redacted_keys=True,
    )


@pytest.fixture
def create_redacted_record():
    """Factory fixture to create a RedactedRecord over a plain mapping.
    
    Usage:
        def test_something(create_redacted_record):
            record = create_redacted_record({"ssn": "1"}, fields=["ssn"], redact_enabled=False)
    """
    def _create(
        attributes: Dict[str, Any],
        fields: list[str] | None = None,
        **policy_options: Any,
    ) -> RedactedRecord:
        policy_options.setdefault("redact_enabled", True)
        policy_options.setdefault("placeholder", "[Hidden Data]")
        policy_options.setdefault("omit_null_redacted_keys", True)
        policy = RedactionPolicy(fields or [], **policy_options)
        return RedactedRecord(DictRecord(attributes), policy)
    
    return _create
