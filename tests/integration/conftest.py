"""Integration test fixtures (pydantic models shared across scenarios)."""

from datetime import datetime
from typing import Optional

import pytest
from pydantic import BaseModel, computed_field

from redacted_model.models import RedactedModel, redacted_value


class Address(BaseModel):
    street: str
    city: str


class Patient(RedactedModel):
    __redacted__ = ("ssn", "diagnosis", "phone", "ssn_label")
    __omit_null_redacted_keys__ = True
    
    id: int
    name: str
    ssn: str
    phone: Optional[str] = None
    diagnosis: str
    address: Address
    admitted_at: datetime
    
    @redacted_value("ssn")
    def last_four(self, raw_value):
        return "***-**-" + raw_value[-4:]
    
    @redacted_value("phone")
    def hide_phone(self, raw_value):
        # Unknown numbers stay unknown instead of showing a placeholder
        return None if raw_value is None else "(hidden)"
    
    @computed_field
    @property
    def ssn_label(self) -> str:
        return f"SSN {self.ssn}"


class Ward(RedactedModel):
    __redacted__ = ("code",)
    
    code: str
    patients: list[Patient]


@pytest.fixture
def patient() -> Patient:
    return Patient(
        id=7,
        name="Ann Lee",
        ssn="123-45-6789",
        diagnosis="Flu",
        address=Address(street="1 Main St", city="Leeds"),
        admitted_at=datetime(2026, 3, 1, 9, 30),
    )


@pytest.fixture
def ward(patient) -> Ward:
    return Ward(code="W-12", patients=[patient])
