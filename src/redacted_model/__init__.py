"""
Redacted Model - field-level redaction for data records.

Hides or replaces the values of sensitive attributes whenever a record is
read or serialized, while the stored values stay untouched:
- RedactionPolicy: which fields are redacted and what they are replaced with
- RedactedRecord: read-side wrapper applying a policy to any record
- RedactedModel: pydantic base class with declarative redaction

Redaction is presentation-level obfuscation, not encryption or access control.
"""

from redacted_model.exceptions import (
    InvalidFieldNameError,
    RedactionError,
    UnknownAttributeError,
    UnsupportedRecordError,
)
from redacted_model.logging_config import RedactEventFields, configure_logging
from redacted_model.models import RedactedModel, redacted_value
from redacted_model.policy import RedactedRecord, RedactionPolicy
from redacted_model.records import MISSING, DictRecord, ModelRecord, Record, as_record

__version__ = "0.1.0"

__all__ = [
    "RedactionPolicy",
    "RedactedRecord",
    "RedactedModel",
    "redacted_value",
    "Record",
    "DictRecord",
    "ModelRecord",
    "MISSING",
    "as_record",
    "RedactionError",
    "UnknownAttributeError",
    "InvalidFieldNameError",
    "UnsupportedRecordError",
    "configure_logging",
    "RedactEventFields",
]
