"""
Record abstraction consumed by the redaction layer.

- base.py: Record protocol and the MISSING sentinel
- adapters.py: DictRecord (plain mappings), ModelRecord (pydantic models), as_record()
"""

from redacted_model.records.adapters import DictRecord, ModelRecord, as_record
from redacted_model.records.base import MISSING, Record, SelfRedacting

__all__ = [
    "Record",
    "MISSING",
    "SelfRedacting",
    "DictRecord",
    "ModelRecord",
    "as_record",
]
