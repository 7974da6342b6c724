"""
Redaction decision and read interception.

- policy.py: RedactionPolicy (which fields are redacted, and with what)
- redacted.py: RedactedRecord (applies a policy to every read of a record)
"""

from redacted_model.policy.policy import RedactionPolicy
from redacted_model.policy.redacted import RedactedRecord

__all__ = [
    "RedactionPolicy",
    "RedactedRecord",
]
