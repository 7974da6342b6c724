"""
Pydantic integration.

- redacted_model.py: RedactedModel base class and the @redacted_value decorator
"""

from redacted_model.models.redacted_model import RedactedModel, redacted_value

__all__ = [
    "RedactedModel",
    "redacted_value",
]
