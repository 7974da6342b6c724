"""
Custom exceptions for the redaction layer.

Only configuration-shape and record-shape problems are raised here. Failures
inside user-supplied substitution functions are never caught or wrapped:
they reach the caller of the read exactly as raised.
"""

from typing import Any


class RedactionError(Exception):
    """
    Base exception for all redaction errors.
    
    Allows catching any redaction-specific error with a single except clause.
    """
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize redaction error.
        
        Args:
            message: Human-readable error description
            details: Structured error data for logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UnknownAttributeError(RedactionError, KeyError):
    """
    Raised by a record adapter when a key is not stored on the record.
    
    Also a KeyError so mapping-style callers can handle it the usual way.
    """
    
    def __init__(self, key: str, record_type: str | None = None):
        details: dict[str, Any] = {"key": key}
        if record_type:
            details["record_type"] = record_type
        super().__init__(f"Unknown attribute '{key}'", details)
        self.key = key


class InvalidFieldNameError(RedactionError, TypeError):
    """Raised when a redacted field name is not a string."""
    
    def __init__(self, value: Any):
        super().__init__(
            "Redacted field names must be strings",
            {"invalid_value": repr(value), "invalid_type": type(value).__name__},
        )


class UnsupportedRecordError(RedactionError, TypeError):
    """Raised when an object cannot be adapted to the Record interface."""
    
    def __init__(self, obj: Any):
        super().__init__(
            "Object cannot be used as a record",
            {"record_type": type(obj).__name__},
        )
