"""
Read-side wrapper that applies a RedactionPolicy to a record.

RedactedRecord holds a reference to the underlying record and implements
the read interface, delegating to the record except where redaction applies.
The stored values are never modified; every read re-evaluates the policy.
"""

from typing import Any, Iterator, Optional

import structlog
from pydantic_core import to_json

from redacted_model.policy.policy import RedactionPolicy
from redacted_model.records import MISSING, Record, as_record


logger = structlog.get_logger(__name__)


class RedactedRecord:
    """
    A record whose reads pass through a redaction policy.
    
    Example:
        >>> record = RedactedRecord({"ssn": "123-45-6789", "name": "Ann"},
        ...                         RedactionPolicy(["ssn"]))
        >>> record.get_attribute("ssn")
        '[Hidden Data]'
        >>> record.to_redacted_map()
        {'ssn': '[Hidden Data]', 'name': 'Ann'}
    
    Field reads go through get_attribute() or record[key]. Attribute access
    only reaches the wrapper's own members (policy, record, keys, ...), never
    record fields, so a field named "policy" is read as record["policy"].

    Failures raised by substitution functions, and by the record itself for
    unknown keys, propagate to the caller unchanged.
    """
    
    def __init__(self, record: Any, policy: Optional[RedactionPolicy] = None):
        """
        Initialize the wrapper.
        
        Args:
            record: A Record, pydantic model instance, or mapping (see as_record)
            policy: Policy to apply. A fresh default policy (nothing redacted)
                    is created when omitted.
        """
        self._record: Record = as_record(record)
        self._policy = policy if policy is not None else RedactionPolicy()
    
    @property
    def record(self) -> Record:
        return self._record
    
    @property
    def policy(self) -> RedactionPolicy:
        return self._policy
    
    def get_attribute(self, key: str) -> Any:
        """
        Read one attribute, redacted if the policy says so.
        
        A redacted key without a stored value (a computed field or property)
        is still redacted, and its substitution receives None. Keys the
        record does not know at all are never redacted: the read goes to the
        record, which decides how to handle the unknown key.
        """
        redaction_key = self._redaction_key(key)
        if redaction_key is None:
            return self._record.read_attribute(key)
        
        raw_value = self._record.get_raw_attribute(key)
        if raw_value is MISSING:
            # Raises for keys unknown to the record
            self._record.read_attribute(key)
        return self._resolve(redaction_key, raw_value)
    
    def to_redacted_map(self) -> dict[str, Any]:
        """
        Serialize the full record with redaction applied.
        
        Iterates the record's attributes in their natural order. Redacted
        fields are recomputed through the same substitution and placeholder
        logic as get_attribute(), never taken from the dump. A redacted field
        whose value is None is left out when omit_null_redacted_keys is set.
        Other fields are passed through untouched, type included.
        """
        data = self._record.get_raw_attributes()
        redacted: dict[str, Any] = {}
        redacted_count = 0
        omitted_count = 0
        
        for key, value in data.items():
            redaction_key = self._redaction_key(key)
            if redaction_key is not None:
                value = self._resolve(redaction_key, self._record.get_raw_attribute(key))
                redacted_count += 1
                
                if value is None and self._policy.omit_null_redacted_keys:
                    omitted_count += 1
                    continue
            
            redacted[key] = value
        
        logger.debug(
            "Serialized redacted record",
            total_fields=len(data),
            redacted_count=redacted_count,
            omitted_count=omitted_count,
        )
        
        return redacted
    
    def redacted_dump(self, **dump_options: Any) -> dict[str, Any]:
        """Same as to_redacted_map(); lets a RedactedRecord nest inside other records."""
        return self.to_redacted_map()
    
    def to_json(self, indent: Optional[int] = None) -> str:
        """JSON-encode to_redacted_map() (datetimes, UUIDs etc. supported)."""
        return to_json(self.to_redacted_map(), indent=indent).decode()
    
    def keys(self) -> list[str]:
        return list(self._record.get_raw_attributes())
    
    def __getitem__(self, key: str) -> Any:
        return self.get_attribute(key)
    
    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._record.get_raw_attributes()
    
    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
    
    def __repr__(self) -> str:
        return f"RedactedRecord(record={self._record!r}, policy={self._policy!r})"
    
    def _redaction_key(self, key: str) -> Optional[str]:
        """Return the name under which the policy redacts key, or None."""
        if self._policy.should_redact(key):
            return key
        canonical_key = getattr(self._record, "canonical_key", None)
        if canonical_key is not None:
            field_name = canonical_key(key)
            if field_name != key and self._policy.should_redact(field_name):
                return field_name
        return None
    
    def _resolve(self, key: str, raw_value: Any) -> Any:
        return self._policy.resolve_redacted_value(
            key, None if raw_value is MISSING else raw_value
        )
