"""
Record interface required by the redaction layer.

The redaction layer never stores, persists or validates data itself. It only
needs three read operations from whatever holds the data, captured here as a
structural Protocol so ORM rows, pydantic models, plain dicts or anything
else can take part without inheriting from a common base.
"""

from typing import Any, Mapping, Protocol, runtime_checkable


class _MissingType:
    """Sentinel type for attributes that are not stored on a record."""
    
    _instance: "_MissingType | None" = None
    
    def __new__(cls) -> "_MissingType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def __bool__(self) -> bool:
        return False
    
    def __repr__(self) -> str:
        return "<MISSING>"


MISSING = _MissingType()


@runtime_checkable
class SelfRedacting(Protocol):
    """
    An object that serializes itself with its own redaction applied.
    
    Record adapters use this for nested values, so a redacted model nested
    inside another record keeps hiding its own sensitive fields.
    """
    
    def redacted_dump(self, **dump_options: Any) -> dict[str, Any]:
        ...


@runtime_checkable
class Record(Protocol):
    """
    Read interface of a data record.
    
    Implementations must return attributes in their natural (declaration or
    insertion) order, and must never hand out values that have been altered
    by redaction.
    """
    
    def get_raw_attribute(self, key: str) -> Any:
        """Return the stored, uncast value for key, or MISSING if unset."""
        ...
    
    def get_raw_attributes(self) -> Mapping[str, Any]:
        """Return every stored attribute, nested records already serialized."""
        ...
    
    def read_attribute(self, key: str) -> Any:
        """
        Return the record's normal value for key (casts, computed accessors).
        
        Unknown keys follow the record's own behavior, which may raise.
        """
        ...
