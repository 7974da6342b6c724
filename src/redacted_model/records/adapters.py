"""
Concrete Record implementations.

DictRecord wraps a plain mapping (e.g. a database row or decoded JSON),
ModelRecord wraps a pydantic model instance. as_record() picks the right
adapter for an arbitrary object.
"""

from typing import Any, Callable, Mapping, Optional

import structlog
from pydantic import BaseModel

from redacted_model.exceptions import UnknownAttributeError, UnsupportedRecordError
from redacted_model.records.base import MISSING, Record, SelfRedacting


logger = structlog.get_logger(__name__)


def _serialize(value: Any, dump_options: Optional[dict[str, Any]] = None) -> Any:
    """
    Expand nested records and models the way a full dump would.
    
    Self-redacting values (e.g. a nested RedactedModel) are dumped through
    their own redaction, never through a plain model_dump().
    """
    options = dump_options or {}
    if isinstance(value, SelfRedacting):
        return value.redacted_dump(**options)
    if isinstance(value, Record):
        return dict(value.get_raw_attributes())
    if isinstance(value, BaseModel):
        return value.model_dump(**options)
    if isinstance(value, (list, tuple)):
        return [_serialize(item, options) for item in value]
    if isinstance(value, dict):
        return {key: _serialize(item, options) for key, item in value.items()}
    return value


def _has_self_redacting(value: Any) -> bool:
    if isinstance(value, SelfRedacting):
        return True
    if isinstance(value, (list, tuple)):
        return any(_has_self_redacting(item) for item in value)
    if isinstance(value, dict):
        return any(_has_self_redacting(item) for item in value.values())
    return False


class DictRecord:
    """
    Record backed by a plain mapping.
    
    Optional accessors emulate a record's cast/computed-accessor read path:
    read_attribute() runs the stored value through the accessor registered
    for that key, while get_raw_attribute() always returns the stored value.
    
    Example:
        >>> record = DictRecord({"name": "ann"}, accessors={"name": str.title})
        >>> record.read_attribute("name")
        'Ann'
        >>> record.get_raw_attribute("name")
        'ann'
    """
    
    def __init__(
        self,
        attributes: Mapping[str, Any] | None = None,
        accessors: Mapping[str, Callable[[Any], Any]] | None = None,
    ):
        self._attributes: dict[str, Any] = dict(attributes or {})
        self._accessors: dict[str, Callable[[Any], Any]] = dict(accessors or {})
    
    def get_raw_attribute(self, key: str) -> Any:
        return self._attributes.get(key, MISSING)
    
    def get_raw_attributes(self) -> dict[str, Any]:
        return {key: _serialize(value) for key, value in self._attributes.items()}
    
    def read_attribute(self, key: str) -> Any:
        if key not in self._attributes:
            raise UnknownAttributeError(key, record_type=type(self).__name__)
        
        value = self._attributes[key]
        accessor = self._accessors.get(key)
        return accessor(value) if accessor is not None else value
    
    def set_raw_attribute(self, key: str, value: Any) -> None:
        """Store a value (new keys are appended to the attribute order)."""
        self._attributes[key] = value
    
    def __repr__(self) -> str:
        return f"DictRecord(keys={list(self._attributes)})"


class ModelRecord:
    """
    Record backed by a pydantic model instance.
    
    Raw attributes are the stored field values (plus extras when the model
    allows them). The full attribute map comes from model_dump(), so nested
    models are serialized by pydantic itself, except self-redacting ones,
    which are dumped through their own redaction. read_attribute() goes
    through normal attribute access, which makes properties usable as
    computed accessors.
    
    Field aliases are accepted wherever a key is expected, so the keys of a
    by_alias=True dump resolve to the field they came from.
    """
    
    def __init__(self, model: BaseModel, dump_options: Optional[dict[str, Any]] = None):
        """
        Initialize the adapter.
        
        Args:
            model: Pydantic model instance to read from
            dump_options: Extra keyword arguments for model_dump() (e.g. mode="json")
        """
        self._model = model
        self._dump_options = dict(dump_options or {})
    
    @property
    def model(self) -> BaseModel:
        return self._model
    
    def canonical_key(self, key: str) -> str:
        """Return the field name for key, which may be a field alias."""
        fields = type(self._model).model_fields
        if key in fields:
            return key
        for name, field in fields.items():
            if key in (field.alias, field.serialization_alias):
                return name
        return key
    
    def get_raw_attribute(self, key: str) -> Any:
        key = self.canonical_key(key)
        stored = self._model.__dict__
        if key in stored:
            return stored[key]
        extra = self._model.__pydantic_extra__ or {}
        return extra.get(key, MISSING)
    
    def get_raw_attributes(self) -> dict[str, Any]:
        data = self._model.model_dump(**self._dump_options)
        
        # include/exclude address this model's keys only
        nested_options = {
            option: value
            for option, value in self._dump_options.items()
            if option not in ("include", "exclude")
        }
        for name in type(self._model).model_fields:
            value = self._model.__dict__.get(name)
            if not _has_self_redacting(value):
                continue
            key = self._dump_key(name)
            if key in data:
                data[key] = _serialize(value, nested_options)
        
        return data
    
    def read_attribute(self, key: str) -> Any:
        model_type = type(self._model)
        key = self.canonical_key(key)
        known = (
            key in model_type.model_fields
            or key in (self._model.__pydantic_extra__ or {})
            or key in model_type.model_computed_fields
            or isinstance(getattr(model_type, key, None), property)
        )
        if not known:
            raise UnknownAttributeError(key, record_type=model_type.__name__)
        return getattr(self._model, key)
    
    def _dump_key(self, name: str) -> str:
        if not self._dump_options.get("by_alias"):
            return name
        field = type(self._model).model_fields[name]
        return field.serialization_alias or field.alias or name
    
    def __repr__(self) -> str:
        return f"ModelRecord(model={type(self._model).__name__})"


def as_record(obj: Any) -> Record:
    """
    Adapt obj to the Record interface.
    
    Args:
        obj: A Record, a pydantic model instance, or a mapping
        
    Returns:
        obj itself if it already is a Record, otherwise a ModelRecord or DictRecord
        
    Raises:
        UnsupportedRecordError: If obj is none of the supported shapes
    """
    if isinstance(obj, Record):
        return obj
    if isinstance(obj, BaseModel):
        return ModelRecord(obj)
    if isinstance(obj, Mapping):
        return DictRecord(obj)
    
    logger.warning("Cannot adapt object to record", object_type=type(obj).__name__)
    raise UnsupportedRecordError(obj)
