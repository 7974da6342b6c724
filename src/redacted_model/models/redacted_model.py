"""
Declarative redaction for pydantic models.

Subclasses of RedactedModel declare their sensitive fields as class
variables and register per-field substitutions with @redacted_value.
Substitutions are collected once, when the class is created.

    class Customer(RedactedModel):
        __redacted__ = ("ssn", "email")

        name: str
        ssn: str
        email: str

        @redacted_value("ssn")
        def mask_ssn(self, raw_value):
            return "***-**-" + raw_value[-4:]

    Customer(name="Ann", ssn="123-45-6789", email="a@x.io").redacted_dump()
    # {"name": "Ann", "ssn": "***-**-6789", "email": "[Hidden Data]"}

model_dump() and attribute access are NOT redacted: they remain the stored
view. Redacted reads go through redacted(), redacted_dump() and
redacted_attribute().
"""

from typing import Any, Callable, ClassVar, Optional, TypeVar

from pydantic import BaseModel, PrivateAttr

from redacted_model.exceptions import InvalidFieldNameError
from redacted_model.policy import RedactedRecord, RedactionPolicy
from redacted_model.records import ModelRecord


F = TypeVar("F", bound=Callable[..., Any])

_SUBSTITUTION_MARKER = "__redacted_value_for__"


def redacted_value(field: str) -> Callable[[F], F]:
    """
    Mark a RedactedModel method as the substitution for field.
    
    The method is called as method(self, raw_value) whenever field is
    redacted, and its return value is used unmodified.
    """
    if not isinstance(field, str):
        raise InvalidFieldNameError(field)
    
    def decorator(func: F) -> F:
        setattr(func, _SUBSTITUTION_MARKER, field)
        return func
    
    return decorator


class RedactedModel(BaseModel):
    """
    Pydantic base model with field redaction.
    
    Class variables:
        __redacted__: Names of the sensitive fields
        __redact__: Placeholder (True) or None (False); None means settings default
        __redacted_placeholder__: Substitute text; None means settings default
        __omit_null_redacted_keys__: Drop None-redacted keys; None means settings default
    
    Every instance owns its own RedactionPolicy, built from the class
    defaults on first use and freely mutable afterwards. Copies of an
    instance start again from the class defaults.
    """
    
    __redacted__: ClassVar[tuple[str, ...]] = ()
    __redact__: ClassVar[Optional[bool]] = None
    __redacted_placeholder__: ClassVar[Optional[str]] = None
    __omit_null_redacted_keys__: ClassVar[Optional[bool]] = None
    __redacted_substitutions__: ClassVar[dict[str, str]] = {}
    
    _redaction_policy: Optional[RedactionPolicy] = PrivateAttr(default=None)
    
    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        
        # Subclass registrations override those inherited from a base class
        substitutions: dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                field = getattr(attr, _SUBSTITUTION_MARKER, None)
                if field is not None:
                    substitutions[field] = name
        cls.__redacted_substitutions__ = substitutions
    
    def is_field_redactable(self, key: str) -> bool:
        """Per-field hook; override for conditional redaction."""
        return True
    
    @property
    def redaction_policy(self) -> RedactionPolicy:
        if self._redaction_policy is None:
            cls = type(self)
            self._redaction_policy = RedactionPolicy(
                cls.__redacted__,
                redact_enabled=cls.__redact__,
                placeholder=cls.__redacted_placeholder__,
                omit_null_redacted_keys=cls.__omit_null_redacted_keys__,
                substitutions={
                    field: getattr(self, name)
                    for field, name in cls.__redacted_substitutions__.items()
                },
                field_predicate=self.is_field_redactable,
            )
        return self._redaction_policy
    
    def redacted(self, **dump_options: Any) -> RedactedRecord:
        """Return a redacting view of this instance (dump_options go to model_dump)."""
        return RedactedRecord(ModelRecord(self, dump_options), self.redaction_policy)
    
    def redacted_dump(self, **dump_options: Any) -> dict[str, Any]:
        return self.redacted(**dump_options).to_redacted_map()
    
    def redacted_attribute(self, key: str) -> Any:
        return self.redacted().get_attribute(key)
    
    def __copy__(self) -> "RedactedModel":
        copied = super().__copy__()
        copied._redaction_policy = None
        return copied
    
    def __deepcopy__(self, memo: Optional[dict[int, Any]] = None) -> "RedactedModel":
        copied = super().__deepcopy__(memo)
        copied._redaction_policy = None
        return copied
