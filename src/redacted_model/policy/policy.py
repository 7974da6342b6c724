"""
Redaction policy: the decision of whether a field is redacted and the value
that replaces it.

A field is redacted only when all of these hold:
1. Protection is not globally disabled
2. The field is in the redacted set
3. is_field_redactable(key) returns True (per-field hook)

The replacement value comes from a per-field substitution function when one
is registered, otherwise from default_redacted_value(): the placeholder text,
or None when redact_enabled is False.

Policies are plain mutable objects without locking. Do not share one between
threads that mutate it.
"""

import copy
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

import structlog

from redacted_model.config import settings
from redacted_model.exceptions import InvalidFieldNameError


logger = structlog.get_logger(__name__)

SubstitutionFn = Callable[[Any], Any]
FieldPredicate = Callable[[str], bool]


def _validate_field_name(name: Any) -> str:
    if not isinstance(name, str):
        raise InvalidFieldNameError(name)
    return name


class RedactionPolicy:
    """
    Mutable redaction configuration plus the decision logic built on it.
    
    Per-field conditional logic can be added either by subclassing and
    overriding is_field_redactable(), or by passing field_predicate. Any
    context the decision needs (current user, request) must be captured by
    the predicate before the read, since only the key is passed in.
    
    Example:
        >>> policy = RedactionPolicy(["ssn"])
        >>> policy.register_substitution("ssn", lambda raw: "***-**-" + raw[-4:])
        >>> policy.should_redact("ssn")
        True
        >>> policy.resolve_redacted_value("ssn", "123-45-6789")
        '***-**-6789'
    """
    
    def __init__(
        self,
        redacted_fields: Iterable[str] = (),
        *,
        redact_enabled: Optional[bool] = None,
        placeholder: Optional[str] = None,
        omit_null_redacted_keys: Optional[bool] = None,
        substitutions: Optional[Mapping[str, SubstitutionFn]] = None,
        field_predicate: Optional[FieldPredicate] = None,
    ):
        """
        Initialize the policy.
        
        Args:
            redacted_fields: Names of the sensitive fields
            redact_enabled: Placeholder (True) or None (False) for redacted fields.
                            Defaults to settings.REDACT_ENABLED.
            placeholder: Substitute text. Defaults to settings.PLACEHOLDER.
            omit_null_redacted_keys: Drop keys that redact to None from full dumps.
                                     Defaults to settings.OMIT_NULL_REDACTED_KEYS.
            substitutions: Per-field substitution functions, called with the raw value
            field_predicate: Per-field hook used by is_field_redactable()
        """
        self._redacted_fields: dict[str, None] = {}
        self._substitutions: dict[str, SubstitutionFn] = {}
        self._protection_disabled = False
        self._field_predicate = field_predicate
        
        self.redact_enabled: bool = (
            settings.REDACT_ENABLED if redact_enabled is None else redact_enabled
        )
        self.placeholder: str = settings.PLACEHOLDER if placeholder is None else placeholder
        self.omit_null_redacted_keys: bool = (
            settings.OMIT_NULL_REDACTED_KEYS
            if omit_null_redacted_keys is None
            else omit_null_redacted_keys
        )
        
        self.replace_redacted_fields(redacted_fields)
        for key, func in (substitutions or {}).items():
            self.register_substitution(key, func)
    
    # === Decision ===
    
    def should_redact(self, key: str) -> bool:
        """Return True if reads of key must be redacted right now."""
        return (
            not self._protection_disabled
            and key in self._redacted_fields
            and self.is_field_redactable(key)
        )
    
    def is_field_redactable(self, key: str) -> bool:
        """
        Per-field hook, consulted only for fields in the redacted set.
        
        Returns the field_predicate result when one was supplied, True
        otherwise. Override in a subclass for role-based or other
        conditional redaction.
        """
        if self._field_predicate is not None:
            return bool(self._field_predicate(key))
        return True
    
    def resolve_redacted_value(self, key: str, raw_value: Any) -> Any:
        """
        Compute the value returned in place of a redacted field.
        
        Args:
            key: Field name
            raw_value: The record's stored value for key
            
        Returns:
            The registered substitution's result (unmodified, may be None),
            or default_redacted_value() when no substitution is registered
        """
        substitution = self._substitutions.get(key)
        if substitution is not None:
            return substitution(raw_value)
        return self.default_redacted_value(key, raw_value)
    
    def default_redacted_value(self, key: str, raw_value: Any) -> Optional[str]:
        """Return the placeholder, or None when redaction text is disabled."""
        return self.placeholder if self.redact_enabled else None
    
    # === Redacted fields ===
    
    @property
    def redacted_fields(self) -> frozenset[str]:
        """Snapshot of the redacted field names."""
        return frozenset(self._redacted_fields)
    
    def set_redacted_fields(self, fields: str | Iterable[str]) -> None:
        """
        Set or append to the redacted fields.
        
        A single field name is appended to the existing set. Any other
        iterable replaces the set entirely. Prefer add_redacted_field() or
        replace_redacted_fields(), which say which of the two is meant.
        """
        if isinstance(fields, str):
            self.add_redacted_field(fields)
        elif isinstance(fields, Iterable):
            self.replace_redacted_fields(fields)
        else:
            raise InvalidFieldNameError(fields)
    
    def replace_redacted_fields(self, fields: Iterable[str]) -> None:
        """Replace the redacted set. A bare string counts as one field name."""
        if isinstance(fields, str):
            fields = [fields]
        validated = dict.fromkeys(_validate_field_name(name) for name in fields)
        self._redacted_fields = validated
        logger.debug("Replaced redacted fields", fields=list(validated))
    
    def add_redacted_field(self, name: str) -> None:
        """Append one field to the redacted set. Adding a present field is a no-op."""
        _validate_field_name(name)
        if name in self._redacted_fields:
            logger.debug("Redacted field already present", field=name)
            return
        self._redacted_fields[name] = None
        logger.debug("Added redacted field", field=name)
    
    def remove_redacted_field(self, name: str) -> None:
        """Remove one field from the redacted set, if present."""
        if name in self._redacted_fields:
            del self._redacted_fields[name]
            logger.debug("Removed redacted field", field=name)
    
    # === Substitutions ===
    
    def register_substitution(self, key: str, func: SubstitutionFn) -> None:
        """Register func as the substitution for key, replacing any previous one."""
        _validate_field_name(key)
        if not callable(func):
            raise TypeError(f"Substitution for '{key}' must be callable")
        self._substitutions[key] = func
        logger.debug("Registered substitution", field=key)
    
    def unregister_substitution(self, key: str) -> None:
        """Drop the substitution for key so the default value applies again."""
        if self._substitutions.pop(key, None) is not None:
            logger.debug("Unregistered substitution", field=key)
    
    def get_substitution(self, key: str) -> Optional[SubstitutionFn]:
        return self._substitutions.get(key)
    
    # === Global protection switch ===
    
    @property
    def is_protection_disabled(self) -> bool:
        return self._protection_disabled
    
    def disable_all_protection(self) -> None:
        """Stop redacting every field, regardless of the redacted set and hook."""
        self._protection_disabled = True
        logger.debug("Redaction protection disabled")
    
    def enable_all_protection(self) -> None:
        """Resume redaction after disable_all_protection()."""
        self._protection_disabled = False
        logger.debug("Redaction protection enabled")
    
    @contextmanager
    def protection_disabled(self) -> Iterator["RedactionPolicy"]:
        """
        Disable protection for the duration of a with block.
        
        The previous state is restored on exit, also when the block raises.
        """
        previous = self._protection_disabled
        self.disable_all_protection()
        try:
            yield self
        finally:
            self._protection_disabled = previous
            logger.debug("Redaction protection restored", protection_disabled=previous)
    
    # === Misc ===
    
    def copy(self) -> "RedactionPolicy":
        """Return an independent policy with the same configuration."""
        duplicate = copy.copy(self)
        duplicate._redacted_fields = dict(self._redacted_fields)
        duplicate._substitutions = dict(self._substitutions)
        return duplicate
    
    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"fields={sorted(self._redacted_fields)}, "
            f"redact_enabled={self.redact_enabled}, "
            f"protection_disabled={self._protection_disabled})"
        )
