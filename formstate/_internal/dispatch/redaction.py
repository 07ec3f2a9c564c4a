"""Redaction of sensitive form fields in debug output."""

from typing import Any

SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password",
    "password_confirmation",
    "current_password",
    "new_password",
    "token",
    "secret",
    "api_key",
    "authorization",
    "card_number",
    "cvv",
    "cvc",
    "ssn",
    "otp",
})

REDACTED_VALUE = "[REDACTED]"


def is_sensitive(field: Any) -> bool:
    """Check whether a field name holds a value that must not be logged."""
    return isinstance(field, str) and field.lower() in SENSITIVE_FIELDS


def redact_fields(payload: Any) -> Any:
    """Replace values of sensitive fields with "[REDACTED]".

    Nested mappings and lists are walked. The payload itself is never
    mutated; a new structure is returned.

    Args:
        payload: Form data or any JSON-like request payload.

    Returns:
        A copy of the payload with sensitive values replaced.
    """
    if isinstance(payload, dict):
        return {
            key: REDACTED_VALUE if is_sensitive(key) else redact_fields(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [redact_fields(item) for item in payload]
    return payload
