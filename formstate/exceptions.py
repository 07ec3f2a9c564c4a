"""Public exceptions for formstate."""

from typing import Any


class FormStateError(Exception):
    """Base exception for all formstate errors."""


class UnsupportedMethodError(FormStateError, AttributeError):
    """HTTP method name is not supported by the dispatcher."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Method {method} is not supported.")
        self.method = method


class TransportError(FormStateError):
    """Request failed in the HTTP transport."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class FormValidationError(FormStateError):
    """Validation error for request options."""
