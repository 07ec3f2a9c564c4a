"""formstate: form state with method-name-driven HTTP dispatch.

Public API:
    Form - Working values vs. baseline, errors, and an `http` dispatcher
    use_form - Create a Form from initial values
    exceptions - FormStateError and subclasses

Internal (not for direct use):
    _internal.dispatch - Request dispatch and lifecycle hooks
    _internal.http - Default httpx transport
"""

from formstate._internal.dispatch import SUPPORTED_METHODS, RequestOptions
from formstate._internal.http import HttpTransport
from formstate._version import __version__
from formstate.exceptions import (
    FormStateError,
    FormValidationError,
    TransportError,
    UnsupportedMethodError,
)
from formstate.form import Form, use_form
from formstate.models import FormSnapshot

__all__ = [
    "__version__",
    "Form",
    "use_form",
    "FormSnapshot",
    "HttpTransport",
    "RequestOptions",
    "SUPPORTED_METHODS",
    "FormStateError",
    "FormValidationError",
    "TransportError",
    "UnsupportedMethodError",
]
