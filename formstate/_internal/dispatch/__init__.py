"""Dispatch system for formstate.

Resolves HTTP method names to transport calls wrapped in lifecycle hooks.
Used through Form.http; not intended for direct use.
"""

from formstate._internal.dispatch.dispatcher import (
    Dispatcher,
    HttpProxy,
    RequestFunction,
    coerce_options,
)
from formstate._internal.dispatch.models import SUPPORTED_METHODS, RequestOptions
from formstate._internal.dispatch.redaction import redact_fields

__all__ = [
    "Dispatcher",
    "HttpProxy",
    "RequestFunction",
    "RequestOptions",
    "SUPPORTED_METHODS",
    "coerce_options",
    "redact_fields",
]
