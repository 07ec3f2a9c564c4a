"""Pydantic models for dispatched requests."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

# =============================================================================
# Constants
# =============================================================================

SUPPORTED_METHODS: tuple[str, ...] = (
    "get",
    "post",
    "put",
    "patch",
    "delete",
    "head",
    "options",
)

# =============================================================================
# Request Options
# =============================================================================


class RequestOptions(BaseModel):
    """Lifecycle hooks for a single dispatched request.

    All hooks are optional; a missing hook is skipped.

    Fields:
        on_start: Called before the transport call is issued
        on_success: Called with the transport response
        on_error: Called with the transport failure
        on_finish: Called exactly once after the request settles
    """

    on_start: Callable[[], Any] | None = None
    on_success: Callable[[Any], Any] | None = None
    on_error: Callable[[Any], Any] | None = None
    on_finish: Callable[[], Any] | None = None

    model_config = {"extra": "forbid", "frozen": True}
