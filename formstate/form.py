"""Form state with method-name-driven HTTP dispatch.

Example:
    from formstate import use_form

    form = use_form({"email": "", "remember": False})
    form.set_data("email", "ada@example.com")

    await form.http.post(
        "/login",
        form.data,
        {
            "on_error": lambda e: form.set_error("email", "Login failed"),
            "on_finish": lambda: print("done"),
        },
    )
"""

from collections.abc import Iterable, Mapping
from typing import Any

from formstate._internal.dispatch import SUPPORTED_METHODS, Dispatcher, HttpProxy
from formstate._internal.http import HttpTransport, debug_from_env
from formstate.models import FormData, FormErrors, FormSnapshot, FormValue

_MISSING: Any = object()


def _normalize_value(value: Any) -> FormValue:
    """Absent values are stored as the empty string."""
    return "" if value is None else value


def _normalize_data(fields: Mapping[str, Any]) -> FormData:
    return {key: _normalize_value(value) for key, value in fields.items()}


def _copy_errors(errors: Mapping[str, str | list[str]]) -> FormErrors:
    return {
        field: list(message) if isinstance(message, (list, tuple)) else message
        for field, message in errors.items()
    }


class Form:
    """Working form values tracked against a baseline, plus an HTTP dispatcher.

    The baseline (`defaults`) and working values (`data`) are independent
    copies. Any change to the baseline resets the working values to match
    it and clears all errors in the same step.

    Requests are issued through `http`: ``await form.http.post(url, payload,
    options)``. `processing` is True from just before a request starts until
    it settles. Overlapping requests share that single flag, so the first to
    settle clears it.
    """

    def __init__(
        self,
        initial_values: Mapping[str, Any] | None = None,
        *,
        transport: Any = None,
        methods: Iterable[str] = SUPPORTED_METHODS,
        debug: bool | None = None,
    ) -> None:
        """Initialize the form.

        Args:
            initial_values: Baseline field values.
            transport: Object exposing one callable per HTTP verb. Defaults to
                an HttpTransport configured from environment variables.
            methods: Allow-list of dispatchable method names.
            debug: Enable debug logging to stderr. Defaults to FORMSTATE_DEBUG
                and also applies to the default transport.
        """
        self._defaults: FormData = _normalize_data(initial_values or {})
        self._data: FormData = dict(self._defaults)
        self._errors: FormErrors = {}
        self._has_errors = False
        self._processing = False
        self._debug = debug_from_env() if debug is None else debug

        self._owns_transport = transport is None
        if transport is None:
            transport = HttpTransport.from_env(debug=self._debug)
        self._transport = transport
        self._dispatcher = Dispatcher(
            self._transport,
            methods=methods,
            before_request=self._start_processing,
            after_request=self._finish_processing,
            debug=self._debug,
        )
        self._http = HttpProxy(self._dispatcher)

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[formstate] {message}", file=sys.stderr)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def data(self) -> FormData:
        """Current working values (a copy)."""
        return dict(self._data)

    @property
    def defaults(self) -> FormData:
        """Baseline values (a copy)."""
        return dict(self._defaults)

    @property
    def errors(self) -> FormErrors:
        """Per-field errors (a copy)."""
        return _copy_errors(self._errors)

    @property
    def has_errors(self) -> bool:
        return self._has_errors

    @property
    def is_dirty(self) -> bool:
        """True when working values differ from the baseline.

        Values of different types differ even when Python treats them as
        equal, so True and 1 are distinct.
        """
        if self._data.keys() != self._defaults.keys():
            return True
        return any(
            type(value) is not type(self._defaults[key]) or value != self._defaults[key]
            for key, value in self._data.items()
        )

    @property
    def processing(self) -> bool:
        """True while a dispatched request has not yet settled."""
        return self._processing

    @property
    def http(self) -> HttpProxy:
        """Request functions by method name, e.g. ``form.http.put(url, data)``."""
        return self._http

    def snapshot(self) -> FormSnapshot:
        """Capture the current state as an immutable model."""
        return FormSnapshot(
            data=self.data,
            defaults=self.defaults,
            errors=self.errors,
            has_errors=self._has_errors,
            is_dirty=self.is_dirty,
            processing=self._processing,
        )

    # =========================================================================
    # Baseline and working values
    # =========================================================================

    def _replace_defaults(self, defaults: FormData) -> None:
        """Replace the baseline, resync working values, and clear errors."""
        self._defaults = dict(defaults)
        self._data = dict(defaults)
        self._errors = {}
        self._has_errors = False
        self._log_debug(f"Baseline updated: {sorted(defaults)}")

    def set_defaults(
        self,
        field_or_fields: str | Mapping[str, Any] | None = None,
        value: Any = _MISSING,
    ) -> None:
        """Update the baseline.

        - ``set_defaults()`` commits the current working values as the baseline.
        - ``set_defaults(field, value)`` sets one baseline field.
        - ``set_defaults(fields)`` merges a mapping into the baseline.

        Working values are reset to the new baseline and errors are cleared.
        A field name without a value is ignored.
        """
        if field_or_fields is None:
            self._replace_defaults(self._data)
        elif isinstance(field_or_fields, str):
            if value is _MISSING:
                return
            self._replace_defaults(
                {**self._defaults, field_or_fields: _normalize_value(value)}
            )
        elif isinstance(field_or_fields, Mapping):
            self._replace_defaults({**self._defaults, **_normalize_data(field_or_fields)})

    def set_data(self, key_or_data: str | Mapping[str, Any], value: Any = "") -> None:
        """Update working values.

        - ``set_data(field, value)`` sets one field; None becomes "".
        - ``set_data(fields)`` merges a mapping, normalizing each value.
        """
        if isinstance(key_or_data, str):
            self._data = {**self._data, key_or_data: _normalize_value(value)}
        elif isinstance(key_or_data, Mapping):
            self._data = {**self._data, **_normalize_data(key_or_data)}

    def reset(self, *fields: str) -> None:
        """Restore working values from the baseline.

        With no arguments every field is restored. Otherwise only the named
        fields present in the baseline are restored.
        """
        if not fields:
            self._data = dict(self._defaults)
            return

        restored = {key: value for key, value in self._defaults.items() if key in fields}
        self._data = {**self._data, **restored}

    # =========================================================================
    # Errors
    # =========================================================================

    def _set_errors(self, errors: FormErrors) -> None:
        self._errors = errors
        self._has_errors = len(errors) > 0

    def set_error(
        self,
        field_or_errors: str | Mapping[str, str | list[str]],
        message: str | list[str] | None = None,
    ) -> None:
        """Merge errors into the error map.

        - ``set_error(field, message)`` sets one field's message or messages.
        - ``set_error(errors)`` merges a whole mapping.

        A field name without a message leaves the errors unchanged.
        """
        if isinstance(field_or_errors, str):
            if not isinstance(message, (str, list, tuple)):
                return
            new_errors = _copy_errors({field_or_errors: message})
        elif isinstance(field_or_errors, Mapping):
            new_errors = _copy_errors(field_or_errors)
        else:
            return
        self._set_errors({**self._errors, **new_errors})

    def clear_errors(self, *fields: str) -> None:
        """Clear errors.

        With no arguments all errors are cleared. Otherwise the named fields
        are dropped and every other field keeps its error.
        """
        if not fields:
            self._set_errors({})
            return

        self._set_errors(
            {field: message for field, message in self._errors.items() if field not in fields}
        )

    # =========================================================================
    # Request lifecycle
    # =========================================================================

    def _start_processing(self) -> None:
        self._processing = True

    def _finish_processing(self) -> None:
        self._processing = False

    async def aclose(self) -> None:
        """Close the transport if this form created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "Form":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"Form(fields={sorted(self._data)}, is_dirty={self.is_dirty}, "
            f"has_errors={self._has_errors}, processing={self._processing})"
        )


def use_form(initial_values: Mapping[str, Any] | None = None, **kwargs: Any) -> Form:
    """Create a Form from initial values.

    Keyword arguments are passed to Form.

    Returns:
        A new Form instance.
    """
    return Form(initial_values, **kwargs)
