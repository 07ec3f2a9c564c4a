"""Method-name-driven request dispatcher."""

import inspect
from collections.abc import Callable, Coroutine, Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from formstate._internal.dispatch.models import SUPPORTED_METHODS, RequestOptions
from formstate._internal.dispatch.redaction import redact_fields
from formstate.exceptions import FormValidationError, UnsupportedMethodError

RequestFunction = Callable[..., Coroutine[Any, Any, None]]


def coerce_options(options: RequestOptions | Mapping[str, Any] | None) -> RequestOptions:
    """Build RequestOptions from a model, a mapping of hooks, or None.

    Raises:
        FormValidationError: If the mapping has unknown keys or non-callable hooks.
    """
    if options is None:
        return RequestOptions()
    if isinstance(options, RequestOptions):
        return options
    try:
        return RequestOptions.model_validate(dict(options))
    except (TypeError, ValueError, ValidationError) as e:
        raise FormValidationError(f"Invalid request options: {e}") from e


class Dispatcher:
    """Resolves HTTP method names to request functions on a transport.

    The dispatch table is built once from the allow-list: a name is
    dispatchable only if it is allow-listed and the transport exposes a
    callable attribute of that name. Lookups that miss raise
    UnsupportedMethodError immediately, before any transport interaction.

    Every request runs the lifecycle on_start -> transport call ->
    on_success | on_error -> on_finish. Transport failures are absorbed into
    on_error and never re-raised; on_finish runs exactly once per request.
    """

    def __init__(
        self,
        transport: Any,
        *,
        methods: Iterable[str] = SUPPORTED_METHODS,
        before_request: Callable[[], Any] | None = None,
        after_request: Callable[[], Any] | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            transport: Object exposing one callable per HTTP verb, each taking
                (url, {"data": payload}) and returning an awaitable response.
            methods: Allow-list of method names.
            before_request: Called before each request, ahead of on_start.
            after_request: Called after each request settles, ahead of on_finish.
            debug: Enable debug logging to stderr.
        """
        self._transport = transport
        self._before_request = before_request
        self._after_request = after_request
        self._debug = debug
        self._methods: dict[str, Callable[..., Any]] = {}
        for method in methods:
            func = getattr(transport, method, None)
            if callable(func):
                self._methods[method] = func
            else:
                self._log_debug(f"Transport has no callable {method!r}, skipping")

    @property
    def methods(self) -> frozenset[str]:
        """Names that can currently be dispatched."""
        return frozenset(self._methods)

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[formstate] {message}", file=sys.stderr)

    def register(self, method: str, func: Callable[..., Any]) -> None:
        """Add or replace a dispatchable method.

        Args:
            method: The method name, e.g. "purge".
            func: Callable taking (url, {"data": payload}).
        """
        if not callable(func):
            raise TypeError(f"Handler for {method!r} must be callable")
        self._methods[method] = func

    def supports(self, method: str) -> bool:
        return method in self._methods

    def dispatch(self, method: str) -> RequestFunction:
        """Resolve a method name to a request function.

        Args:
            method: The HTTP method name, e.g. "get" or "post".

        Returns:
            A function (url, payload=None, options=None) returning a coroutine
            that runs the request lifecycle and resolves to None.

        Raises:
            UnsupportedMethodError: If the method cannot be dispatched.
        """
        func = self._methods.get(method)
        if func is None:
            raise UnsupportedMethodError(method)

        def request(
            url: str,
            payload: Any = None,
            options: RequestOptions | Mapping[str, Any] | None = None,
        ) -> Coroutine[Any, Any, None]:
            return self._request(method, func, url, payload, coerce_options(options))

        request.__name__ = method
        request.__qualname__ = f"{type(self).__name__}.{method}"
        return request

    async def _request(
        self,
        method: str,
        func: Callable[..., Any],
        url: str,
        payload: Any,
        options: RequestOptions,
    ) -> None:
        """Run one request through its lifecycle hooks."""
        data = {} if payload is None else payload
        self._log_debug(f"{method.upper()} {url} {redact_fields(data)}")

        if self._before_request is not None:
            self._before_request()
        try:
            if options.on_start is not None:
                options.on_start()
            try:
                response = func(url, {"data": data})
                if inspect.isawaitable(response):
                    response = await response
                if options.on_success is not None:
                    options.on_success(response)
            except Exception as e:
                self._log_debug(f"{method.upper()} {url} failed: {e!r}")
                if options.on_error is not None:
                    options.on_error(e)
        finally:
            try:
                if self._after_request is not None:
                    self._after_request()
            finally:
                if options.on_finish is not None:
                    options.on_finish()


class HttpProxy:
    """Attribute-style access to a dispatcher: ``http.post(url, payload)``.

    ``http.<name>`` and ``http["<name>"]`` both resolve through
    Dispatcher.dispatch and raise UnsupportedMethodError for unknown names.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def __getattr__(self, name: str) -> RequestFunction:
        # Private and dunder names are never verbs; copy and pickle look them up
        # before _dispatcher is set.
        if name.startswith("_"):
            raise AttributeError(name)
        return self._dispatcher.dispatch(name)

    def __getitem__(self, name: str) -> RequestFunction:
        return self._dispatcher.dispatch(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._dispatcher.supports(name)

    def __dir__(self) -> list[str]:
        return sorted(self._dispatcher.methods)

    def __repr__(self) -> str:
        return f"HttpProxy(methods={sorted(self._dispatcher.methods)})"
