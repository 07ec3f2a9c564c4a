"""Default HTTP transport built on httpx."""

import os
from typing import Any

import httpx

from formstate._version import __version__
from formstate.exceptions import TransportError

DEFAULT_TIMEOUT_MS = 30000

# Verbs whose payload travels as query parameters instead of a JSON body
QUERY_METHODS: frozenset[str] = frozenset({"get", "head", "options", "delete"})


def debug_from_env() -> bool:
    """Check whether FORMSTATE_DEBUG enables debug logging."""
    return os.environ.get("FORMSTATE_DEBUG", "") == "1"


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT_MS / 1000,
    base_url: str | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"formstate/{__version__}"},
    )


class HttpTransport:
    """Transport exposing one coroutine per HTTP verb.

    Each verb takes ``(url, {"data": payload})`` and returns the
    httpx.Response. Non-2xx responses and connection errors raise
    TransportError, which the dispatcher routes to on_error.

    Use `HttpTransport.from_env()` to configure from environment variables.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        client: httpx.AsyncClient | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Base URL for relative request URLs.
            timeout_ms: Request timeout in milliseconds.
            client: Existing client to use. The transport does not close it.
            debug: Enable debug logging to stderr.
        """
        self._base_url = base_url
        self._timeout_ms = timeout_ms
        self._client = client
        self._owns_client = client is None
        self._debug = debug

    @classmethod
    def from_env(cls, *, debug: bool | None = None) -> "HttpTransport":
        """Create a transport from environment variables.

        Optional environment variables:
            FORMSTATE_BASE_URL: Base URL for relative request URLs.
            FORMSTATE_TIMEOUT_MS: Request timeout in milliseconds.
            FORMSTATE_DEBUG: Set to "1" to enable debug logging.

        Args:
            debug: Overrides FORMSTATE_DEBUG when given.

        Returns:
            A configured HttpTransport.
        """
        base_url = os.environ.get("FORMSTATE_BASE_URL")
        timeout_ms = int(os.environ.get("FORMSTATE_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
        if debug is None:
            debug = debug_from_env()

        return cls(base_url=base_url, timeout_ms=timeout_ms, debug=debug)

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying client, created on first use."""
        if self._client is None:
            self._client = create_http_client(
                timeout=self._timeout_ms / 1000,
                base_url=self._base_url,
            )
        return self._client

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[formstate:http] {message}", file=sys.stderr)

    async def request(
        self,
        method: str,
        url: str,
        config: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request and return the response.

        Args:
            method: HTTP verb, any case.
            url: Absolute URL, or relative to the base URL.
            config: Request config; ``config["data"]`` is the payload.

        Returns:
            The httpx.Response for a 2xx status.

        Raises:
            TransportError: On timeout, connection failure, or non-2xx status.
        """
        verb = method.upper()
        data = (config or {}).get("data")

        kwargs: dict[str, Any] = {}
        if data is not None and data != {}:
            if method.lower() in QUERY_METHODS:
                kwargs["params"] = data
            else:
                kwargs["json"] = data

        try:
            response = await self.client.request(verb, url, **kwargs)
        except httpx.TimeoutException as e:
            self._log_debug(f"{verb} {url} timed out")
            raise TransportError(f"{verb} {url} timed out") from e
        except httpx.HTTPError as e:
            self._log_debug(f"{verb} {url} error: {e}")
            raise TransportError(f"{verb} {url} failed: {e}") from e

        if not response.is_success:
            self._log_debug(f"{verb} {url} failed with status {response.status_code}")
            raise TransportError(
                f"{verb} {url} failed with status {response.status_code}",
                status_code=response.status_code,
                response=response,
            )

        self._log_debug(f"{verb} {url} -> {response.status_code}")
        return response

    # =========================================================================
    # Verbs
    # =========================================================================

    async def get(self, url: str, config: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("get", url, config)

    async def post(self, url: str, config: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("post", url, config)

    async def put(self, url: str, config: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("put", url, config)

    async def patch(self, url: str, config: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("patch", url, config)

    async def delete(self, url: str, config: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("delete", url, config)

    async def head(self, url: str, config: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("head", url, config)

    async def options(self, url: str, config: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("options", url, config)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
