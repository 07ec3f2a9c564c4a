"""Shared fixtures for formstate tests."""

import asyncio
from typing import Any

import pytest

from formstate import Form


class FakeTransport:
    """In-memory transport recording every call.

    Set `failures[method]` to an exception to make that verb fail. With
    `blocking=True` each call waits on its own event in `gates` until the
    test sets it.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.failures: dict[str, Exception] = {}
        self.blocking = False
        self.gates: list[asyncio.Event] = []
        self.closed = False

    async def _handle(self, method: str, url: str, config: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((method, url, config))
        if self.blocking:
            gate = asyncio.Event()
            self.gates.append(gate)
            await gate.wait()
        if method in self.failures:
            raise self.failures[method]
        return {"method": method, "url": url, "data": config["data"]}

    async def get(self, url, config):
        return await self._handle("get", url, config)

    async def post(self, url, config):
        return await self._handle("post", url, config)

    async def put(self, url, config):
        return await self._handle("put", url, config)

    async def patch(self, url, config):
        return await self._handle("patch", url, config)

    async def delete(self, url, config):
        return await self._handle("delete", url, config)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def form(transport) -> Form:
    return Form({"name": "Ada", "email": "ada@example.com", "age": 36}, transport=transport)
