"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from src.health.models import ProbeResult
from src.health.probe import HttpProbe, ProbeConfig

OZONE_BODY = '{"data":{"items":[{"ozone":310}]}}'


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> Any:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_transport() -> type[RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def ozone_body() -> str:
    return OZONE_BODY


@pytest.fixture
def ozone_probe() -> ProbeResult:
    return ProbeResult(
        status_code=200,
        headers={"content-type": "application/json"},
        body=OZONE_BODY,
        elapsed_ms=120,
    )


@pytest.fixture
def ok_transport() -> RecordingTransport:
    """Every request answers 200 with the ozone document."""
    return RecordingTransport(
        lambda request: httpx.Response(
            200, text=OZONE_BODY, headers={"content-type": "application/json"},
        )
    )


@pytest.fixture
def hanging_transport() -> RecordingTransport:
    """A transport whose responses never arrive."""

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(60)
        return httpx.Response(200)

    return RecordingTransport(handler)


@pytest.fixture
def fast_config() -> ProbeConfig:
    return ProbeConfig(timeout_ms=50, user_agent="dminder-monitor/test")


@pytest.fixture
def fetch() -> Callable[..., ProbeResult]:
    """Open a probe on a transport, fetch one URL and close it."""

    def _fetch(transport: httpx.AsyncBaseTransport, config: ProbeConfig, url: str, **kw: Any) -> ProbeResult:
        async def _go() -> ProbeResult:
            async with HttpProbe(config, transport=transport) as probe:
                return await probe.fetch(url, **kw)

        return asyncio.run(_go())

    return _fetch
