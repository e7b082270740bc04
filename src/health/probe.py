"""HTTP probe — one GET per service, timed from dispatch to full body.

All failures (DNS, refused connection, TLS, premature close, timeout) are
raised as RequestError. On timeout the request task is cancelled, which
closes its connection instead of leaving it to finish in the background.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

import httpx

from src.config import settings

from .errors import RequestError
from .models import ProbeResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeConfig:
    timeout_ms: int = 10_000
    user_agent: str = "dminder-monitor/1.0"

    @classmethod
    def from_settings(cls) -> ProbeConfig:
        return cls(timeout_ms=settings.probe_timeout_ms, user_agent=settings.user_agent)


class HttpProbe:
    """Async GET probe sharing one httpx client across requests."""

    def __init__(
        self,
        config: ProbeConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ProbeConfig()
        self._client = httpx.AsyncClient(
            timeout=self.config.timeout_ms / 1000,
            follow_redirects=False,
            transport=transport,
        )

    async def __aenter__(self) -> HttpProbe:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self, extra: dict[str, str] | None) -> httpx.Headers:
        headers = httpx.Headers({"User-Agent": self.config.user_agent})
        if extra:
            headers.update(extra)  # case-insensitive: caller wins
        return headers

    async def fetch(self, url: str, headers: dict[str, str] | None = None) -> ProbeResult:
        """GET ``url`` and return status, headers, body and elapsed ms."""
        timeout_s = self.config.timeout_ms / 1000
        t0 = time.perf_counter()
        try:
            resp = await asyncio.wait_for(
                self._client.get(url, headers=self._headers(headers)),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.debug("GET %s timed out after %dms", url, self.config.timeout_ms)
            raise RequestError("Request timeout") from e
        except httpx.InvalidURL as e:
            raise RequestError(f"Invalid URL: {e}") from e
        except httpx.HTTPError as e:
            logger.debug("GET %s failed: %s", url, e)
            raise RequestError(str(e) or type(e).__name__) from e
        except Exception as e:
            # e.g. a header value httpx cannot encode
            logger.debug("GET %s could not be sent: %s", url, e)
            raise RequestError(f"Request error: {type(e).__name__}: {e}") from e

        elapsed_ms = int((time.perf_counter() - t0) * 1000)
        logger.debug("GET %s -> %d (%dms)", url, resp.status_code, elapsed_ms)
        return ProbeResult(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            body=resp.text,
            elapsed_ms=elapsed_ms,
        )
