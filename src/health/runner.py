"""Run orchestrator — checks every configured service and persists the results.

Services are processed in declaration order. With ``concurrency > 1`` up to
that many probes run at once, but results are still reported in declaration
order in the final document.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx

from .checker import ServiceChecker
from .models import RunResult, ServiceResult, utc_now_iso
from .probe import HttpProbe, ProbeConfig

if TYPE_CHECKING:
    from src.services.registry import MonitorConfig, ServiceConfig

logger = logging.getLogger(__name__)

ProgressCallback = Callable[["ServiceConfig", ServiceResult], Any]


class RunOrchestrator:
    """Runs one pass over all services of a config document."""

    def __init__(
        self,
        probe: HttpProbe,
        concurrency: int = 1,
        on_result: ProgressCallback | None = None,
    ) -> None:
        self.checker = ServiceChecker(probe)
        self.concurrency = max(1, concurrency)
        self.on_result = on_result  # progress reporting

    async def run(self, config: MonitorConfig) -> RunResult:
        started = utc_now_iso()

        if self.concurrency == 1:
            results = [await self._check_one(s) for s in config.services]
        else:
            sem = asyncio.Semaphore(self.concurrency)

            async def bounded(service: ServiceConfig) -> ServiceResult:
                async with sem:
                    return await self._check_one(service)

            results = list(await asyncio.gather(*(bounded(s) for s in config.services)))

        run = RunResult(name=config.name, timestamp=started, services=results)
        skipped = sum(1 for s in results if s.skipped)
        logger.info(
            "Run '%s' finished: %d services, %d failed, %d skipped",
            config.name, len(results), len(run.failures), skipped,
        )
        return run

    async def _check_one(self, service: ServiceConfig) -> ServiceResult:
        logger.info("Checking %s...", service.name)
        result = await self.checker.check(service)
        if self.on_result:
            try:
                self.on_result(service, result)
            except Exception:
                logger.exception("Progress callback error")
        return result


async def run_checks(
    config: MonitorConfig,
    output_path: Path | None = None,
    probe_config: ProbeConfig | None = None,
    concurrency: int = 1,
    on_result: ProgressCallback | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RunResult:
    """Check all services in ``config`` and write the RunResult to ``output_path``."""
    async with HttpProbe(probe_config or ProbeConfig.from_settings(), transport=transport) as probe:
        orchestrator = RunOrchestrator(probe, concurrency=concurrency, on_result=on_result)
        run = await orchestrator.run(config)

    if output_path is not None:
        run.write(output_path)
        logger.info("Results written to %s", output_path)
    return run
