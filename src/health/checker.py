"""Service checker — one probe, then every configured check against it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .checks import evaluate_check
from .errors import RequestError
from .models import CheckResult, ServiceResult, utc_now_iso
from .probe import HttpProbe

if TYPE_CHECKING:
    from src.services.registry import ServiceConfig

logger = logging.getLogger(__name__)


class ServiceChecker:
    def __init__(self, probe: HttpProbe) -> None:
        self.probe = probe

    async def check(self, service: ServiceConfig) -> ServiceResult:
        """Probe ``service`` once and evaluate its checks in order.

        Disabled or skipped services return immediately without a request.
        A failed request yields ``success=False`` and a single synthetic
        ``request`` check carrying the error.
        """
        base = {
            "id": service.id,
            "name": service.name,
            "url": service.url,
            "timestamp": utc_now_iso(),
        }

        if service.is_skipped:
            reason = service.skip_reason or "Disabled"
            logger.debug("Skipping %s: %s", service.id, reason)
            return ServiceResult(**base, checks=[], skipped=True, skip_reason=reason)

        try:
            probe = await self.probe.fetch(service.url, service.headers)
        except RequestError as e:
            logger.warning("Request to %s failed: %s", service.url, e)
            return ServiceResult(
                **base,
                checks=[CheckResult(type="request", passed=False, error=str(e))],
                success=False,
                error=str(e),
            )

        checks = [evaluate_check(spec, probe, probe.elapsed_ms) for spec in service.checks]
        return ServiceResult(
            **base,
            checks=checks,
            success=all(c.passed for c in checks),
            responseTime=probe.elapsed_ms,
        )
