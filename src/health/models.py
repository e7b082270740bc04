"""Probe and result models.

ProbeResult is transient. CheckResult / ServiceResult / RunResult form the
persisted results document; they are frozen and serialize only the fields
that were set, so absent keys stay absent after a round trip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

# camelCase field names match the keys downstream consumers already read.


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class ProbeResult:
    """Raw outcome of one HTTP GET."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    elapsed_ms: int = 0


# ── Result document ──────────────────────────────────────────────────────────


class CheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    passed: bool = False
    actual: Any = None
    expected: Any = None
    acceptable: list[int] | None = None
    min: int | float | None = None
    max: int | float | None = None
    error: str | None = None


class ServiceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    url: str
    timestamp: str
    checks: list[CheckResult] = []
    success: bool | None = None
    error: str | None = None
    responseTime: int | None = None
    skipped: bool | None = None
    skip_reason: str | None = None

    @property
    def failed(self) -> bool:
        """A non-skipped service whose checks did not all pass."""
        return not self.skipped and not self.success


class RunResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    timestamp: str
    services: list[ServiceResult] = []

    @property
    def failures(self) -> list[ServiceResult]:
        return [s for s in self.services if s.failed]

    @property
    def exit_code(self) -> int:
        return 1 if self.failures else 0

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, exclude_unset=True)

    @classmethod
    def from_json(cls, text: str) -> RunResult:
        return cls.model_validate_json(text)

    def write(self, path: Path) -> Path:
        """Persist the document as JSON and return the path written."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json() + "\n", encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> RunResult:
        return cls.from_json(path.read_text(encoding="utf-8"))
