"""Service registry — loads the monitor YAML config into typed models.

Unlike per-check failures, a config problem is fatal: every error here is
raised as ConfigError before any service is probed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.health.checks import (
    CheckSpec,
    JsonPathCheck,
    JsonSchemaCheck,
    ResponseTimeCheck,
    StatusCheck,
    UnknownCheck,
)
from src.health.errors import ConfigError
from src.health.schema import SchemaDescriptor, is_number

logger = logging.getLogger(__name__)


# ── Data models ──────────────────────────────────────────────────────────────


@dataclass
class ServiceConfig:
    """One monitored endpoint and the checks to run against it."""

    id: str
    name: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    enabled: bool = True
    skip_reason: str | None = None
    checks: list[CheckSpec] = field(default_factory=list)

    @property
    def is_skipped(self) -> bool:
        return not self.enabled or bool(self.skip_reason)


@dataclass
class MonitorConfig:
    name: str
    services: list[ServiceConfig] = field(default_factory=list)

    def get(self, service_id: str) -> ServiceConfig | None:
        return next((s for s in self.services if s.id == service_id), None)


# ── Loading ──────────────────────────────────────────────────────────────────


def load_config(path: Path) -> MonitorConfig:
    """Read and validate a monitor config file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e

    config = parse_config(raw, default_name=path.stem)
    logger.info("Loaded %d services from %s", len(config.services), path)
    return config


def parse_config(raw: Any, default_name: str = "") -> MonitorConfig:
    """Build a MonitorConfig from an already-parsed document."""
    if not isinstance(raw, dict):
        raise ConfigError("Config document must be a mapping with 'name' and 'services'")

    name = raw.get("name", default_name)
    if not isinstance(name, str):
        raise ConfigError("'name' must be a string")

    entries = raw.get("services")
    if not isinstance(entries, list):
        raise ConfigError("'services' must be a list")

    services: list[ServiceConfig] = []
    seen: set[str] = set()
    for i, entry in enumerate(entries):
        service = _parse_service(entry, f"services[{i}]")
        if service.id in seen:
            raise ConfigError(f"services[{i}]: duplicate service id '{service.id}'")
        seen.add(service.id)
        services.append(service)

    return MonitorConfig(name=name, services=services)


def _require_str(entry: dict[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{where}: '{key}' is required and must be a non-empty string")
    return value


def _parse_service(entry: Any, where: str) -> ServiceConfig:
    if not isinstance(entry, dict):
        raise ConfigError(f"{where}: service entry must be a mapping")

    service_id = _require_str(entry, "id", where)
    where = f"{where} ({service_id})"

    headers = entry.get("headers") or {}
    if not isinstance(headers, dict):
        raise ConfigError(f"{where}: 'headers' must be a mapping")

    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigError(f"{where}: 'enabled' must be true or false")

    skip_reason = entry.get("skip_reason")
    if skip_reason is not None:
        skip_reason = str(skip_reason)

    raw_checks = entry.get("checks") or []
    if not isinstance(raw_checks, list):
        raise ConfigError(f"{where}: 'checks' must be a list")

    return ServiceConfig(
        id=service_id,
        name=_require_str(entry, "name", where),
        url=_require_str(entry, "url", where),
        headers={str(k): str(v) for k, v in headers.items()},
        enabled=enabled,
        skip_reason=skip_reason,
        checks=[_parse_check(c, f"{where}: checks[{j}]") for j, c in enumerate(raw_checks)],
    )


def _optional_number(entry: dict[str, Any], key: str, where: str) -> float | None:
    value = entry.get(key)
    if value is not None and not is_number(value):
        raise ConfigError(f"{where}: '{key}' must be a number")
    return value


def _parse_check(entry: Any, where: str) -> CheckSpec:
    if not isinstance(entry, dict):
        raise ConfigError(f"{where}: check must be a mapping")
    check_type = entry.get("type")
    if not isinstance(check_type, str):
        raise ConfigError(f"{where}: 'type' is required")

    if check_type == "status":
        acceptable = entry.get("acceptable")
        expected = entry.get("expected")
        if acceptable is not None:
            if not isinstance(acceptable, list) or not all(
                isinstance(c, int) and not isinstance(c, bool) for c in acceptable
            ):
                raise ConfigError(f"{where}: 'acceptable' must be a list of status codes")
            return StatusCheck(acceptable=tuple(acceptable))
        if not isinstance(expected, int) or isinstance(expected, bool):
            raise ConfigError(f"{where}: status check needs 'acceptable' or an integer 'expected'")
        return StatusCheck(expected=expected)

    if check_type == "response_time":
        max_ms = _optional_number(entry, "max_ms", where)
        if max_ms is None:
            raise ConfigError(f"{where}: response_time check needs 'max_ms'")
        return ResponseTimeCheck(max_ms=max_ms)

    if check_type == "json_path":
        return JsonPathCheck(
            path=_require_str(entry, "path", where),
            expected=entry.get("expected"),
            has_expected="expected" in entry,
            min=_optional_number(entry, "min", where),
            max=_optional_number(entry, "max", where),
        )

    if check_type == "json_schema":
        schema = entry.get("schema")
        if not isinstance(schema, dict):
            raise ConfigError(f"{where}: json_schema check needs a 'schema' mapping")
        return JsonSchemaCheck(schema=_parse_schema(schema, f"{where}: schema"))

    logger.warning("%s: unknown check type '%s'", where, check_type)
    return UnknownCheck(type=check_type)


def _parse_schema(entry: dict[str, Any], where: str) -> SchemaDescriptor:
    schema_type = entry.get("type")
    if schema_type is not None and not isinstance(schema_type, str):
        raise ConfigError(f"{where}: 'type' must be a string")

    properties = entry.get("properties")
    parsed: dict[str, SchemaDescriptor] | None = None
    if properties is not None:
        if not isinstance(properties, dict):
            raise ConfigError(f"{where}: 'properties' must be a mapping")
        parsed = {}
        for key, prop in properties.items():
            if not isinstance(prop, dict):
                raise ConfigError(f"{where}.{key}: property schema must be a mapping")
            parsed[str(key)] = _parse_schema(prop, f"{where}.{key}")

    return SchemaDescriptor(
        type=schema_type,
        minimum=_optional_number(entry, "minimum", where),
        maximum=_optional_number(entry, "maximum", where),
        properties=parsed,
    )
