"""Exception types shared by the probe, evaluator and config loader."""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for all monitor errors."""


class RequestError(MonitorError):
    """Raised when the HTTP probe fails (transport error or timeout)."""


class PathResolutionError(MonitorError):
    """Raised when a JSON path cannot be parsed or resolved."""


class ConfigError(MonitorError):
    """Raised when the service configuration cannot be loaded."""
