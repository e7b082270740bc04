from src.services.registry import (
    MonitorConfig,
    ServiceConfig,
    load_config,
    parse_config,
)

__all__ = [
    "MonitorConfig",
    "ServiceConfig",
    "load_config",
    "parse_config",
]
