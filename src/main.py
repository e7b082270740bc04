"""Entry point for the dminder service monitor."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console

from src.config import settings
from src.health.errors import ConfigError
from src.health.models import ServiceResult
from src.health.probe import ProbeConfig
from src.health.runner import run_checks
from src.services.registry import ServiceConfig, load_config

console = Console()
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def print_progress(service: ServiceConfig, result: ServiceResult) -> None:
    """One console line per service: success, failure or skip."""
    if result.skipped:
        console.print(f"[yellow]⏭  {service.name}: skipped ({result.skip_reason})[/yellow]")
    elif result.success:
        console.print(f"[green]✅ {service.name}: success ({result.responseTime}ms)[/green]")
    else:
        console.print(f"[red]❌ {service.name}: failed ({result.error or 'check failed'})[/red]")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe configured HTTP services and record check results")
    parser.add_argument("config", type=Path, help="YAML file with 'name' and 'services'")
    parser.add_argument(
        "--output", type=Path, default=Path(settings.results_path),
        help=f"Where to write the results JSON (default: {settings.results_path})",
    )
    parser.add_argument(
        "--concurrency", type=int, default=settings.concurrency,
        help="Services probed at once (default: 1, sequential)",
    )
    parser.add_argument(
        "--timeout-ms", type=int, default=settings.probe_timeout_ms,
        help="Per-request timeout in milliseconds",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error("%s", e)
        console.print(f"[bold red]Config error:[/bold red] {e}")
        return 1

    probe_config = ProbeConfig(timeout_ms=args.timeout_ms, user_agent=settings.user_agent)
    run = asyncio.run(
        run_checks(
            config,
            output_path=args.output,
            probe_config=probe_config,
            concurrency=args.concurrency,
            on_result=print_progress,
        )
    )

    failed = len(run.failures)
    style = "bold red" if failed else "bold green"
    console.print(f"[{style}]{len(run.services)} services checked, {failed} failed[/{style}]")
    return run.exit_code


if __name__ == "__main__":
    sys.exit(main())
