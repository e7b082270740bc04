"""Health subsystem — probe, check evaluator, service checker, run orchestrator."""

from .checker import ServiceChecker
from .checks import evaluate_check
from .errors import ConfigError, PathResolutionError, RequestError
from .models import CheckResult, ProbeResult, RunResult, ServiceResult
from .probe import HttpProbe, ProbeConfig
from .runner import RunOrchestrator, run_checks
