"""Declarative checks and their evaluator.

Each check type is a frozen dataclass; ``evaluate_check`` dispatches on the
check's class and always returns exactly one CheckResult. Exceptions raised
while evaluating (bad JSON, unresolvable path, ...) become a failed result
carrying the error message; they never escape.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from .jsonpath import resolve_path
from .models import CheckResult, ProbeResult
from .schema import SchemaDescriptor, is_number, validate_schema

logger = logging.getLogger(__name__)


# ── Check definitions ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class StatusCheck:
    acceptable: tuple[int, ...] | None = None
    expected: int | None = None
    type: str = "status"


@dataclass(frozen=True)
class ResponseTimeCheck:
    max_ms: int
    type: str = "response_time"


@dataclass(frozen=True)
class JsonPathCheck:
    path: str
    expected: Any = None
    has_expected: bool = False  # distinguishes `expected: null` from "not given"
    min: float | None = None
    max: float | None = None
    type: str = "json_path"


@dataclass(frozen=True)
class JsonSchemaCheck:
    schema: SchemaDescriptor
    type: str = "json_schema"


@dataclass(frozen=True)
class UnknownCheck:
    """A check whose type tag is not recognised; always fails."""

    type: str


CheckSpec = Union[StatusCheck, ResponseTimeCheck, JsonPathCheck, JsonSchemaCheck, UnknownCheck]


# ── Evaluators ───────────────────────────────────────────────────────────────
# Each evaluator fills ``out`` in place so fields recorded before an exception
# survive into the failed result.


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant {name!r}")


def _parse_body(probe: ProbeResult) -> Any:
    # NaN / Infinity are not JSON
    return json.loads(probe.body, parse_constant=_reject_constant)


def _strict_equals(a: Any, b: Any) -> bool:
    # True == 1 in Python; a JSON boolean never equals a JSON number
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def _eval_status(check: StatusCheck, probe: ProbeResult, response_time: int, out: dict[str, Any]) -> None:
    out["actual"] = probe.status_code
    if check.acceptable is not None:
        out["acceptable"] = list(check.acceptable)
        out["passed"] = probe.status_code in check.acceptable
    else:
        if check.expected is not None:
            out["expected"] = check.expected
        out["passed"] = probe.status_code == check.expected


def _eval_response_time(
    check: ResponseTimeCheck, probe: ProbeResult, response_time: int, out: dict[str, Any],
) -> None:
    out["actual"] = response_time
    out["max"] = check.max_ms
    out["passed"] = response_time <= check.max_ms


def _eval_json_path(check: JsonPathCheck, probe: ProbeResult, response_time: int, out: dict[str, Any]) -> None:
    value = resolve_path(_parse_body(probe), check.path)
    out["actual"] = value

    if check.has_expected:
        out["expected"] = check.expected
        out["passed"] = _strict_equals(value, check.expected)
        return

    if check.min is None and check.max is None:
        out["error"] = "json_path check defines neither 'expected' nor 'min'/'max'"
        return

    if check.min is not None:
        out["min"] = check.min
    if check.max is not None:
        out["max"] = check.max
    if not is_number(value):
        out["error"] = f"Value at {check.path} is not a number: {value!r}"
        return
    passed = True
    if check.min is not None and value < check.min:
        passed = False
    if check.max is not None and value > check.max:
        passed = False
    out["passed"] = passed


def _eval_json_schema(
    check: JsonSchemaCheck, probe: ProbeResult, response_time: int, out: dict[str, Any],
) -> None:
    out["passed"] = validate_schema(_parse_body(probe), check.schema)


CHECK_EVALUATORS: dict[type, Callable[[Any, ProbeResult, int, dict[str, Any]], None]] = {
    StatusCheck: _eval_status,
    ResponseTimeCheck: _eval_response_time,
    JsonPathCheck: _eval_json_path,
    JsonSchemaCheck: _eval_json_schema,
}


def evaluate_check(check: CheckSpec, probe: ProbeResult, response_time: int) -> CheckResult:
    """Evaluate one check against a probe result and measured response time."""
    out: dict[str, Any] = {"type": check.type, "passed": False}

    evaluator = CHECK_EVALUATORS.get(type(check))
    if evaluator is None:
        logger.warning("Unknown check type %r: reported as failed", check.type)
        return CheckResult(**out)

    try:
        evaluator(check, probe, response_time, out)
    except Exception as e:
        out["passed"] = False
        out["error"] = str(e) or type(e).__name__
    return CheckResult(**out)
