"""Minimal JSON path resolver.

Supports ``$.a.b[2].c``: an optional leading ``$``, dot-separated keys, and at
most one ``[index]`` per segment. No wildcards, slices or recursive descent.
Parsing and evaluation are separate so each can be tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import PathResolutionError


@dataclass(frozen=True)
class PathStep:
    """One segment of a path: a mapping key, then an optional list index."""

    key: str | None
    index: int | None = None


class _PathParser:
    def __init__(self, path: str) -> None:
        self._path = path
        self._pos = 0

    def _peek(self) -> str:
        return self._path[self._pos] if self._pos < len(self._path) else ""

    def _error(self, msg: str) -> PathResolutionError:
        return PathResolutionError(f"Invalid path {self._path!r} at position {self._pos}: {msg}")

    def parse(self) -> list[PathStep]:
        if self._peek() == "$":
            self._pos += 1
        steps: list[PathStep] = []
        while self._pos < len(self._path):
            if self._peek() == ".":
                self._pos += 1
                continue  # empty segments are skipped
            steps.append(self._segment())
        return steps

    def _segment(self) -> PathStep:
        start = self._pos
        while self._peek() not in ("", ".", "["):
            if self._peek() == "]":
                raise self._error("unexpected ']'")
            self._pos += 1
        key = self._path[start:self._pos] or None

        index = None
        if self._peek() == "[":
            index = self._index()
        if self._peek() not in ("", "."):
            raise self._error(f"unexpected {self._peek()!r}")
        return PathStep(key=key, index=index)

    def _index(self) -> int:
        self._pos += 1  # '['
        start = self._pos
        while self._peek().isdigit():
            self._pos += 1
        digits = self._path[start:self._pos]
        if not digits:
            raise self._error("expected a non-negative integer index")
        if self._peek() != "]":
            raise self._error("expected ']'")
        self._pos += 1
        return int(digits)


def parse_path(path: str) -> list[PathStep]:
    """Parse a path expression into an ordered list of steps."""
    return _PathParser(path).parse()


def _get_key(current: Any, key: str, walked: str) -> Any:
    if current is None:
        raise PathResolutionError(f"Cannot read property '{key}' of null at '{walked}'")
    if not isinstance(current, dict):
        raise PathResolutionError(
            f"Cannot read property '{key}' of {type(current).__name__} at '{walked}'"
        )
    if key not in current:
        raise PathResolutionError(f"Property '{key}' not found at '{walked}'")
    return current[key]


def _get_index(current: Any, index: int, walked: str) -> Any:
    if not isinstance(current, list):
        kind = "null" if current is None else type(current).__name__
        raise PathResolutionError(f"Cannot index {kind} at '{walked}' with [{index}]")
    if index >= len(current):
        raise PathResolutionError(
            f"Index {index} out of range at '{walked}' (length {len(current)})"
        )
    return current[index]


def evaluate_steps(document: Any, steps: list[PathStep]) -> Any:
    """Walk ``document`` along ``steps`` and return the value reached."""
    current = document
    walked = "$"
    for step in steps:
        if step.key is not None:
            current = _get_key(current, step.key, walked)
            walked = f"{walked}.{step.key}"
        if step.index is not None:
            current = _get_index(current, step.index, walked)
            walked = f"{walked}[{step.index}]"
    return current


def resolve_path(document: Any, path: str) -> Any:
    """Resolve ``path`` against a parsed JSON document.

    Raises PathResolutionError for malformed paths and for missing keys,
    null intermediates or out-of-range indices.
    """
    return evaluate_steps(document, parse_path(path))
