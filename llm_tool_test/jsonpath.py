"""A small JSON path language and the assertions gates make on resolved values."""

from __future__ import annotations

import json
import re
from typing import Any

_MAX_INDEX = 2**64 - 1
_INDEX = re.compile(r"\+?[0-9]+")
_LEN_ASSERTION = re.compile(r"len\s*(>=|==|>)\s*(\d+)")
_ASCII_DIGITS = re.compile(r"[0-9]+")

ASSERTION_HELP = (
    "assertion must be one of: exists, equals <value>, contains <substring>, "
    "len >= N, len == N, len > N"
)
PATH_NOT_FOUND = "path not found"

Segment = str | int


class JsonPathError(ValueError):
    """Raised for a malformed path or an assertion that cannot be understood."""


def parse_json_path(path: str) -> list[Segment]:
    """Split a path such as ``$.items[0].name`` into keys (str) and indexes (int)."""
    if not path.startswith("$"):
        raise JsonPathError("path must start with '$'")

    segments: list[Segment] = []
    position = 1
    length = len(path)
    while position < length:
        char = path[position]
        if char == ".":
            start = position + 1
            end = start
            while end < length and path[end] not in ".[":
                end += 1
            if end == start:
                raise JsonPathError("empty object key in path")
            segments.append(path[start:end])
            position = end
        elif char == "[":
            start = position + 1
            end = path.find("]", start)
            if end == -1:
                raise JsonPathError("unclosed array index bracket")
            index_text = path[start:end]
            if not _INDEX.fullmatch(index_text) or int(index_text) > _MAX_INDEX:
                raise JsonPathError(f"invalid array index '{index_text}'")
            segments.append(int(index_text))
            position = end + 1
        else:
            raise JsonPathError(f"unexpected character '{char}' in path")
    return segments


def resolve_json_path(document: Any, path: str) -> tuple[bool, Any]:
    """Follow a path through a parsed JSON document.

    Returns ``(found, value)``; ``found`` is False when a key or index is missing
    or the path steps into a value of the wrong kind.
    """
    current = document
    for segment in parse_json_path(path):
        if isinstance(segment, str):
            if not isinstance(current, dict) or segment not in current:
                return False, None
            current = current[segment]
        else:
            if not isinstance(current, list) or segment >= len(current):
                return False, None
            current = current[segment]
    return True, current


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_expected(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return text


def _json_kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    return type(value).__name__


def _json_equal(left: Any, right: Any) -> bool:
    """Equality that keeps booleans, integers and floats apart."""
    if _json_kind(left) != _json_kind(right):
        return False
    if isinstance(left, dict):
        return left.keys() == right.keys() and all(
            _json_equal(left[key], right[key]) for key in left
        )
    if isinstance(left, list):
        return len(left) == len(right) and all(
            _json_equal(a, b) for a, b in zip(left, right)
        )
    return left == right


def _render(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def evaluate_json_assertion(value: Any, found: bool, assertion: str) -> tuple[bool, str]:
    """Check an assertion against a resolved value; returns ``(passed, detail)``."""
    trimmed = assertion.strip()

    if trimmed == "exists":
        return found and value is not None, "value exists and is not null"

    if trimmed.startswith("equals "):
        if not found:
            return False, PATH_NOT_FOUND
        expected = _parse_expected(trimmed[len("equals "):])
        passed = _json_equal(value, expected)
        return passed, f"actual={_render(value)}, expected={_render(expected)}"

    if trimmed.startswith("contains "):
        if not found:
            return False, PATH_NOT_FOUND
        needle = trimmed[len("contains "):]
        if not isinstance(value, str):
            return False, "value is not a string"
        return needle in value, f"substring='{needle}'"

    match = _LEN_ASSERTION.fullmatch(trimmed)
    if match is not None:
        if not found:
            return False, PATH_NOT_FOUND
        operator, number_text = match.groups()
        if not _ASCII_DIGITS.fullmatch(number_text) or int(number_text) > _MAX_INDEX:
            raise JsonPathError("length must be a non-negative integer")
        expected_len = int(number_text)
        if not isinstance(value, (list, dict)):
            return False, "value is not an array or object"
        actual_len = len(value)
        if operator == ">=":
            passed = actual_len >= expected_len
        elif operator == "==":
            passed = actual_len == expected_len
        else:
            passed = actual_len > expected_len
        return passed, f"actual_len={actual_len} {operator} {expected_len}"

    raise JsonPathError(ASSERTION_HELP)