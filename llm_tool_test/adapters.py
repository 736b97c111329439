"""Adapters that run LLM command-line tools, and token usage parsing."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_U64_MAX = 2**64 - 1

MOCK_TRANSCRIPT = "mock command output\nMock execution completed successfully"


class AdapterError(Exception):
    """Raised when a tool adapter cannot do its work."""


class ToolNotAvailableError(AdapterError):
    """Raised when a tool is not installed or cannot be started."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Tool not available: {detail}")
        self.detail = detail


@dataclass(frozen=True)
class ToolStatus:
    """Whether a tool is installed and authenticated."""

    available: bool
    authenticated: bool


@dataclass(frozen=True)
class TokenUsage:
    """Tokens consumed by a run."""

    input: int
    output: int


class ToolAdapter(ABC):
    """Runs one LLM tool against a scenario."""

    @abstractmethod
    def is_available(self) -> ToolStatus:
        """Report whether the tool is installed and authenticated."""

    def check_availability(self) -> None:
        """Raise AdapterError unless the tool is ready to use."""
        status = self.is_available()
        if status.available:
            return
        if not status.authenticated:
            raise AdapterError("Tool not authenticated")
        raise AdapterError("Tool not available")

    @abstractmethod
    def run(
        self,
        scenario: Any,
        cwd: str | Path,
        model: str | None,
        timeout_secs: int,
    ) -> tuple[str, int, float | None, TokenUsage | None]:
        """Run the tool; returns output, exit code, cost in USD and token usage."""


class MockAdapter(ToolAdapter):
    """An adapter that runs nothing and reports a fixed successful transcript."""

    def generate_transcript(self, scenario: Any) -> str:
        return MOCK_TRANSCRIPT

    def is_available(self) -> ToolStatus:
        return ToolStatus(available=True, authenticated=True)

    def check_availability(self) -> None:
        return None

    def run(
        self,
        scenario: Any,
        cwd: str | Path,
        model: str | None,
        timeout_secs: int,
    ) -> tuple[str, int, float | None, TokenUsage | None]:
        return self.generate_transcript(scenario), 0, None, None


def _as_u64(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= _U64_MAX:
        return value
    return 0


def _step_tokens(event: Any) -> tuple[int, int] | None:
    if not isinstance(event, dict) or event.get("type") != "step_finish":
        return None
    part = event.get("part")
    if not isinstance(part, dict) or "tokens" not in part:
        return None
    tokens = part["tokens"]
    if not isinstance(tokens, dict):
        return 0, 0
    prompt = _as_u64(tokens.get("input")) + _as_u64(tokens.get("reasoning"))
    return prompt, _as_u64(tokens.get("output"))


def parse_token_usage_from_json(output: str) -> TokenUsage | None:
    """Sum token counts from ``step_finish`` events in JSON-lines tool output.

    Reasoning tokens count as input. Returns None when no tokens were reported.
    """
    total_input = 0
    total_output = 0
    for raw_line in output.split("\n"):
        line = raw_line.removesuffix("\r")
        if not line.startswith("{"):
            continue
        try:
            event = json.loads(line)
        except ValueError:
            continue
        tokens = _step_tokens(event)
        if tokens is not None:
            total_input += tokens[0]
            total_output += tokens[1]

    if total_input > 0 or total_output > 0:
        return TokenUsage(input=total_input, output=total_output)
    return None