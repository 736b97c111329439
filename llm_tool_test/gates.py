"""Gate checks run against a scenario's working directory after a tool run."""

from __future__ import annotations

import json
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .jsonpath import JsonPathError, evaluate_json_assertion, resolve_json_path


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _exit_code(returncode: int) -> str:
    # A negative return code means the process was killed by a signal and has no exit code.
    return f"Some({returncode})" if returncode >= 0 else "None"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


@dataclass
class GateResult:
    """Outcome of one gate check."""

    gate_type: str
    passed: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"gate_type": self.gate_type, "passed": self.passed, "message": self.message}


@dataclass
class EvaluatorResult:
    """Outcome of a custom evaluator script."""

    name: str
    metrics: Any = None
    score: float | None = None
    summary: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        for key in ("metrics", "score", "summary", "error"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


def run_shell_command(command: str, env_root: str | Path) -> subprocess.CompletedProcess[bytes]:
    """Run a command through ``sh -c`` in the given directory, capturing its output."""
    return subprocess.run(
        ["sh", "-c", command],
        cwd=env_root,
        capture_output=True,
        check=False,
    )


def eval_command_succeeds(command: str, env_root: str | Path) -> GateResult:
    gate = "CommandSucceeds"
    if not command.strip():
        return GateResult(gate, False, "Empty command")
    try:
        output = run_shell_command(command, env_root)
    except OSError as exc:
        return GateResult(gate, False, f"Failed to execute command '{command}': {exc}")
    succeeds = output.returncode == 0
    return GateResult(gate, succeeds, f"Command '{command}' succeeded: {_flag(succeeds)}")


def eval_command_output_contains(
    command: str, substring: str, env_root: str | Path
) -> GateResult:
    gate = "CommandOutputContains"
    try:
        output = run_shell_command(command, env_root)
    except OSError as exc:
        return GateResult(gate, False, f"Failed to execute command '{command}': {exc}")
    passed = output.returncode == 0 and substring in _decode(output.stdout)
    return GateResult(
        gate,
        passed,
        f"Command '{command}' contains substring '{substring}': {_flag(passed)}",
    )


def eval_command_output_matches(command: str, pattern: str, env_root: str | Path) -> GateResult:
    gate = "CommandOutputMatches"
    try:
        regex = re.compile(pattern)
    except re.error as exc:
        return GateResult(gate, False, f"Invalid regex pattern '{pattern}': {exc}")
    try:
        output = run_shell_command(command, env_root)
    except OSError as exc:
        return GateResult(gate, False, f"Failed to execute command '{command}': {exc}")
    passed = output.returncode == 0 and regex.search(_decode(output.stdout)) is not None
    return GateResult(
        gate,
        passed,
        f"Command '{command}' matches pattern '{pattern}': {_flag(passed)}",
    )


def eval_command_json_path(
    command: str, path: str, assertion: str, env_root: str | Path
) -> GateResult:
    gate = "CommandJsonPath"
    try:
        output = run_shell_command(command, env_root)
    except OSError as exc:
        return GateResult(gate, False, f"Failed to execute command '{command}': {exc}")

    if output.returncode != 0:
        stderr = _decode(output.stderr).strip()
        return GateResult(
            gate,
            False,
            f"Command '{command}' failed with exit code {_exit_code(output.returncode)}: {stderr}",
        )

    try:
        document = json.loads(_decode(output.stdout), parse_constant=_reject_constant)
    except ValueError as exc:
        return GateResult(gate, False, f"Command output is not valid JSON: {exc}")

    try:
        found, value = resolve_json_path(document, path)
    except JsonPathError as exc:
        return GateResult(gate, False, f"Invalid JSON path '{path}': {exc}")

    try:
        passed, detail = evaluate_json_assertion(value, found, assertion)
    except JsonPathError as exc:
        return GateResult(gate, False, f"Invalid assertion '{assertion}': {exc}")

    return GateResult(
        gate,
        passed,
        f"Path '{path}' with assertion '{assertion}' => {_flag(passed)} ({detail})",
    )


def eval_file_exists(path: str, env_root: str | Path) -> GateResult:
    full_path = Path(env_root) / path
    passed = full_path.exists()
    return GateResult("FileExists", passed, f"File '{full_path}' exists: {_flag(passed)}")


def _read_text(full_path: Path) -> str:
    return full_path.read_text(encoding="utf-8")


def eval_file_contains(path: str, substring: str, env_root: str | Path) -> GateResult:
    gate = "FileContains"
    full_path = Path(env_root) / path
    try:
        content = _read_text(full_path)
    except (OSError, UnicodeDecodeError) as exc:
        return GateResult(gate, False, f"Failed to read file '{full_path}': {exc}")
    passed = substring in content
    return GateResult(
        gate,
        passed,
        f"File '{full_path}' contains substring '{substring}': {_flag(passed)}",
    )


def eval_file_matches(path: str, pattern: str, env_root: str | Path) -> GateResult:
    gate = "FileMatches"
    try:
        regex = re.compile(pattern)
    except re.error as exc:
        return GateResult(gate, False, f"Invalid regex pattern '{pattern}': {exc}")
    full_path = Path(env_root) / path
    try:
        content = _read_text(full_path)
    except (OSError, UnicodeDecodeError) as exc:
        return GateResult(gate, False, f"Failed to read file '{full_path}': {exc}")
    passed = regex.search(content) is not None
    return GateResult(
        gate,
        passed,
        f"File '{full_path}' matches pattern '{pattern}': {_flag(passed)}",
    )