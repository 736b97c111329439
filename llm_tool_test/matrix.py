"""Expansion of command-line, profile and scenario settings into tool/model runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .config import Config, ConfigError

DEFAULT_TOOL = "opencode"
DEFAULT_MODEL = "default"


class MatrixError(ValueError):
    """Raised when a tool/model matrix cannot be built."""


@dataclass(frozen=True)
class ToolModelConfig:
    """One tool and model combination to run."""

    tool: str
    model: str


@dataclass
class ScenarioToolEntry:
    """A tool and the models to try with it, as listed in a scenario."""

    tool: str
    models: list[str] = field(default_factory=list)


def build_tool_matrix(
    cli_tool: str | None,
    cli_model: str | None,
    cli_profile: str | None,
    config: Config,
    scenario_matrix: Iterable[ScenarioToolEntry] | None,
) -> list[ToolModelConfig]:
    """Build the list of tool/model runs.

    A profile takes precedence, then a scenario's own matrix, then a single
    tool and model from the command line.
    """
    if cli_profile is not None:
        try:
            pairs = config.build_profile_matrix(cli_profile)
        except ConfigError as exc:
            raise MatrixError(str(exc)) from exc
        return [ToolModelConfig(tool, model) for tool, model in pairs]

    if scenario_matrix is not None:
        return [
            ToolModelConfig(entry.tool, model)
            for entry in scenario_matrix
            for model in (entry.models or [DEFAULT_MODEL])
        ]

    tool = cli_tool if cli_tool is not None else DEFAULT_TOOL

    if cli_model is not None:
        try:
            config.validate_tool_model(tool, cli_model)
        except ConfigError as exc:
            # Tools missing from the configuration accept any model.
            if config.get_tool(tool) is not None:
                raise MatrixError(str(exc)) from exc

    model = cli_model if cli_model is not None else DEFAULT_MODEL
    return [ToolModelConfig(tool, model)]