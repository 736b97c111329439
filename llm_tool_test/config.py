"""Tool, profile and path configuration loaded from a TOML file."""

from __future__ import annotations

import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

CONFIG_FILE_NAME = "llm-tool-test-config.toml"
DEFAULT_FIXTURES_PATH = "llm-test-fixtures"
DEFAULT_RESULTS_PATH = "llm-tool-test-results"


class ConfigError(Exception):
    """Raised when configuration cannot be read, parsed or validated."""


@dataclass
class ToolConfig:
    """Configuration for one LLM tool."""

    name: str
    command: str
    models: list[str] = field(default_factory=list)


@dataclass
class ProfileConfig:
    """A named matrix of tools and models."""

    name: str
    tools: list[str]
    models: list[str]


def _require_str(data: Mapping[str, Any], key: str, where: str) -> str:
    if key not in data:
        raise ConfigError(f"missing field '{key}' in {where}")
    value = data[key]
    if not isinstance(value, str):
        raise ConfigError(f"field '{key}' in {where} must be a string")
    return value


def _str_list(data: Mapping[str, Any], key: str, where: str, *, required: bool) -> list[str]:
    if key not in data:
        if required:
            raise ConfigError(f"missing field '{key}' in {where}")
        return []
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"field '{key}' in {where} must be a list of strings")
    return list(value)


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"field '{key}' must be a string")
    return value


def _table(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"field '{key}' must be a table")
    return value


def _check_model(tool_name: str, tool: ToolConfig, model_name: str) -> None:
    if tool.models and model_name not in tool.models:
        raise ConfigError(f"Tool '{tool_name}' does not support model '{model_name}'")


@dataclass
class Config:
    """Top-level configuration."""

    tools: dict[str, ToolConfig] = field(default_factory=dict)
    profiles: dict[str, ProfileConfig] = field(default_factory=dict)
    fixtures_path: str | None = None
    results_path: str | None = None

    @classmethod
    def load_or_default(cls) -> Config:
        """Load the config file in the working directory, falling back to defaults."""
        path = Path(CONFIG_FILE_NAME)
        if path.exists():
            try:
                return cls.load(path)
            except ConfigError as exc:
                print(f"Warning: Failed to load config file: {exc}", file=sys.stderr)
                print("Using default configuration", file=sys.stderr)
        return cls()

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Read and parse a TOML config file."""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Failed to read config file: {exc}") from exc
        try:
            data = tomllib.loads(content)
            return cls.from_dict(data)
        except (tomllib.TOMLDecodeError, ConfigError) as exc:
            raise ConfigError(f"Failed to parse config file: {exc}") from exc

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from parsed TOML data."""
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a table")
        tools: dict[str, ToolConfig] = {}
        for key, entry in _table(data, "tools").items():
            where = f"tools.{key}"
            if not isinstance(entry, Mapping):
                raise ConfigError(f"{where} must be a table")
            tools[key] = ToolConfig(
                name=_require_str(entry, "name", where),
                command=_require_str(entry, "command", where),
                models=_str_list(entry, "models", where, required=False),
            )
        profiles: dict[str, ProfileConfig] = {}
        for key, entry in _table(data, "profiles").items():
            where = f"profiles.{key}"
            if not isinstance(entry, Mapping):
                raise ConfigError(f"{where} must be a table")
            profiles[key] = ProfileConfig(
                name=_require_str(entry, "name", where),
                tools=_str_list(entry, "tools", where, required=True),
                models=_str_list(entry, "models", where, required=True),
            )
        return cls(
            tools=tools,
            profiles=profiles,
            fixtures_path=_optional_str(data, "fixtures_path"),
            results_path=_optional_str(data, "results_path"),
        )

    def get_fixtures_path(self) -> str:
        return self.fixtures_path if self.fixtures_path is not None else DEFAULT_FIXTURES_PATH

    def get_results_path(self) -> str:
        return self.results_path if self.results_path is not None else DEFAULT_RESULTS_PATH

    def get_tool(self, name: str) -> ToolConfig | None:
        return self.tools.get(name)

    def get_profile(self, name: str) -> ProfileConfig | None:
        return self.profiles.get(name)

    def build_profile_matrix(self, profile_name: str) -> list[tuple[str, str]]:
        """Expand a profile into (tool, model) pairs, checking model support."""
        profile = self.get_profile(profile_name)
        if profile is None:
            raise ConfigError(f"Profile '{profile_name}' not found in configuration")
        matrix: list[tuple[str, str]] = []
        for tool_name in profile.tools:
            tool = self.get_tool(tool_name)
            if tool is None:
                raise ConfigError(f"Tool '{tool_name}' not found in configuration")
            for model_name in profile.models:
                _check_model(tool_name, tool, model_name)
                matrix.append((tool_name, model_name))
        return matrix

    def validate_tool_model(self, tool_name: str, model_name: str) -> None:
        """Raise ConfigError unless the tool is configured and supports the model."""
        tool = self.get_tool(tool_name)
        if tool is None:
            raise ConfigError(f"Tool '{tool_name}' not found in configuration")
        _check_model(tool_name, tool, model_name)