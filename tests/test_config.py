import pytest

from llm_tool_test.config import Config, ConfigError, ProfileConfig, ToolConfig


def _config_with(tool_models, profile_models, profile_tools=("opencode",)):
    config = Config()
    config.tools["opencode"] = ToolConfig(
        name="opencode", command="opencode", models=list(tool_models)
    )
    config.profiles["standard"] = ProfileConfig(
        name="standard", tools=list(profile_tools), models=list(profile_models)
    )
    return config


def test_default_config():
    config = Config()
    assert config.tools == {}
    assert config.profiles == {}
    assert config.get_fixtures_path() == "llm-test-fixtures"
    assert config.get_results_path() == "llm-tool-test-results"


def test_load_and_save(tmp_path):
    path = tmp_path / "test-config.toml"
    path.write_text(
        '[tools.opencode]\nname = "opencode"\ncommand = "opencode"\nmodels = ["gpt-4o"]\n',
        encoding="utf-8",
    )
    loaded = Config.load(path)
    assert len(loaded.tools) == 1
    assert loaded.tools["opencode"] == ToolConfig("opencode", "opencode", ["gpt-4o"])


def test_load_paths_and_profiles(tmp_path):
    path = tmp_path / "c.toml"
    path.write_text(
        'fixtures_path = "fx"\nresults_path = "out"\n'
        '[profiles.full]\nname = "full"\ntools = ["a"]\nmodels = ["m"]\n',
        encoding="utf-8",
    )
    loaded = Config.load(path)
    assert loaded.get_fixtures_path() == "fx"
    assert loaded.get_results_path() == "out"
    assert loaded.get_profile("full") == ProfileConfig("full", ["a"], ["m"])


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Failed to read config file"):
        Config.load(tmp_path / "missing.toml")


def test_load_invalid_toml(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("this is = = not toml", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse config file"):
        Config.load(path)


def test_load_missing_required_field(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text('[tools.x]\nname = "x"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="command"):
        Config.load(path)


def test_load_or_default_uses_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "llm-tool-test-config.toml").write_text('results_path = "r"\n', encoding="utf-8")
    assert Config.load_or_default().get_results_path() == "r"


def test_load_or_default_falls_back(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "llm-tool-test-config.toml").write_text("= broken", encoding="utf-8")
    config = Config.load_or_default()
    assert config == Config()
    assert "Failed to load config file" in capsys.readouterr().err


def test_build_profile_matrix():
    config = _config_with(["gpt-4o", "claude-sonnet"], ["gpt-4o"])
    assert config.build_profile_matrix("standard") == [("opencode", "gpt-4o")]


def test_build_profile_matrix_invalid_model():
    config = _config_with(["gpt-4o"], ["unsupported-model"])
    with pytest.raises(ConfigError, match="does not support"):
        config.build_profile_matrix("standard")


def test_build_profile_matrix_unknown_profile():
    with pytest.raises(ConfigError, match="Profile 'nope' not found"):
        Config().build_profile_matrix("nope")


def test_build_profile_matrix_unknown_tool():
    config = _config_with([], ["m"], profile_tools=["ghost"])
    with pytest.raises(ConfigError, match="Tool 'ghost' not found"):
        config.build_profile_matrix("standard")


def test_build_profile_matrix_empty_models_accepts_any():
    config = _config_with([], ["a", "b"])
    assert config.build_profile_matrix("standard") == [("opencode", "a"), ("opencode", "b")]


def test_validate_tool_model():
    config = _config_with(["gpt-4o"], [])
    assert config.validate_tool_model("opencode", "gpt-4o") is None
    with pytest.raises(ConfigError, match="does not support"):
        config.validate_tool_model("opencode", "unsupported")
    with pytest.raises(ConfigError, match="not found"):
        config.validate_tool_model("unknown", "gpt-4o")