import json
from types import SimpleNamespace

import pytest

from llm_tool_test.adapters import (
    AdapterError,
    MockAdapter,
    TokenUsage,
    ToolAdapter,
    ToolNotAvailableError,
    ToolStatus,
    parse_token_usage_from_json,
)


def _scenario(name="test"):
    return SimpleNamespace(
        name=name,
        description="Test scenario",
        template_folder="mock_template",
        target=SimpleNamespace(binary="mock", command_pattern=None, env=None),
        task=SimpleNamespace(prompt="Test prompt"),
    )


class _StatusAdapter(ToolAdapter):
    def __init__(self, status=None, error=None):
        self.status = status
        self.error = error

    def is_available(self):
        if self.error is not None:
            raise self.error
        return self.status

    def run(self, scenario, cwd, model, timeout_secs):
        return "", 0, None, None


def _step(input_tokens=0, output_tokens=0, reasoning=0):
    return json.dumps(
        {
            "type": "step_finish",
            "part": {
                "tokens": {
                    "input": input_tokens,
                    "output": output_tokens,
                    "reasoning": reasoning,
                }
            },
        }
    )


def test_mock_adapter_is_available():
    adapter = MockAdapter()
    assert adapter.is_available() == ToolStatus(available=True, authenticated=True)
    assert adapter.check_availability() is None


def test_mock_adapter_generates_transcript():
    transcript = MockAdapter().generate_transcript(_scenario())
    assert transcript == "mock command output\nMock execution completed successfully"


def test_mock_adapter_run_returns_success(tmp_path):
    output, exit_code, _cost, _usage = MockAdapter().run(_scenario(), tmp_path, "mock", 30)
    assert exit_code == 0
    assert output != ""
    assert "Mock execution completed successfully" in output


def test_mock_adapter_run_with_gates(tmp_path):
    scenario = _scenario("test_with_gates")
    scenario.evaluation = SimpleNamespace(gates=[{"type": "command_succeeds"}])
    output, exit_code, _cost, _usage = MockAdapter().run(scenario, tmp_path, "mock", 30)
    assert exit_code == 0
    assert len(output) > 0


def test_mock_adapter_cost_and_token_usage(tmp_path):
    _output, _exit_code, cost, usage = MockAdapter().run(_scenario("cost_test"), tmp_path, "mock", 30)
    assert cost is None
    assert usage is None


def test_check_availability_passes_when_available():
    adapter = _StatusAdapter(ToolStatus(available=True, authenticated=False))
    assert adapter.check_availability() is None


def test_check_availability_not_authenticated():
    adapter = _StatusAdapter(ToolStatus(available=False, authenticated=False))
    with pytest.raises(AdapterError, match="Tool not authenticated"):
        adapter.check_availability()


def test_check_availability_not_available():
    adapter = _StatusAdapter(ToolStatus(available=False, authenticated=True))
    with pytest.raises(AdapterError, match="^Tool not available$"):
        adapter.check_availability()


def test_check_availability_propagates_errors():
    adapter = _StatusAdapter(error=ToolNotAvailableError("missing binary"))
    with pytest.raises(ToolNotAvailableError) as info:
        adapter.check_availability()
    assert str(info.value) == "Tool not available: missing binary"
    assert info.value.detail == "missing binary"


def test_parse_token_usage_sums_steps():
    output = "\n".join(
        [
            "plain text line",
            _step(100, 20, 5),
            json.dumps({"type": "text", "part": {"tokens": {"input": 999}}}),
            _step(50, 10),
        ]
    )
    assert parse_token_usage_from_json(output) == TokenUsage(input=155, output=30)


def test_parse_token_usage_none_when_no_tokens():
    assert parse_token_usage_from_json("hello\nworld") is None
    assert parse_token_usage_from_json(_step(0, 0, 0)) is None


def test_parse_token_usage_skips_invalid_json_and_indented_lines():
    output = "{not json\n  " + _step(7, 7) + "\n" + _step(3, 4)
    assert parse_token_usage_from_json(output) == TokenUsage(input=3, output=4)


def test_parse_token_usage_handles_crlf_and_missing_fields():
    event = json.dumps({"type": "step_finish", "part": {"tokens": {"output": 8}}})
    assert parse_token_usage_from_json(event + "\r\n") == TokenUsage(input=0, output=8)


def test_parse_token_usage_ignores_non_integer_counts():
    event = json.dumps(
        {"type": "step_finish", "part": {"tokens": {"input": -5, "output": 2.5, "reasoning": 4}}}
    )
    assert parse_token_usage_from_json(event) == TokenUsage(input=4, output=0)


def test_tool_adapter_is_abstract():
    with pytest.raises(TypeError):
        ToolAdapter()