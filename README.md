# llm_tool_test

Building blocks for evaluating LLM command-line tools against test
scenarios: a TOML configuration of tools and matrix profiles, expansion
into tool/model runs, *gates* that check a run's working directory,
a small JSON path assertion language, judge rubrics, and tool adapters.

Requires Python 3.11 or later. The command gates run through `sh -c`,
so they need a POSIX shell.

## Configuration

Tools and matrix profiles are described in a TOML file:

```toml
fixtures_path = "llm-test-fixtures"
results_path = "llm-tool-test-results"

[tools.opencode]
name = "opencode"
command = "opencode"
models = ["gpt-4o", "claude-sonnet"]

[profiles.standard]
name = "standard"
tools = ["opencode"]
models = ["gpt-4o"]
```

```python
from llm_tool_test.config import Config

config = Config.load_or_default()          # reads llm-tool-test-config.toml if present
config.build_profile_matrix("standard")    # [("opencode", "gpt-4o")]
config.validate_tool_model("opencode", "gpt-4o")
config.get_results_path()                  # "llm-tool-test-results" unless set
```

`Config.load(path)` and `Config.from_dict(data)` raise `ConfigError` on
unreadable or malformed input. `build_profile_matrix` and
`validate_tool_model` raise `ConfigError` for an unknown profile or tool,
or when a tool that lists models does not list the requested one.
`load_or_default` prints a warning and falls back to defaults when the
file cannot be loaded.

## Tool/model matrices

```python
from llm_tool_test.matrix import ScenarioToolEntry, build_tool_matrix

build_tool_matrix(None, None, "standard", config, None)
# [ToolModelConfig(tool='opencode', model='gpt-4o')]

build_tool_matrix(None, None, None, config, [ScenarioToolEntry("opencode")])
# [ToolModelConfig(tool='opencode', model='default')]
```

A profile takes precedence, then a scenario's own matrix (an entry with no
models runs with `default`), then a single tool and model. Without a tool
the tool is `opencode`; without a model it is `default`. A model is only
checked against tools present in the configuration. Problems raise
`MatrixError`.

## Gates

Each gate in `llm_tool_test.gates` returns a `GateResult` with
`gate_type`, `passed` and `message`; failures to run a command or read a
file are reported as a failed gate rather than raised.

```python
from llm_tool_test.gates import (
    eval_command_succeeds,
    eval_command_output_contains,
    eval_command_output_matches,
    eval_command_json_path,
    eval_file_exists,
    eval_file_contains,
    eval_file_matches,
)

eval_command_succeeds("true", "work/env")
eval_command_output_matches("printf 'abc-123'", r"abc-\d+", "work/env")
eval_command_json_path("cat status.json", "$.items", "len >= 3", "work/env")
eval_file_contains("notes.md", "complete", "work/env")
```

Commands run in the given directory; output gates also require a zero exit
status. `run_shell_command` is available on its own, and `EvaluatorResult`
holds the outcome of a custom evaluator script (`name`, `metrics`, `score`,
`summary`, `error`).

## JSON paths and assertions

```python
from llm_tool_test.jsonpath import evaluate_json_assertion, parse_json_path, resolve_json_path

parse_json_path("$.items[0].name")                 # ["items", 0, "name"]
found, value = resolve_json_path({"count": 3}, "$.count")
evaluate_json_assertion(value, found, "equals 3")   # (True, "actual=3, expected=3")
```

Paths start with `$` and use `.key` and `[index]` segments. Assertions
are `exists`, `equals <value>` (the value is read as JSON, or as a plain
string if it is not JSON), `contains <substring>`, and `len >= N`,
`len == N`, `len > N`. A malformed path or assertion raises
`JsonPathError`.

## Rubrics and judge responses

```python
from llm_tool_test.judge import JudgeResponse, load_rubric

rubric = load_rubric("rubrics/quality.yaml")
response = JudgeResponse.from_dict(parsed_json)
```

A rubric is YAML with `criteria` (each with `id`, `weight`,
`description`) and `output` (`format`, `require_fields`). Criterion
weights must sum to 1.0 within 0.01, otherwise `RubricError` is raised.

## Adapters

`llm_tool_test.adapters.ToolAdapter` is the interface for running a tool:
`is_available()` returns a `ToolStatus`, `check_availability()` raises
`AdapterError` when the tool is not ready, and `run(scenario, cwd, model,
timeout_secs)` returns the output, exit code, cost in USD and
`TokenUsage`. `MockAdapter` runs nothing and returns a fixed successful
transcript with no cost or token usage.

`parse_token_usage_from_json(output)` sums the token counts of
`step_finish` events in JSON-lines output, counting reasoning tokens as
input, and returns `None` when no tokens were reported.

## What this package does not do

- It has no command-line program; everything is used as a library.
- It does not launch real LLM tools: only the mock adapter is provided.
- It does not call a judge model; it loads rubrics and reads judge
  responses only.
- It does not compute composite scores, store or cache run results, or
  print run summaries.