"""Configuration, tool/model matrices, gates, JSON path assertions, rubrics and adapters for evaluating LLM command-line tools."""

__version__ = "0.1.0"

__all__ = ["adapters", "config", "gates", "jsonpath", "judge", "matrix"]