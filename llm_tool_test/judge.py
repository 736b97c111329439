"""Rubrics and judge responses for LLM-as-judge evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

WEIGHT_TOLERANCE = 0.01


class RubricError(Exception):
    """Raised when a rubric cannot be read, parsed or validated."""


def _field(data: Mapping[str, Any], key: str, error: type[Exception]) -> Any:
    if not isinstance(data, Mapping):
        raise error("expected a mapping")
    if key not in data:
        raise error(f"missing field '{key}'")
    return data[key]


def _str_list(value: Any, key: str, error: type[Exception]) -> list[str]:
    if not isinstance(value, list):
        raise error(f"field '{key}' must be a list")
    return [str(item) for item in value]


def _number(value: Any, key: str, error: type[Exception]) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error(f"field '{key}' must be a number")
    return float(value)


@dataclass
class Criterion:
    id: str
    weight: float
    description: str


@dataclass
class OutputFormat:
    format: str
    require_fields: list[str] = field(default_factory=list)


@dataclass
class Rubric:
    """Weighted criteria for judging a tool run."""

    criteria: list[Criterion]
    output: OutputFormat

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Rubric:
        raw_criteria = _field(data, "criteria", RubricError)
        if not isinstance(raw_criteria, list):
            raise RubricError("field 'criteria' must be a list")
        criteria = [
            Criterion(
                id=str(_field(item, "id", RubricError)),
                weight=_number(_field(item, "weight", RubricError), "weight", RubricError),
                description=str(_field(item, "description", RubricError)),
            )
            for item in raw_criteria
        ]
        raw_output = _field(data, "output", RubricError)
        output = OutputFormat(
            format=str(_field(raw_output, "format", RubricError)),
            require_fields=_str_list(
                _field(raw_output, "require_fields", RubricError), "require_fields", RubricError
            ),
        )
        return cls(criteria=criteria, output=output)


@dataclass
class JudgeResponse:
    """Scores and feedback returned by a judge."""

    scores: dict[str, float]
    weighted_score: float
    confidence: float
    issues: list[str]
    highlights: list[str]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JudgeResponse:
        raw_scores = _field(data, "scores", ValueError)
        if not isinstance(raw_scores, Mapping):
            raise ValueError("field 'scores' must be a mapping")
        return cls(
            scores={str(k): _number(v, "scores", ValueError) for k, v in raw_scores.items()},
            weighted_score=_number(
                _field(data, "weighted_score", ValueError), "weighted_score", ValueError
            ),
            confidence=_number(_field(data, "confidence", ValueError), "confidence", ValueError),
            issues=_str_list(_field(data, "issues", ValueError), "issues", ValueError),
            highlights=_str_list(_field(data, "highlights", ValueError), "highlights", ValueError),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "scores": dict(self.scores),
            "weighted_score": self.weighted_score,
            "confidence": self.confidence,
            "issues": list(self.issues),
            "highlights": list(self.highlights),
        }


def load_rubric(path: str | Path) -> Rubric:
    """Load a rubric from YAML and check that its weights sum to 1.0."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RubricError(f"Failed to read rubric file: {path}: {exc}") from exc
    try:
        rubric = Rubric.from_dict(yaml.safe_load(content))
    except (yaml.YAMLError, RubricError) as exc:
        raise RubricError(f"Failed to parse rubric YAML: {path}: {exc}") from exc

    total_weight = sum(criterion.weight for criterion in rubric.criteria)
    if abs(total_weight - 1.0) > WEIGHT_TOLERANCE:
        raise RubricError(f"Rubric criterion weights must sum to 1.0, got {total_weight}")
    return rubric