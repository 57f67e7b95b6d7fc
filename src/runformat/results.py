"""Results of a finished test run, as consumed by formatters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

# Valid step statuses
STATUSES = ("passed", "failed", "skipped", "pending", "undefined")


@dataclass
class StepResult:
    keyword: str
    text: str
    status: str = "passed"
    duration: float = 0.0
    error_message: Optional[str] = None

    def __post_init__(self) -> None:
        if self.status not in STATUSES:
            raise ValueError(
                f"Unknown step status '{self.status}'. "
                f"Valid statuses: {', '.join(STATUSES)}"
            )


@dataclass
class ScenarioResult:
    name: str
    steps: list[StepResult] = field(default_factory=list)

    @property
    def status(self) -> str:
        """Worst status among the steps: failed > undefined > pending > skipped."""
        statuses = {step.status for step in self.steps}
        for status in ("failed", "undefined", "pending", "skipped"):
            if status in statuses:
                return status
        return "passed"

    @property
    def duration(self) -> float:
        return sum(step.duration for step in self.steps)


@dataclass
class FeatureResult:
    name: str
    uri: str = ""
    scenarios: list[ScenarioResult] = field(default_factory=list)

    @property
    def duration(self) -> float:
        return sum(s.duration for s in self.scenarios)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "uri": self.uri,
            "scenarios": [
                {
                    "name": scenario.name,
                    "status": scenario.status,
                    "steps": [
                        {
                            "keyword": step.keyword,
                            "text": step.text,
                            "status": step.status,
                            "duration": step.duration,
                            "error_message": step.error_message,
                        }
                        for step in scenario.steps
                    ],
                }
                for scenario in self.scenarios
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> FeatureResult:
        """Build a feature from its mapping form.

        Raises ValueError if an entry has the wrong shape.
        """
        _require_mapping(data, "feature")
        scenarios = []
        for sc in _require_list(data.get("scenarios"), "scenarios"):
            _require_mapping(sc, "scenario")
            steps = []
            for st in _require_list(sc.get("steps"), "steps"):
                _require_mapping(st, "step")
                steps.append(
                    StepResult(
                        keyword=str(st.get("keyword", "")),
                        text=str(st.get("text", "")),
                        status=st.get("status", "passed"),
                        duration=_duration(st.get("duration")),
                        error_message=st.get("error_message"),
                    )
                )
            scenarios.append(ScenarioResult(name=str(sc.get("name", "")), steps=steps))
        return cls(
            name=str(data.get("name", "")),
            uri=str(data.get("uri", "") or ""),
            scenarios=scenarios,
        )


def _require_mapping(value, what: str) -> None:
    if not isinstance(value, dict):
        raise ValueError(f"Each {what} must be a mapping, got: {value!r}")


def _require_list(value, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{what}' must be a list, got: {value!r}")
    return value


def _duration(value) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"Step duration must be a number, got: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Step duration must be a number, got: {value!r}") from e


def count_statuses(features: list[FeatureResult]) -> dict[str, int]:
    """Count steps by status across all features."""
    counts = {status: 0 for status in STATUSES}
    for feature in features:
        for scenario in feature.scenarios:
            for step in scenario.steps:
                counts[step.status] += 1
    return counts


def load_run(path: Path) -> list[FeatureResult]:
    """Load a recorded run from a YAML or JSON file.

    The file holds a top-level ``features`` list.
    """
    if not path.exists():
        raise FileNotFoundError(f"Run file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Run file is not valid YAML or JSON: {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Run file must contain a mapping: {path}")

    return [
        FeatureResult.from_dict(item)
        for item in _require_list(data.get("features"), "features")
    ]
