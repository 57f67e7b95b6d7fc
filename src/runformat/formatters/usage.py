"""Step usage report: how often each step ran and how long it took."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..results import FeatureResult
from .base import StreamFormatter


@dataclass
class StepUsage:
    text: str
    count: int = 0
    total_duration: float = 0.0

    @property
    def mean_duration(self) -> float:
        return self.total_duration / self.count if self.count else 0.0


class UsageFormatter(StreamFormatter):
    """Aggregates step usage and prints a table, slowest steps first."""

    def __init__(self, out: Optional[TextIO] = None):
        super().__init__(out)
        self.usage: dict[str, StepUsage] = {}

    def feature(self, feature: FeatureResult) -> None:
        for scenario in feature.scenarios:
            for step in scenario.steps:
                entry = self.usage.setdefault(step.text, StepUsage(text=step.text))
                entry.count += 1
                entry.total_duration += step.duration

    def sorted_usage(self) -> list[StepUsage]:
        return sorted(
            self.usage.values(), key=lambda u: (-u.total_duration, u.text)
        )

    def done(self) -> None:
        table = Table(title="Step usage")
        table.add_column("Step")
        table.add_column("Count", justify="right")
        table.add_column("Total (s)", justify="right")
        table.add_column("Mean (s)", justify="right")

        for entry in self.sorted_usage():
            table.add_row(
                escape(entry.text),
                str(entry.count),
                f"{entry.total_duration:.3f}",
                f"{entry.mean_duration:.3f}",
            )

        console = Console(file=self.out, highlight=False)
        console.print(table)
