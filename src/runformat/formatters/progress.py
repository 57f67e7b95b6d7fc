"""One character per step."""

from __future__ import annotations

from typing import Optional, TextIO

from rich.console import Console

from ..results import FeatureResult, count_statuses
from .base import StreamFormatter
from .pretty import STATUS_STYLES

STATUS_CHARS = {
    "passed": ".",
    "failed": "F",
    "skipped": "-",
    "pending": "P",
    "undefined": "U",
}


class ProgressFormatter(StreamFormatter):
    def __init__(self, out: Optional[TextIO] = None):
        super().__init__(out)
        self.console = Console(file=self.out, highlight=False, soft_wrap=True)
        self.counts = {status: 0 for status in STATUS_CHARS}

    def feature(self, feature: FeatureResult) -> None:
        for status, count in count_statuses([feature]).items():
            self.counts[status] += count

        for scenario in feature.scenarios:
            for step in scenario.steps:
                style = STATUS_STYLES[step.status]
                self.console.print(
                    f"[{style}]{STATUS_CHARS[step.status]}[/{style}]", end=""
                )

    def done(self) -> None:
        self.console.print()
        summary = ", ".join(
            f"{count} {status}" for status, count in self.counts.items() if count
        )
        self.console.print(f"{sum(self.counts.values())} steps ({summary})")
