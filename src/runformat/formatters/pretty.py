"""Human-readable run output, coloured by step status."""

from __future__ import annotations

from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from ..results import FeatureResult, count_statuses
from .base import StreamFormatter

STATUS_STYLES = {
    "passed": "green",
    "failed": "red",
    "skipped": "cyan",
    "pending": "yellow",
    "undefined": "yellow",
}


class PrettyFormatter(StreamFormatter):
    """Prints each feature as it finishes, followed by a summary."""

    def __init__(self, out: Optional[TextIO] = None):
        super().__init__(out)
        self.console = Console(file=self.out, highlight=False, soft_wrap=True)
        self.features: list[FeatureResult] = []

    def feature(self, feature: FeatureResult) -> None:
        self.features.append(feature)

        header = f"[bold]Feature:[/bold] {escape(feature.name)}"
        if feature.uri:
            header += f"  [dim]# {escape(feature.uri)}[/dim]"
        self.console.print(header)
        self.console.print()

        for scenario in feature.scenarios:
            self.console.print(f"  [bold]Scenario:[/bold] {escape(scenario.name)}")
            for step in scenario.steps:
                style = STATUS_STYLES[step.status]
                self.console.print(
                    f"    [{style}]{escape(step.keyword)}{escape(step.text)}[/{style}]"
                )
                if step.error_message:
                    for line in step.error_message.splitlines():
                        self.console.print(f"      [red]{escape(line)}[/red]")
            self.console.print()

    def done(self) -> None:
        scenarios = [s for f in self.features for s in f.scenarios]
        failed = sum(1 for s in scenarios if s.status == "failed")
        self.console.print(
            f"{len(scenarios)} scenarios ([red]{failed} failed[/red], "
            f"[green]{len(scenarios) - failed} not failed[/green])"
        )

        counts = count_statuses(self.features)
        parts = [
            f"[{STATUS_STYLES[status]}]{count} {status}[/{STATUS_STYLES[status]}]"
            for status, count in counts.items()
            if count
        ]
        self.console.print(f"{sum(counts.values())} steps ({', '.join(parts)})")
