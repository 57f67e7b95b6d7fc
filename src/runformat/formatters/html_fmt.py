"""HTML report formatter."""

from __future__ import annotations

from html import escape
from pathlib import Path

from rich.console import Console

from ..results import FeatureResult, count_statuses
from .base import Formatter, Shape

console = Console(stderr=True)

STYLE_CSS = """\
body { font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; margin: 2rem; }
h1 { margin-bottom: 1rem; }
.feature { margin: 1.5rem 0; }
.scenario { margin: 0.5rem 0 0.5rem 1rem; }
.step { font-family: monospace; margin-left: 2rem; }
.passed { color: #27ae60; }
.failed { color: #e94560; }
.skipped { color: #3498db; }
.pending, .undefined { color: #f39c12; }
.error { white-space: pre-wrap; margin-left: 3rem; color: #e94560; }
"""


class HTMLFormatter(Formatter):
    """Writes ``index.html`` and ``style.css`` into a report directory.

    The directory is created when the report is written, not when the
    formatter is built.
    """

    accepted_shapes = frozenset({Shape.PATH_ONLY})

    def __init__(self, report_dir: Path):
        self.report_dir = Path(report_dir)
        self.features: list[FeatureResult] = []

    def feature(self, feature: FeatureResult) -> None:
        self.features.append(feature)

    def done(self) -> None:
        self.report_dir.mkdir(parents=True, exist_ok=True)

        index_path = self.report_dir / "index.html"
        index_path.write_text(self.format_all(self.features), encoding="utf-8")
        (self.report_dir / "style.css").write_text(STYLE_CSS, encoding="utf-8")

        console.print(f"  Wrote: [green]{index_path}[/green]")

    def format_all(self, features: list[FeatureResult]) -> str:
        parts = [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '  <meta charset="UTF-8">',
            "  <title>Test Run Report</title>",
            '  <link rel="stylesheet" href="style.css">',
            "</head>",
            "<body>",
            "<h1>Test Run Report</h1>",
            self._summary(features),
        ]
        for feature in features:
            parts.append(self._feature_section(feature))
        parts.extend(["</body>", "</html>"])
        return "\n".join(parts) + "\n"

    def _summary(self, features: list[FeatureResult]) -> str:
        items = "".join(
            f'<li class="{status}">{count} {status}</li>'
            for status, count in count_statuses(features).items()
        )
        return f'<ul class="summary">{items}</ul>'

    def _feature_section(self, feature: FeatureResult) -> str:
        lines = ['<div class="feature">']
        lines.append(f"  <h2>Feature: {escape(feature.name)}</h2>")
        if feature.uri:
            lines.append(f'  <p class="uri">{escape(feature.uri)}</p>')

        for scenario in feature.scenarios:
            lines.append(f'  <div class="scenario {scenario.status}">')
            lines.append(f"    <h3>Scenario: {escape(scenario.name)}</h3>")
            for step in scenario.steps:
                lines.append(
                    f'    <div class="step {step.status}">'
                    f"{escape(step.keyword)}{escape(step.text)}</div>"
                )
                if step.error_message:
                    lines.append(
                        f'    <div class="error">{escape(step.error_message)}</div>'
                    )
            lines.append("  </div>")

        lines.append("</div>")
        return "\n".join(lines)
