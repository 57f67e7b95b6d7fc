"""runformat CLI - build test-run report formatters from FORMAT:PATH specs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__

app = typer.Typer(
    name="runformat",
    help="Build test-run report formatters from FORMAT[:PATH] specs.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _resolve_specs(
    specs: Optional[list[str]],
    from_list: Optional[Path],
    config_path: Optional[Path],
) -> tuple[list[str], bool]:
    """Determine the formatter specs to use and the verbosity.

    Priority: specs on the command line and --from-list > config file.
    """
    from .config import Config
    from .spec import parse_spec_list

    cfg = Config.load(config_path)

    resolved = list(specs or [])
    if from_list is not None:
        if not from_list.exists():
            err_console.print(f"[red]Spec list not found: {from_list}[/red]")
            raise typer.Exit(1)
        resolved.extend(parse_spec_list(from_list))

    if not resolved:
        resolved = cfg.formatters
    return resolved, cfg.verbose


# ---------------------------------------------------------------------------
# formats command
# ---------------------------------------------------------------------------


@app.command()
def formats():
    """List the built-in formatters and how they can be configured."""
    from .formatters import Shape
    from .registry import list_builtins

    table = Table(title="Built-in formatters")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Without PATH")
    table.add_column("With PATH")

    for descriptor in list_builtins():
        shapes = descriptor.accepted_shapes
        if Shape.SINK_ONLY in shapes:
            without_path = "STDOUT"
        elif Shape.NO_ARG in shapes:
            without_path = "no output"
        else:
            without_path = "[red]PATH required[/red]"

        if Shape.PATH_ONLY in shapes:
            with_path = "directory"
        elif Shape.SINK_ONLY in shapes or Shape.SINK_AND_PATH in shapes:
            with_path = "file"
        else:
            with_path = "ignored"

        table.add_row(
            descriptor.type_token,
            descriptor.implementation.__name__,
            without_path,
            with_path,
        )

    console.print(table)
    console.print(
        "\nCustom formatters: [cyan]package.module.ClassName[/cyan][:PATH] "
        "or a plugin name from the [cyan]runformat.formatters[/cyan] entry point group"
    )


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@app.command()
def check(
    specs: Optional[list[str]] = typer.Argument(
        None,
        help="Formatter specs, e.g. 'pretty' or 'json:target/report.json'",
    ),
    from_list: Optional[Path] = typer.Option(
        None,
        "--from-list",
        "-l",
        help="Text file with one formatter spec per line",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to runformat.yaml",
    ),
):
    """Build each formatter spec and report the ones that fail.

    Output files named by the specs are created (and truncated).
    """
    from .errors import ConfigurationError
    from .factory import FormatterFactory

    resolved, verbose = _resolve_specs(specs, from_list, config_path)
    factory = FormatterFactory(verbose=verbose)

    failures = 0
    for raw in resolved:
        try:
            formatter = factory.create(raw)
        except ConfigurationError as e:
            failures += 1
            err_console.print(f"  [red]x[/red] {escape(raw)}: [red]{escape(str(e))}[/red]")
            continue

        err_console.print(
            f"  [green]ok[/green] {escape(raw)} -> {type(formatter).__name__}"
        )
        formatter.close()

    if failures:
        err_console.print(f"\n[red]{failures} of {len(resolved)} specs failed.[/red]")
        raise typer.Exit(1)

    err_console.print(f"\n[green bold]All {len(resolved)} specs are valid.[/green bold]")


# ---------------------------------------------------------------------------
# render command
# ---------------------------------------------------------------------------


@app.command()
def render(
    run_file: Path = typer.Argument(
        ...,
        help="Recorded run (YAML or JSON) with a top-level 'features' list",
    ),
    format_specs: Optional[list[str]] = typer.Option(
        None,
        "--format",
        "-f",
        help="Formatter spec; repeat for several formatters",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to runformat.yaml",
    ),
):
    """Replay a recorded run through the configured formatters."""
    from .errors import ConfigurationError
    from .factory import FormatterFactory
    from .results import load_run

    try:
        features = load_run(run_file)
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    resolved, verbose = _resolve_specs(format_specs, None, config_path)
    factory = FormatterFactory(verbose=verbose)

    try:
        formatters = factory.create_all(resolved)
    except ConfigurationError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        for feature in features:
            for formatter in formatters:
                formatter.feature(feature)
        for formatter in formatters:
            formatter.done()
    finally:
        for formatter in formatters:
            formatter.close()


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@app.command()
def version():
    """Show version information."""
    console.print(f"runformat v{__version__}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    app()


if __name__ == "__main__":
    main()
