"""Turns ``FORMAT[:PATH]`` specs into formatter instances."""

from __future__ import annotations

from typing import Optional

from rich.console import Console

from .errors import ConfigurationError
from .formatters import Formatter, Shape
from .output import StdoutGuard, OutputTarget, open_sink, path_handle
from .registry import FormatterDescriptor, lookup_builtin, resolve_custom
from .spec import FormatterSpec, parse_spec

console = Console(stderr=True)

# Most specific first
_SHAPES_WITH_DESTINATION = (
    Shape.PATH_ONLY,
    Shape.SINK_AND_PATH,
    Shape.SINK_ONLY,
    Shape.NO_ARG,
)
_SHAPES_WITHOUT_DESTINATION = (Shape.SINK_ONLY, Shape.NO_ARG)


class FormatterFactory:
    """Builds formatters for one run.

    A factory hands standard output to at most one formatter; use a new
    factory for each run.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.stdout_guard = StdoutGuard()

    def create(self, raw: str) -> Formatter:
        """Build the formatter described by ``raw``.

        Raises ConfigurationError if the type cannot be resolved, the
        output cannot be set up, or construction fails.
        """
        spec = parse_spec(raw)
        descriptor = self._resolve(spec.type_token)
        shape = select_shape(descriptor, spec)

        sink: Optional[OutputTarget] = None
        handle: Optional[OutputTarget] = None
        if shape in (Shape.SINK_ONLY, Shape.SINK_AND_PATH):
            sink = open_sink(spec.destination, self.stdout_guard, raw)
        if shape in (Shape.PATH_ONLY, Shape.SINK_AND_PATH):
            handle = path_handle(spec.destination)

        try:
            formatter = descriptor.construct(
                shape,
                sink=sink.stream if sink else None,
                path=handle.path if handle else None,
            )
        except Exception as e:
            self._discard(sink)
            raise ConfigurationError(
                f"Could not instantiate formatter {spec.type_token}: {e}"
            ) from e

        if self.verbose:
            target = sink or handle
            console.print(
                f"  Formatter: [cyan]{spec.type_token}[/cyan] -> "
                f"{target.describe() if target else '-'} "
                f"[dim]({shape.value})[/dim]"
            )
        return formatter

    def create_all(self, raws: list[str]) -> list[Formatter]:
        """Build several formatters, closing the ones already built if one fails."""
        formatters: list[Formatter] = []
        try:
            for raw in raws:
                formatters.append(self.create(raw))
        except ConfigurationError:
            for formatter in formatters:
                formatter.close()
            raise
        return formatters

    def _resolve(self, type_token: str) -> FormatterDescriptor:
        descriptor = lookup_builtin(type_token)
        if descriptor is None:
            descriptor = resolve_custom(type_token)
        if descriptor is None:
            raise ConfigurationError(f"unknown formatter: {type_token}")
        return descriptor

    def _discard(self, sink: Optional[OutputTarget]) -> None:
        if sink is None:
            return
        if sink.owns_stream:
            sink.stream.close()
        else:
            self.stdout_guard.release()


def select_shape(descriptor: FormatterDescriptor, spec: FormatterSpec) -> Shape:
    """Pick the constructor shape to use for ``spec``.

    With a destination the most specific accepted shape wins. Without one,
    a formatter that can take a stream gets standard output, and one that
    needs a path is rejected.
    """
    if spec.destination is not None:
        candidates = _SHAPES_WITH_DESTINATION
    else:
        candidates = _SHAPES_WITHOUT_DESTINATION

    for shape in candidates:
        if shape in descriptor.accepted_shapes:
            return shape

    token = spec.type_token
    if not descriptor.accepted_shapes:
        raise ConfigurationError(f"{token} is not a formatter")
    raise ConfigurationError(
        f"You must supply an output argument to {token}. Like so: {token}:output"
    )
