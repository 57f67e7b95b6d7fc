"""The Formatter capability and shared base classes."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Optional, TextIO

from ..results import FeatureResult


class Shape(str, Enum):
    """Constructor argument lists a formatter type can accept."""

    NO_ARG = "no-arg"
    SINK_ONLY = "sink"
    SINK_AND_PATH = "sink+path"
    PATH_ONLY = "path"


class Formatter(ABC):
    """Consumes the results of a run and renders them as a report.

    To create a new formatter:
    1. Inherit from Formatter
    2. Declare the constructor shapes it accepts in ``accepted_shapes``
    3. Implement ``feature``; override ``done`` and ``close`` as needed
    """

    accepted_shapes: ClassVar[frozenset[Shape]] = frozenset({Shape.NO_ARG})

    @abstractmethod
    def feature(self, feature: FeatureResult) -> None:
        """Receive one finished feature."""

    def done(self) -> None:
        """Called once after the last feature."""

    def close(self) -> None:
        """Release resources owned by the formatter."""


class StreamFormatter(Formatter):
    """Base for formatters writing to a text stream.

    Without a stream the formatter writes to standard output. A stream
    passed in is owned and closed by ``close``, unless it is one of the
    process's standard streams.
    """

    accepted_shapes = frozenset({Shape.NO_ARG, Shape.SINK_ONLY})

    def __init__(self, out: Optional[TextIO] = None):
        self._owns_out = out is not None and not _is_std_stream(out)
        self.out = out if out is not None else sys.stdout

    def close(self) -> None:
        if self._owns_out:
            self.out.close()
        else:
            self.out.flush()


class CollectingFormatter(StreamFormatter):
    """Collects every feature and writes one document when the run is done."""

    accepted_shapes = frozenset({Shape.SINK_ONLY})

    def __init__(self, out: Optional[TextIO] = None):
        super().__init__(out)
        self.features: list[FeatureResult] = []

    def feature(self, feature: FeatureResult) -> None:
        self.features.append(feature)

    def done(self) -> None:
        self.out.write(self.format_all(self.features))
        self.out.flush()

    @abstractmethod
    def format_all(self, features: list[FeatureResult]) -> str:
        """Format all features as a single document."""


def _is_std_stream(stream: TextIO) -> bool:
    return any(
        stream is std
        for std in (sys.stdout, sys.stderr, sys.__stdout__, sys.__stderr__)
    )
