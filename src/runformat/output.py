"""Output targets for formatters: standard output, files and path handles."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from .errors import ConfigurationError

STDOUT_CONFLICT = (
    "Only one formatter can use STDOUT. If you use more than one formatter "
    "you must specify output path with FORMAT:PATH"
)

# Characters that are rejected by at least one common filesystem
_UNPORTABLE = re.compile(r'[<>:"|?*\x00-\x1f]')

# Kinds of OutputTarget
STDOUT = "stdout"
FILE = "file"
PATH = "path"


@dataclass
class StdoutGuard:
    """Tracks whether a factory has already handed out standard output."""

    bound_count: int = 0
    bound_spec: Optional[str] = None

    def bind(self, spec: str) -> bool:
        """Claim standard output for ``spec``. Returns False if already taken."""
        if self.bound_count:
            return False
        self.bound_count = 1
        self.bound_spec = spec
        return True

    def release(self) -> None:
        self.bound_count = 0
        self.bound_spec = None


@dataclass(frozen=True)
class OutputTarget:
    """Where a formatter writes.

    Attributes:
        kind: One of "stdout", "file" or "path"
        stream: Writable text stream for "stdout" and "file" targets
        path: Filesystem path for "file" and "path" targets
    """

    kind: str
    stream: Optional[TextIO] = None
    path: Optional[Path] = None

    @property
    def owns_stream(self) -> bool:
        return self.kind == FILE

    def describe(self) -> str:
        if self.kind == STDOUT:
            return "<stdout>"
        return str(self.path)


def open_sink(
    destination: Optional[str], guard: StdoutGuard, spec: str = ""
) -> OutputTarget:
    """Return a writable target for ``destination``.

    With no destination the process's standard output is used, at most once
    per guard. Otherwise missing parent directories are created and a new
    UTF-8 file is opened, truncating any existing one.
    """
    if destination is None:
        if not guard.bind(spec):
            raise ConfigurationError(STDOUT_CONFLICT)
        return OutputTarget(kind=STDOUT, stream=sys.stdout)

    path = Path(destination)
    _ensure_parent_dirs(path, destination)
    try:
        stream = open(path, "w", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Could not open formatter output file {destination}"
        ) from e
    return OutputTarget(kind=FILE, stream=stream, path=path)


def path_handle(destination: str) -> OutputTarget:
    """Return a path reference without touching the filesystem."""
    return OutputTarget(kind=PATH, path=Path(destination))


def _ensure_parent_dirs(path: Path, destination: str) -> None:
    error = f"Could not create dirs for formatter output file {destination}"
    parent = path.parent

    try:
        missing: list[str] = []
        current = parent
        while not current.exists() and current != current.parent:
            missing.append(current.name)
            current = current.parent

        if not missing:
            return
        if any(_UNPORTABLE.search(name) for name in missing):
            raise ConfigurationError(error)
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(error) from e
