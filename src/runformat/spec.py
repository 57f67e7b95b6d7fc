"""Parsing of ``FORMAT[:PATH]`` formatter specs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class FormatterSpec:
    """A parsed formatter spec.

    Attributes:
        type_token: Built-in short name or fully-qualified type name
        destination: Output path, or None to write to standard output
    """

    type_token: str
    destination: Optional[str] = None

    def __str__(self) -> str:
        if self.destination is None:
            return self.type_token
        return f"{self.type_token}:{self.destination}"


def parse_spec(raw: str) -> FormatterSpec:
    """Split a raw spec on its first colon.

    Everything after the first colon is the destination, so Windows paths
    such as ``json:C:\\reports\\out.json`` keep their drive letter.
    """
    type_token, sep, destination = raw.partition(":")
    if not sep or not destination:
        return FormatterSpec(type_token=type_token)
    return FormatterSpec(type_token=type_token, destination=destination)


def parse_spec_list(path: Path) -> list[str]:
    """Read formatter specs from a text file, one per line.

    Blank lines and lines starting with ``#`` are ignored. Inline comments
    start at " #", so a ``#`` inside a path is kept.
    """
    specs: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        line = re.split(r"\s#", line, maxsplit=1)[0].strip()
        if line:
            specs.append(line)
    return specs
