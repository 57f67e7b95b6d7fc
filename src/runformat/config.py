"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class Config:
    formatters: list[str] = field(default_factory=lambda: ["progress"])
    verbose: bool = False

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Config:
        """Load config from YAML file, falling back to defaults."""
        if path is None:
            # Search for config in current dir, then home dir
            candidates = [
                Path.cwd() / "runformat.yaml",
                Path.home() / ".config" / "runformat" / "config.yaml",
            ]
            for candidate in candidates:
                if candidate.exists():
                    path = candidate
                    break

        if path is not None and path.exists():
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls._from_dict(data)

        return cls()

    @classmethod
    def _from_dict(cls, data: dict) -> Config:
        cfg = cls()

        if "formatters" in data:
            formatters = data["formatters"]
            if isinstance(formatters, str):
                formatters = [formatters]
            cfg.formatters = [str(f) for f in formatters or []]

        cfg.verbose = bool(data.get("verbose", cfg.verbose))
        return cfg
