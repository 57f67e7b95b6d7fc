"""Formatter lookup: built-in short names, plugins and dotted type names."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Optional

from .errors import ConfigurationError
from .formatters import (
    HTMLFormatter,
    JSONFormatter,
    JUnitFormatter,
    NullFormatter,
    PrettyFormatter,
    ProgressFormatter,
    Shape,
    UsageFormatter,
)

# Entry point group for installed formatter plugins
ENTRY_POINT_GROUP = "runformat.formatters"


@dataclass(frozen=True)
class FormatterDescriptor:
    """A formatter type and the constructor shapes it accepts."""

    type_token: str
    implementation: type
    accepted_shapes: frozenset[Shape]

    @classmethod
    def of(cls, type_token: str, implementation: type) -> FormatterDescriptor:
        shapes = getattr(implementation, "accepted_shapes", None)
        if not isinstance(implementation, type) or shapes is None:
            raise ConfigurationError(f"{type_token} is not a formatter")
        return cls(type_token, implementation, frozenset(shapes))

    def construct(self, shape: Shape, sink=None, path=None):
        """Call the implementation with the arguments ``shape`` calls for."""
        if shape is Shape.NO_ARG:
            return self.implementation()
        elif shape is Shape.SINK_ONLY:
            return self.implementation(sink)
        elif shape is Shape.SINK_AND_PATH:
            return self.implementation(sink, path)
        elif shape is Shape.PATH_ONLY:
            return self.implementation(path)
        raise ValueError(f"Unsupported constructor shape: {shape}")


# ---------------------------------------------------------------------------
# Built-in formatters
# ---------------------------------------------------------------------------

_BUILTINS: dict[str, FormatterDescriptor] = {
    name: FormatterDescriptor.of(name, implementation)
    for name, implementation in (
        ("null", NullFormatter),
        ("junit", JUnitFormatter),
        ("html", HTMLFormatter),
        ("pretty", PrettyFormatter),
        ("progress", ProgressFormatter),
        ("usage", UsageFormatter),
        ("json", JSONFormatter),
    )
}


def lookup_builtin(type_token: str) -> Optional[FormatterDescriptor]:
    """Look up a built-in formatter by its exact short name."""
    return _BUILTINS.get(type_token)


def list_builtins() -> list[FormatterDescriptor]:
    """Return all built-in formatters."""
    return list(_BUILTINS.values())


# ---------------------------------------------------------------------------
# Custom formatters
# ---------------------------------------------------------------------------


def resolve_custom(type_token: str) -> Optional[FormatterDescriptor]:
    """Resolve a formatter that is not built in.

    Installed plugins registered under the ``runformat.formatters`` entry
    point group are consulted first, then ``type_token`` is imported as a
    dotted ``module.ClassName`` path. Returns None if nothing matches.
    """
    implementation = _load_plugin(type_token)
    if implementation is None:
        implementation = _import_dotted(type_token)
    if implementation is None:
        return None
    return FormatterDescriptor.of(type_token, implementation)


def _load_plugin(type_token: str):
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        if ep.name == type_token:
            try:
                return ep.load()
            except Exception as e:
                raise ConfigurationError(
                    f"Could not load formatter {type_token}: {e}"
                ) from e
    return None


def _import_dotted(type_token: str):
    parts = type_token.split(".")
    if len(parts) < 2 or not all(parts):
        return None

    # Longest importable module prefix wins, the rest are attributes
    for i in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:i])
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name and (module_name == e.name or module_name.startswith(e.name + ".")):
                continue
            raise ConfigurationError(
                f"Could not load formatter {type_token}: {e}"
            ) from e
        except Exception as e:
            raise ConfigurationError(
                f"Could not load formatter {type_token}: {e}"
            ) from e

        obj = module
        try:
            for attr in parts[i:]:
                obj = getattr(obj, attr)
        except AttributeError as e:
            raise ConfigurationError(
                f"Could not load formatter {type_token}: {e}"
            ) from e
        return obj

    return None
