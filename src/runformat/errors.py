"""Errors raised while configuring formatters."""

from __future__ import annotations


class ConfigurationError(Exception):
    """A formatter spec could not be turned into a working formatter.

    Raised at run setup; callers are expected to abort startup and show
    the message to the user.
    """
