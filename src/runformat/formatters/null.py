"""Formatter that discards everything."""

from __future__ import annotations

from ..results import FeatureResult
from .base import Formatter, Shape


class NullFormatter(Formatter):
    accepted_shapes = frozenset({Shape.NO_ARG})

    def feature(self, feature: FeatureResult) -> None:
        pass
