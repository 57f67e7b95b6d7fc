"""JSON report formatter."""

from __future__ import annotations

import json

from ..results import FeatureResult
from .base import CollectingFormatter


class JSONFormatter(CollectingFormatter):
    """Writes all features as a single JSON array."""

    def format_all(self, features: list[FeatureResult]) -> str:
        data = [f.to_dict() for f in features]
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
