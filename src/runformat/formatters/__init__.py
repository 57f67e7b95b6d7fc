"""Built-in report formatters.

Supported formats:
  - null: discards everything
  - junit: JUnit XML document
  - html: HTML report directory
  - pretty: human-readable, coloured output
  - progress: one character per step
  - usage: step usage table
  - json: single JSON document
"""

from .base import CollectingFormatter, Formatter, Shape, StreamFormatter
from .html_fmt import HTMLFormatter
from .json_fmt import JSONFormatter
from .junit import JUnitFormatter
from .null import NullFormatter
from .pretty import PrettyFormatter
from .progress import ProgressFormatter
from .usage import UsageFormatter

__all__ = [
    "Formatter",
    "Shape",
    "StreamFormatter",
    "CollectingFormatter",
    "NullFormatter",
    "JUnitFormatter",
    "HTMLFormatter",
    "PrettyFormatter",
    "ProgressFormatter",
    "UsageFormatter",
    "JSONFormatter",
]
