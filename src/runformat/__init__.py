"""runformat - build test-run report formatters from FORMAT:PATH specs."""

from .errors import ConfigurationError
from .factory import FormatterFactory

__version__ = "0.1.0"
__all__ = ["ConfigurationError", "FormatterFactory"]
