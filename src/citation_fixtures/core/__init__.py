"""Core functionality for citation fixture generation."""

from . import models
from . import formats
from . import parsers

__all__ = ["models", "formats", "parsers"]
