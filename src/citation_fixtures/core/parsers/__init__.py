"""
Reference parsers.

Contains the parser interface, the external library adapter and the
built-in heuristic parser.
"""

from .base import ReferenceParser
from .module import ModuleParser, ParserLoadError, load_parser_module
from .heuristic import HeuristicParser
from .factory import ParserFactory

__all__ = [
    "ReferenceParser",
    "ModuleParser",
    "ParserLoadError",
    "load_parser_module",
    "HeuristicParser",
    "ParserFactory",
]
