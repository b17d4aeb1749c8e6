"""
Factory for creating reference parsers.
"""

from pathlib import Path
from typing import Optional

from .base import ReferenceParser
from .heuristic import HeuristicParser
from .module import DEFAULT_MODULE_NAME, ModuleParser


class ParserFactory:
    """Factory class for creating reference parsers."""

    @staticmethod
    def create(
        parser_type: str,
        lib_dir: Optional[str | Path] = None,
        module_name: str = DEFAULT_MODULE_NAME,
    ) -> ReferenceParser:
        """Create a parser instance based on type.

        Args:
            parser_type: Type of parser ('anystyle', 'heuristic')
            lib_dir: Directory holding the external library (required for 'anystyle')
            module_name: Module to import from ``lib_dir``

        Returns:
            ReferenceParser instance

        Raises:
            ValueError: If parser type is not supported or ``lib_dir`` is missing
            ParserLoadError: If the external library cannot be loaded
        """
        parser_type = parser_type.lower()

        if parser_type == 'heuristic':
            return HeuristicParser()
        elif parser_type == 'anystyle':
            if lib_dir is None:
                raise ValueError("The 'anystyle' parser needs a library directory")
            return ModuleParser.from_directory(lib_dir, module_name=module_name)
        else:
            raise ValueError(f"Unsupported parser type: {parser_type}")

    @staticmethod
    def get_available_parsers():
        """Get list of available parser types.

        Returns:
            List of available parser type names
        """
        return ['anystyle', 'heuristic']
