"""
Base class for reference parsers.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..formats import ParseFormat


class ReferenceParser(ABC):
    """Abstract base class for anything that turns reference strings into entries."""

    name = "parser"

    @abstractmethod
    def parse(self, references: Sequence[str], format: ParseFormat | str = ParseFormat.JSON) -> Any:
        """Parse reference strings.

        Args:
            references: One reference per item, in the order they should be returned
            format: ``csl`` for per-entry CSL items, ``bibtex`` for an object whose
                ``str()`` is the BibTeX text, ``json`` for the parser's native entries

        Returns:
            A sequence of entries (``csl``/``json``) or a bibliography object (``bibtex``)
        """
        pass
