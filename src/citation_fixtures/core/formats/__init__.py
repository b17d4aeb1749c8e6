"""Output formats for parsed references."""

from enum import Enum
from typing import Any, Mapping, Sequence

from ..models import Reference
from .bibtex import Bibliography, BibtexEntry, to_bibtex
from .csl import csl_item, csl_name, to_csl


class ParseFormat(str, Enum):
    """Output formats a parser can be asked for."""

    JSON = "json"
    CSL = "csl"
    BIBTEX = "bibtex"

    @classmethod
    def coerce(cls, value: "ParseFormat | str") -> "ParseFormat":
        try:
            return cls(str(getattr(value, "value", value)).lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unsupported format: {value!r} (expected one of {choices})")


def render(references: Sequence[Reference | Mapping[str, Any]], format: ParseFormat | str):
    """Render references in ``format``.

    Returns a list of dicts for ``json`` and ``csl``, a `Bibliography` for
    ``bibtex``.
    """
    format = ParseFormat.coerce(format)
    if format is ParseFormat.CSL:
        return to_csl(references)
    if format is ParseFormat.BIBTEX:
        return to_bibtex(references)
    return [
        r.model_dump(exclude_none=True, exclude_defaults=True) if isinstance(r, Reference) else dict(r)
        for r in references
    ]


__all__ = [
    "ParseFormat",
    "Bibliography",
    "BibtexEntry",
    "render",
    "to_bibtex",
    "to_csl",
    "csl_item",
    "csl_name",
]
