"""Conversion of parsed references into CSL-JSON items."""

from typing import Any, Dict, List, Mapping, Sequence

from ..models import Reference
from .fields import (
    FieldMap,
    collapse_whitespace,
    first_value,
    render_date,
    strip_terminal_punct,
    to_field_map,
)

NAME_KEYS = ("author", "editor", "translator")

# Plain string variables copied in this order after title and citation-number.
SCALAR_KEYS = (
    "edition",
    "publisher",
    "note",
    "genre",
    "collection-title",
    "collection-number",
    "volume",
    "issue",
    "isbn",
    "issn",
)


def to_csl(references: Sequence[Reference | Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Convert references to CSL-JSON items, one dict per reference."""
    return [csl_item(to_field_map(reference)) for reference in references]


def csl_item(fields: FieldMap) -> Dict[str, Any]:
    """Build one CSL item; key order is fixed so serialized output is stable."""
    item: Dict[str, Any] = {}

    for key in NAME_KEYS:
        names = fields.get(key)
        if names:
            item[key] = [csl_name(name) for name in names]

    title = first_value(fields, "title")
    if title is not None:
        item["title"] = title
    citation_number = first_value(fields, "citation-number")
    if citation_number is not None:
        item["citation-number"] = citation_number

    for key in SCALAR_KEYS:
        value = first_value(fields, key)
        if value is not None:
            item[key] = _sanitize(value)

    container = first_value(fields, "container-title") or first_value(fields, "journal")
    if container is not None:
        item["container-title"] = _sanitize(container)

    entry_type = first_value(fields, "type")
    if entry_type is not None:
        item["type"] = entry_type

    issued = render_date(fields.get("date", []), circa="date-circa" in fields)
    if issued is not None:
        item["issued"] = issued

    pages = first_value(fields, "pages")
    if pages:
        item["page"] = pages

    place = (
        first_value(fields, "publisher-place")
        or first_value(fields, "location")
        or first_value(fields, "address")
    )
    if place is not None:
        item["publisher-place"] = _sanitize(place)

    url = first_value(fields, "url")
    if url is not None:
        item["URL"] = _sanitize(url)
    doi = first_value(fields, "doi")
    if doi is not None:
        item["DOI"] = _sanitize(doi)

    return item


def csl_name(name: str) -> Dict[str, str]:
    """Turn a rendered name into a CSL name object.

    ``'Family, Given'`` and ``'Given Family'`` split into parts; single words
    and statements such as 'edited by ...' stay literal.
    """
    name = name.strip()
    if " by " in name.lower():
        return {"literal": name}
    if "," in name:
        family, given = name.split(",", 1)
        result = {"family": family.strip()}
        if given.strip():
            result["given"] = given.strip()
        return result
    parts = name.split()
    if len(parts) < 2:
        return {"literal": name}
    return {"family": parts[-1], "given": " ".join(parts[:-1])}


def _sanitize(value: str) -> str:
    return collapse_whitespace(strip_terminal_punct(value))
