"""Conversion of parsed references into a BibTeX bibliography."""

import re
from typing import Any, Dict, List, Mapping, NamedTuple, Sequence, Tuple

from ..models import Reference
from .fields import (
    FieldMap,
    collapse_whitespace,
    first_value,
    pop_first_value,
    render_date,
    rename_field,
    strip_terminal_punct,
    to_field_map,
)

NAME_KEYS = ("author", "editor", "translator")

ENTRY_TYPES = {
    "article-journal": "article",
    "chapter": "incollection",
    "manuscript": "unpublished",
    "report": "techreport",
    "paper-conference": "inproceedings",
}

FIELD_ORDER = (
    "author",
    "title",
    "edition",
    "booktitle",
    "journal",
    "series",
    "volume",
    "number",
    "publisher",
    "date",
    "institution",
    "school",
    "pages",
    "address",
    "doi",
    "url",
    "isbn",
    "issn",
    "note",
)

KEY_FALLBACK_PREFIX = "citeotter"


class BibtexEntry(NamedTuple):
    """One ``@type{key, ...}`` record with fields already in output order."""
    entry_type: str
    key: str
    fields: List[Tuple[str, str]]

    def __str__(self) -> str:
        body = ",\n".join(f"  {name} = {{{value}}}" for name, value in self.fields)
        return f"@{self.entry_type}{{{self.key},\n{body}\n}}"


class Bibliography:
    """An ordered BibTeX bibliography; ``str()`` yields the markup text."""

    def __init__(self, entries: Sequence[BibtexEntry] = ()):
        self.entries = list(entries)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    def __str__(self) -> str:
        output = "\n".join(str(entry) for entry in self.entries)
        if not output.endswith("\n"):
            output += "\n"
        return output


def to_bibtex(references: Sequence[Reference | Mapping[str, Any]]) -> Bibliography:
    """Convert references to a `Bibliography`, keeping their order."""
    key_counts: Dict[str, int] = {}
    entries = []
    for index, reference in enumerate(references):
        fields = to_field_map(reference)
        _normalize_fields(fields)
        entry_type = _entry_type(fields)
        key = _citation_key(fields, index, key_counts)
        entries.append(BibtexEntry(entry_type, key, _ordered_fields(fields)))
    return Bibliography(entries)


def _normalize_fields(fields: FieldMap) -> None:
    circa = fields.pop("date-circa", None) is not None
    date = render_date(fields.get("date", []), circa=circa)
    if date is not None:
        fields["date"] = [date]
    else:
        fields.pop("date", None)

    fields.pop("language", None)
    fields.pop("scripts", None)
    rename_field(fields, "container-title", "booktitle")
    rename_field(fields, "collection-title", "series")
    rename_field(fields, "location", "address")
    if "address" in fields:
        fields.pop("publisher-place", None)
    else:
        rename_field(fields, "publisher-place", "address")


def _entry_type(fields: FieldMap) -> str:
    raw_type = pop_first_value(fields, "type") or "misc"
    entry_type = ENTRY_TYPES.get(raw_type, raw_type)
    if entry_type == "article":
        rename_field(fields, "booktitle", "journal")
        rename_field(fields, "issue", "number")
    elif entry_type == "techreport":
        rename_field(fields, "publisher", "institution")
    elif entry_type == "thesis":
        rename_field(fields, "publisher", "school")
    return entry_type


def _citation_key(fields: FieldMap, index: int, counts: Dict[str, int]) -> str:
    """``<family><year><letter>``, or a positional key when either is missing."""
    author = first_value(fields, "author") or ""
    words = author.split(",", 1)[0].split()
    family = re.sub(r"[^a-z0-9]", "", words[0].lower()) if words else ""
    year = re.sub(r"\D", "", first_value(fields, "date") or "")[:4]
    if not family or len(year) < 4:
        return f"{KEY_FALLBACK_PREFIX}{index}"

    base = f"{family}{year}"
    count = counts.get(base, 0)
    counts[base] = count + 1
    return f"{base}{chr(ord('a') + count)}"


def _ordered_fields(fields: FieldMap) -> List[Tuple[str, str]]:
    date = first_value(fields, "date") or ""
    date_is_circa = date.rstrip().endswith("~")

    rendered = []
    for name, values in fields.items():
        if name in NAME_KEYS:
            value = " and ".join(collapse_whitespace(v) for v in values)
        else:
            value = collapse_whitespace(strip_terminal_punct(values[0]))
        rendered.append((name, value))

    def sort_key(item):
        name = item[0]
        if name == "date" and date_is_circa:
            position = 1
        elif name in FIELD_ORDER:
            position = FIELD_ORDER.index(name)
        else:
            position = len(FIELD_ORDER)
        return position, name

    return sorted(rendered, key=sort_key)
