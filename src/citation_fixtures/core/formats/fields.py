"""Shared helpers that turn parsed entries into CSL-keyed field maps."""

from typing import Any, Dict, List, Mapping, Optional

from ..models import Reference

FieldMap = Dict[str, List[str]]

_TERMINAL_PUNCT = ".,;"


def to_field_map(entry: Reference | Mapping[str, Any]) -> FieldMap:
    """Return a copy of ``entry`` as ``{csl-key: [str, ...]}``.

    Accepts a `Reference` or a plain mapping such as AnyStyle's JSON output,
    where values may be scalars, lists of strings or lists of name objects.
    """
    if isinstance(entry, Reference):
        return entry.to_field_map()

    fields: FieldMap = {}
    for key, value in entry.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        rendered = [_stringify(v) for v in values if v is not None]
        rendered = [v for v in rendered if v.strip()]
        if rendered:
            fields[str(key)] = rendered
    return fields


def _stringify(value: Any) -> str:
    if isinstance(value, Mapping):
        if "literal" in value:
            return str(value["literal"])
        family = str(value.get("family") or "")
        given = str(value.get("given") or "")
        if family and given:
            return f"{family}, {given}"
        return family or given
    if isinstance(value, bool):
        return "true" if value else ""
    return str(value)


def first_value(fields: FieldMap, key: str) -> Optional[str]:
    values = fields.get(key)
    if not values:
        return None
    return values[0]


def pop_first_value(fields: FieldMap, key: str) -> Optional[str]:
    values = fields.pop(key, None)
    if not values:
        return None
    return values[0]


def rename_field(fields: FieldMap, old: str, new: str) -> None:
    """Move ``old`` to ``new`` unless ``new`` is already set."""
    if old in fields:
        value = fields.pop(old)
        fields.setdefault(new, value)


def collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


def strip_terminal_punct(value: str) -> str:
    return value.strip().rstrip(_TERMINAL_PUNCT)


def render_date(parts: List[str], circa: bool = False) -> Optional[str]:
    """Join date parts: one part as-is, two years as a range, else ``Y-M-D``."""
    parts = [p.strip() for p in parts if p and p.strip()]
    if not parts:
        return None
    if len(parts) == 1:
        date = parts[0]
    elif len(parts) == 2 and all(len(p) == 4 for p in parts):
        date = f"{parts[0]}/{parts[1]}"
    elif len(parts) >= 3:
        date = "-".join(parts[:3])
    else:
        date = "-".join(parts)
    if circa:
        date += "~"
    return date
