"""Validation functions for data models."""

from typing import Any, List, Optional
from pydantic import BaseModel


def to_str(value: Any) -> str:
    """Convert value to string and strip whitespace."""
    return str(value).strip()


def to_list(value: Any) -> List[Any]:
    """Wrap single values in a list; tuples become lists."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def empty_to_none(value: Any) -> Optional[Any]:
    """Convert empty strings and empty lists to None."""
    if value == "" or value == []:
        return None
    return value


def normalize(value: Any) -> Optional[Any]:
    """Collapse runs of whitespace in strings, or in each string of a list."""
    if isinstance(value, list):
        return [normalize(v) for v in value]
    if isinstance(value, str):
        return " ".join(value.split())
    return value


def remove_empty_models(value: List[Any]) -> List[Any]:
    """Drop empty models, blank strings and None from a list."""
    kept = []
    for v in value:
        if isinstance(v, BaseModel):
            if v != type(v)():
                kept.append(v)
        elif isinstance(v, str):
            if v.strip():
                kept.append(v)
        elif v is not None:
            kept.append(v)
    return kept
