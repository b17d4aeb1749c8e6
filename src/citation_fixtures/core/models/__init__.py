"""Core data models for parsed references."""

from .person import Person
from .organization import Organization
from .reference import Reference
from .validators import (
    to_str,
    to_list,
    empty_to_none,
    normalize,
    remove_empty_models,
)

__all__ = [
    "Person",
    "Organization",
    "Reference",
    "to_str",
    "to_list",
    "empty_to_none",
    "normalize",
    "remove_empty_models",
]
