"""Utility functions for citation fixtures."""

from .author_parser import parse_names, has_role_marker

__all__ = [
    'parse_names',
    'has_role_marker',
]
