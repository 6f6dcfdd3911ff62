"""Hypothesis strategies for crazyparser property-based testing.

Strategies are organized by domain:

- json_text: JSON values and their textual serializations
- markup: Markup trees built from the node classes

Usage:
    from tests.strategies import json_documents, json_values
    from tests.strategies.markup import markup_trees
"""

from .json_text import (
    JSON_WHITESPACE,
    json_documents,
    json_leaves,
    json_strings,
    json_values,
)
from .markup import markup_text, markup_trees, tag_names

__all__ = [
    "JSON_WHITESPACE",
    "json_documents",
    "json_leaves",
    "json_strings",
    "json_values",
    "markup_text",
    "markup_trees",
    "tag_names",
]
