"""Hypothesis strategies for JSON values and documents.

Values are generated as Python objects and serialized with the stdlib
encoder, so every document is valid JSON by construction. Serialization
options (indent, separators, ASCII escaping) are drawn too, which covers
whitespace handling and \\uXXXX escapes including surrogate pairs.
"""

from __future__ import annotations

import json
from typing import Any

from hypothesis import event
from hypothesis import strategies as st
from hypothesis.strategies import composite

JSON_WHITESPACE: str = " \t\r\n"

# Lone surrogates cannot be encoded as UTF-8, so they are excluded.
json_strings = st.text(
    alphabet=st.characters(exclude_categories=("Cs",)),
    max_size=20,
)

json_leaves = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(10**20), max_value=10**20),
    st.floats(allow_nan=False, allow_infinity=False),
    json_strings,
)


def _containers(children: st.SearchStrategy[Any]) -> st.SearchStrategy[Any]:
    return st.lists(children, max_size=5) | st.dictionaries(json_strings, children, max_size=5)


json_values = st.recursive(json_leaves, _containers, max_leaves=20)


@composite
def json_documents(draw: st.DrawFn) -> str:
    """Generate a JSON document with varied formatting."""
    value = draw(json_values)
    indent = draw(st.sampled_from([None, 0, 1, 4, "\t"]))
    ensure_ascii = draw(st.booleans())
    compact = draw(st.booleans())
    separators = (",", ":") if compact else None

    text = json.dumps(value, indent=indent, ensure_ascii=ensure_ascii, separators=separators)

    padding = st.text(alphabet=JSON_WHITESPACE, max_size=3)
    event(f"indent={indent!r}")
    event(f"ensure_ascii={ensure_ascii}")
    return draw(padding) + text + draw(padding)
