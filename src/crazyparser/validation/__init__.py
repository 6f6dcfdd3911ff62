"""Structural validation of decoded values.

Python 3.13+. Zero external dependencies.
"""

from .validators import (
    Validator,
    all_of,
    array,
    boolean,
    is_invalid,
    literal,
    null,
    number,
    one_of,
    record,
    string,
    tuple_of,
    where,
)

__all__ = [
    "Validator",
    "all_of",
    "array",
    "boolean",
    "is_invalid",
    "literal",
    "null",
    "number",
    "one_of",
    "record",
    "string",
    "tuple_of",
    "where",
]
