"""JSON grammar built purely from the public combinator API.

Decodes RFC 8259 JSON into the same Python values as ``json.loads``:
objects become dicts (last duplicate key wins), arrays lists, integers
without fraction or exponent stay ``int``, other numbers become ``float``.

About a thousand times slower than the stdlib decoder. It exists to
exercise the engine on a real recursive grammar, not to replace ``json``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from typing import Any

from crazyparser.diagnostics import ErrorTemplate, JSONSyntaxError
from crazyparser.syntax import (
    NOTHING,
    ParseFailure,
    Parser,
    any_char,
    asum,
    char,
    digit,
    eof,
    hexdigit,
    lazy,
    many,
    one,
    sequence,
    some,
    span,
    string,
)

__all__ = [
    "array",
    "document",
    "json_string",
    "loads",
    "number",
    "object_",
    "value",
]

logger = logging.getLogger(__name__)

_WHITESPACE = frozenset(" \t\r\n")

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# UTF-16 surrogate ranges used by \uXXXX escapes outside the BMP.
_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)


def _decode_chunks(chunks: list[str | int]) -> str:
    """Join string characters, pairing \\u surrogate escapes into code points.

    Escaped code units arrive as ints. A high surrogate followed by a low
    surrogate becomes one code point; a lone surrogate is kept as is,
    like the stdlib decoder does.
    """
    out: list[str] = []
    i = 0
    while i < len(chunks):
        chunk = chunks[i]
        following = chunks[i + 1] if i + 1 < len(chunks) else None
        if isinstance(chunk, str):
            out.append(chunk)
        elif (
            chunk in _HIGH_SURROGATES
            and isinstance(following, int)
            and following in _LOW_SURROGATES
        ):
            out.append(chr(0x10000 + ((chunk - 0xD800) << 10) + (following - 0xDC00)))
            i += 1
        else:
            out.append(chr(chunk))
        i += 1
    return "".join(out)


def _to_number(parts: list[Any]) -> int | float:
    sign, integral, fraction, exponent = parts
    if fraction is NOTHING and exponent is NOTHING:
        return int(sign + integral)
    text = sign + integral
    if fraction is not NOTHING:
        text += "." + fraction
    if exponent is not NOTHING:
        text += "".join(exponent)
    return float(text)


def _or_empty_list(items: list[Any] | object) -> list[Any]:
    return [] if items is NOTHING else items  # type: ignore[return-value]


def _or_empty_dict(items: dict[str, Any] | object) -> dict[str, Any]:
    return {} if items is NOTHING else items  # type: ignore[return-value]


ws = span(_WHITESPACE.__contains__)

# Strings
_hex4 = (hexdigit * 4).map(lambda ds: int("".join(ds), 16))
_escape = char("\\") >> asum(
    one.where(_SIMPLE_ESCAPES.__contains__).map(_SIMPLE_ESCAPES.__getitem__),
    char("u") >> _hex4,
)
_raw_char = one.where(lambda c: c != '"' and c != "\\" and c >= " ")

json_string: Parser[str] = (
    char('"') >> many(_escape.try_() | _raw_char) << char('"')
).map(_decode_chunks)

# Numbers
_digits = some(digit).map("".join)
_integral = _digits.where(lambda ds: ds == "0" or ds[0] != "0")
_fraction = (char(".") >> _digits).try_().optional()
_exponent = sequence(any_char("eE"), any_char("+-").otherwise(""), _digits).optional()

number: Parser[int | float] = sequence(
    char("-").otherwise(""), _integral, _fraction, _exponent
).map(_to_number)

# Literals
_true = string("true").const(True)
_false = string("false").const(False)
_null = string("null").const(None)

# Values. array and object_ refer back to value, hence lazy().
value: Parser[Any] = (
    ws
    >> asum(
        json_string,
        number,
        _true,
        _false,
        _null,
        lazy(lambda: array),
        lazy(lambda: object_),
    )
    << ws
)

_elements = (value & many((char(",") >> value).try_())).map(lambda p: [p[0], *p[1]])

# A partly parsed member list is rolled back and then rejected by the closing
# bracket. ws re-reads the blank inside "[ ]".
array: Parser[list[Any]] = (
    char("[") >> _elements.try_().optional().map(_or_empty_list) << ws << char("]")
)

_member = (ws >> json_string << ws << char(":")) & value
_members = (_member & many((char(",") >> _member).try_())).map(
    lambda p: dict([p[0], *p[1]])
)

object_: Parser[dict[str, Any]] = (
    char("{") >> _members.try_().optional().map(_or_empty_dict) << ws << char("}")
)

document: Parser[Any] = value << eof.expecting("end of input")


def loads(
    source: str | bytes,
    *,
    max_source_size: int | None = None,
    max_depth: int | None = None,
) -> Any:
    """Decode a JSON document.

    Args:
        source: JSON text; bytes are decoded as UTF-8
        max_source_size: Maximum source length (default: 10 MiB, 0 disables)
        max_depth: Maximum array/object nesting (default: 100)

    Returns:
        The decoded value

    Raises:
        JSONSyntaxError: If the document is malformed (also a ValueError)
        ValueError: If source exceeds max_source_size

    Example:
        >>> loads('{"a": [1, 2.5, null]}')
        {'a': [1, 2.5, None]}
    """
    result, state = document.run(
        source, max_source_size=max_source_size, max_depth=max_depth
    )
    if isinstance(result, ParseFailure):
        logger.debug("JSON decode failed at offset %d", state.index)
        diagnostic = result.diagnostic
        if diagnostic is None:
            diagnostic = ErrorTemplate.parse_failed(state.span(state.index))
        raise JSONSyntaxError(diagnostic, failure=result, state=state)
    return result
