"""Parsing engine: cursor, Parser algebra, primitives and combinators.

Separate from the bundled grammars so user grammars depend only on this
package.

Python 3.13+.
"""

from .combinators import asum, lazy, many, optional, sequence, some, template, with_range
from .cursor import FAIL, NOTHING, Absent, NestingDepthExceeded, ParseFailure, State, is_failure
from .parser import Parser
from .primitives import (
    alpha,
    any_char,
    any_string,
    char,
    cr,
    digit,
    empty,
    eof,
    hexdigit,
    index,
    lf,
    lower,
    one,
    pure,
    space,
    span,
    string,
    tab,
    upper,
)

__all__ = [
    "FAIL",
    "NOTHING",
    "Absent",
    "NestingDepthExceeded",
    "ParseFailure",
    "Parser",
    "State",
    "alpha",
    "any_char",
    "any_string",
    "asum",
    "char",
    "cr",
    "digit",
    "empty",
    "eof",
    "hexdigit",
    "index",
    "is_failure",
    "lazy",
    "lf",
    "lower",
    "many",
    "one",
    "optional",
    "pure",
    "sequence",
    "some",
    "space",
    "span",
    "string",
    "tab",
    "template",
    "upper",
    "with_range",
]
