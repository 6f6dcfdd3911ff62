"""crazyparser - composable parser combinators.

Build recursive-descent parsers from a small algebra of primitives and
combinators. Parsers carry typed success values and typed failure values,
give explicit control over backtracking, and capture source positions for
diagnostics.

Public API:
    Parser - The combinator algebra and entry points (run, eval, ...)
    ParseFailure - Failure values; subclass for grammar-specific failures
    FAIL - The shared generic failure
    NOTHING - Result of optional() when nothing matched
    one, char, string, span, eof, index, pure, empty - Primitives
    asum, sequence, many, some, optional, with_range, lazy, template - Combinators

Exceptions:
    CrazyParserError - Base exception class
    GrammarError - Malformed grammar detected at construction time
    ParseFailedError - Parse failure raised by the async entry points

Submodules:
    crazyparser.syntax - Engine internals (State, character classes)
    crazyparser.grammars.json_value - JSON grammar (loads)
    crazyparser.grammars.markup - Markup grammar (parse_markup)
    crazyparser.validation - Structural validators for decoded values
    crazyparser.diagnostics - Diagnostic codes, templates and formatter
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import CrazyParserError, GrammarError, ParseFailedError
from .syntax import (
    FAIL,
    NOTHING,
    ParseFailure,
    Parser,
    State,
    alpha,
    any_char,
    any_string,
    asum,
    char,
    digit,
    empty,
    eof,
    index,
    is_failure,
    lazy,
    many,
    one,
    optional,
    pure,
    sequence,
    some,
    span,
    string,
    template,
    with_range,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("crazyparser")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "FAIL",
    "NOTHING",
    "CrazyParserError",
    "GrammarError",
    "ParseFailedError",
    "ParseFailure",
    "Parser",
    "State",
    "__version__",
    "alpha",
    "any_char",
    "any_string",
    "asum",
    "char",
    "digit",
    "empty",
    "eof",
    "index",
    "is_failure",
    "lazy",
    "many",
    "one",
    "optional",
    "pure",
    "sequence",
    "some",
    "span",
    "string",
    "template",
    "with_range",
]
