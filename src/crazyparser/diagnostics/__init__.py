"""Diagnostic system for crazyparser.

Provides structured error diagnostics with codes, spans, hints and
expected-token lists. Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    CrazyParserError,
    GrammarError,
    InvalidValueError,
    JSONSyntaxError,
    MarkupSyntaxError,
    ParseFailedError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CrazyParserError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "GrammarError",
    "InvalidValueError",
    "JSONSyntaxError",
    "MarkupSyntaxError",
    "OutputFormat",
    "ParseFailedError",
    "SourceSpan",
]
