"""Render Diagnostic values as text.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Parse messages quote source text; keep it on one printable line.
_CONTROL_ESCAPES: dict[int, str] = {
    code_point: f"\\x{code_point:02x}" for code_point in (*range(0x20), 0x7F)
}
_CONTROL_ESCAPES.update({ord("\n"): "\\n", ord("\r"): "\\r", ord("\t"): "\\t"})


def _visible(text: str) -> str:
    return text.translate(_CONTROL_ESCAPES)


class OutputFormat(StrEnum):
    """How a DiagnosticFormatter lays out its output."""

    RUST = "rust"
    SIMPLE = "simple"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turn diagnostics into rustc-style blocks, single lines or JSON.

    RUST and SIMPLE escape control characters found in messages, hints and
    expected items. JSON leaves that to json.dumps.

    Example:
        >>> diagnostic = ErrorTemplate.expected("digit")
        >>> print(DiagnosticFormatter().format(diagnostic))
        error[EXPECTED]: Expected digit
          = expected: digit
        >>> print(DiagnosticFormatter(OutputFormat.SIMPLE).format(diagnostic))
        EXPECTED: Expected digit
    """

    output_format: OutputFormat = OutputFormat.RUST

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured format."""
        match self.output_format:
            case OutputFormat.RUST:
                return self._rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._simple(diagnostic)
            case OutputFormat.JSON:
                return self._json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics, one blank line between each."""
        return "\n\n".join(map(self.format, diagnostics))

    @staticmethod
    def _rust(diagnostic: Diagnostic) -> str:
        label = "warning" if diagnostic.severity == "warning" else "error"
        lines = [f"{label}[{diagnostic.code.name}]: {_visible(diagnostic.message)}"]
        if span := diagnostic.span:
            lines.append(f"  --> line {span.line}, column {span.column}")
        if diagnostic.expected:
            lines.append("  = expected: " + ", ".join(map(_visible, diagnostic.expected)))
        if diagnostic.hint:
            lines.append(f"  = help: {_visible(diagnostic.hint)}")
        return "\n".join(lines)

    @staticmethod
    def _simple(diagnostic: Diagnostic) -> str:
        text = f"{diagnostic.code.name}: {_visible(diagnostic.message)}"
        if span := diagnostic.span:
            text += f" (line {span.line}, column {span.column})"
        return text

    @staticmethod
    def _json(diagnostic: Diagnostic) -> str:
        record: dict[str, object] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }
        if span := diagnostic.span:
            record.update(line=span.line, column=span.column, start=span.start, end=span.end)
        if diagnostic.expected:
            record["expected"] = list(diagnostic.expected)
        if diagnostic.hint:
            record["hint"] = diagnostic.hint
        return json.dumps(record, ensure_ascii=False)
