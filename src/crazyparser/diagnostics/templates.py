"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Grammar construction faults
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_repetition(count: object) -> Diagnostic:
        """Fixed repetition requested with a count below one.

        Args:
            count: The rejected repetition count

        Returns:
            Diagnostic for INVALID_REPETITION
        """
        msg = f"Number of repetitions must be an integer >= 1, got {count!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_REPETITION,
            message=msg,
            hint="Use many() or some() for open-ended repetition",
        )

    @staticmethod
    def invalid_char_literal(literal: str) -> Diagnostic:
        """char() given something other than a single code point.

        Args:
            literal: The rejected literal

        Returns:
            Diagnostic for INVALID_CHAR_LITERAL
        """
        msg = f"char() expects exactly one code point, got {literal!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CHAR_LITERAL,
            message=msg,
            hint="Use string() to match a multi-character literal",
        )

    @staticmethod
    def invalid_template(reason: str) -> Diagnostic:
        """Malformed template format string.

        Args:
            reason: What is wrong with the template

        Returns:
            Diagnostic for INVALID_TEMPLATE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_TEMPLATE,
            message=f"Invalid template: {reason}",
            hint="Mark each parser slot with '{}' and escape literal braces as '{{' and '}}'",
        )

    @staticmethod
    def invalid_failure_value(value: object) -> Diagnostic:
        """A non-ParseFailure object was supplied as a failure value.

        Args:
            value: The rejected object

        Returns:
            Diagnostic for INVALID_FAILURE_VALUE
        """
        msg = f"Failure values must be ParseFailure instances, got {type(value).__name__}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_FAILURE_VALUE,
            message=msg,
            hint="Subclass ParseFailure to define grammar-specific failures",
        )

    # ------------------------------------------------------------------
    # Parse-time failures
    # ------------------------------------------------------------------

    @staticmethod
    def parse_failed(span: SourceSpan | None = None) -> Diagnostic:
        """Generic parse failure carrying no further detail.

        Args:
            span: Location where the parse stopped

        Returns:
            Diagnostic for PARSE_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.PARSE_FAILED,
            message="Parsing failed",
            span=span,
        )

    @staticmethod
    def expected(description: str, span: SourceSpan | None = None) -> Diagnostic:
        """Input did not match a labelled construct.

        Args:
            description: Human-readable name of the expected construct
            span: Where the construct was expected

        Returns:
            Diagnostic for EXPECTED
        """
        return Diagnostic(
            code=DiagnosticCode.EXPECTED,
            message=f"Expected {description}",
            span=span,
            expected=(description,),
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, span: SourceSpan | None = None) -> Diagnostic:
        """Too many nested lazy() rules.

        Args:
            max_depth: The configured nesting limit
            span: Where the limit was hit

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Maximum nesting depth ({max_depth}) exceeded",
            span=span,
            hint="Pass a larger max_depth to run() or raise sys.setrecursionlimit()",
        )

    # ------------------------------------------------------------------
    # Value validation failures
    # ------------------------------------------------------------------

    @staticmethod
    def type_mismatch(expected_type: str, value: object) -> Diagnostic:
        """Value is not of the expected type.

        Args:
            expected_type: Name of the expected type
            value: The offending value

        Returns:
            Diagnostic for VALIDATION_TYPE_MISMATCH
        """
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_TYPE_MISMATCH,
            message=f"Expected {expected_type}, got {value!r}",
            expected=(expected_type,),
        )

    @staticmethod
    def invalid_item(index: int, reason: str) -> Diagnostic:
        """A sequence element failed validation.

        Args:
            index: Position of the element
            reason: Message of the nested failure

        Returns:
            Diagnostic for VALIDATION_INVALID_ITEM
        """
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_INVALID_ITEM,
            message=f"Invalid index {index}: {reason}",
        )

    @staticmethod
    def missing_key(key: str) -> Diagnostic:
        """A required mapping key is absent.

        Args:
            key: The missing key

        Returns:
            Diagnostic for VALIDATION_MISSING_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_MISSING_KEY,
            message=f"Missing key: {key}",
        )

    @staticmethod
    def invalid_key(key: str, reason: str) -> Diagnostic:
        """A mapping value failed validation.

        Args:
            key: The key whose value failed
            reason: Message of the nested failure

        Returns:
            Diagnostic for VALIDATION_INVALID_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_INVALID_KEY,
            message=f"Invalid key {key}: {reason}",
        )

    @staticmethod
    def length_mismatch(expected_length: int, value: object) -> Diagnostic:
        """A fixed-length sequence has the wrong length.

        Args:
            expected_length: Required number of elements
            value: The offending value

        Returns:
            Diagnostic for VALIDATION_LENGTH_MISMATCH
        """
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_LENGTH_MISMATCH,
            message=f"Expected tuple of length {expected_length}, got {value!r}",
        )

    @staticmethod
    def no_alternative(reasons: list[str]) -> Diagnostic:
        """Every alternative validator rejected the value.

        Args:
            reasons: Messages of the individual failures, in order

        Returns:
            Diagnostic for VALIDATION_NO_ALTERNATIVE
        """
        joined = "; ".join(reasons)
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_NO_ALTERNATIVE,
            message=f"No alternatives matched, got errors: {joined}",
        )

    @staticmethod
    def step_failed(step: int, reason: str) -> Diagnostic:
        """A validator in an all_of() chain rejected the value.

        Args:
            step: Index of the failing validator
            reason: Message of the nested failure

        Returns:
            Diagnostic for VALIDATION_STEP_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_STEP_FAILED,
            message=f"Failed at step {step}: {reason}",
        )

    @staticmethod
    def not_equal(expected_value: object, value: object) -> Diagnostic:
        """Value differs from the required literal.

        Args:
            expected_value: The literal the value had to equal
            value: The offending value

        Returns:
            Diagnostic for VALIDATION_NOT_EQUAL
        """
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_NOT_EQUAL,
            message=f"Expected {expected_value!r}, got {value!r}",
            expected=(repr(expected_value),),
        )

    @staticmethod
    def predicate_failed(value: object) -> Diagnostic:
        """Value passed type checks but not the refinement predicate.

        Args:
            value: The offending value

        Returns:
            Diagnostic for VALIDATION_PREDICATE_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_PREDICATE_FAILED,
            message=f"Value did not satisfy predicate, got {value!r}",
        )
