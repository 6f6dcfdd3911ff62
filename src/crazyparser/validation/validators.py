"""Structural validators for already-decoded values.

A validator is a total function ``value -> value | InvalidValueError``.
Validators RETURN the error instead of raising it, so they compose
without try/except:

    >>> student = record({"name": string, "age": number, "parents": array(string)})
    >>> student({"name": "Alice", "age": 12, "parents": ["Bob"]})
    {'name': 'Alice', 'age': 12, 'parents': ['Bob']}
    >>> is_invalid(student({"name": "Alice", "age": "12", "parents": []}))
    True

Independent of the parsing engine; pairs naturally with
crazyparser.grammars.json_value.loads().

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Mapping
from typing import Any, TypeIs

from crazyparser.diagnostics import ErrorTemplate, InvalidValueError

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

type Validator[A] = Callable[[object], A | InvalidValueError]


def is_invalid(result: object) -> TypeIs[InvalidValueError]:
    """Check whether a validator rejected its input."""
    return isinstance(result, InvalidValueError)


def string(value: object) -> str | InvalidValueError:
    """Accept str."""
    if not isinstance(value, str):
        return InvalidValueError(ErrorTemplate.type_mismatch("string", value))
    return value


def number(value: object) -> int | float | InvalidValueError:
    """Accept int and float, but not bool."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return InvalidValueError(ErrorTemplate.type_mismatch("number", value))
    return value


def boolean(value: object) -> bool | InvalidValueError:
    """Accept True and False."""
    if not isinstance(value, bool):
        return InvalidValueError(ErrorTemplate.type_mismatch("boolean", value))
    return value


def null(value: object) -> None | InvalidValueError:
    """Accept None."""
    if value is not None:
        return InvalidValueError(ErrorTemplate.type_mismatch("null", value))
    return None


def array[A](inner: Validator[A]) -> Validator[list[A]]:
    """Accept a list or tuple whose every element passes ``inner``.

    The first failing element is reported with its index.
    """

    def validate(value: object) -> Any:
        if not isinstance(value, (list, tuple)):
            return InvalidValueError(ErrorTemplate.type_mismatch("array", value))
        for i, item in enumerate(value):
            result = inner(item)
            if isinstance(result, InvalidValueError):
                return InvalidValueError(ErrorTemplate.invalid_item(i, str(result)))
        return value

    return validate


def record(schema: Mapping[str, Validator[Any]]) -> Validator[dict[str, Any]]:
    """Accept a mapping that has every key of ``schema`` with a valid value.

    Keys not named in ``schema`` are allowed and left unchecked.
    """

    def validate(value: object) -> Any:
        if not isinstance(value, Mapping):
            return InvalidValueError(ErrorTemplate.type_mismatch("object", value))
        for key, validator in schema.items():
            if key not in value:
                return InvalidValueError(ErrorTemplate.missing_key(key))
            result = validator(value[key])
            if isinstance(result, InvalidValueError):
                return InvalidValueError(ErrorTemplate.invalid_key(key, str(result)))
        return value

    return validate


def tuple_of(*inners: Validator[Any]) -> Validator[Any]:
    """Accept a list or tuple of exactly ``len(inners)`` elements, checked pairwise."""

    def validate(value: object) -> Any:
        if not isinstance(value, (list, tuple)):
            return InvalidValueError(ErrorTemplate.type_mismatch("tuple", value))
        if len(value) != len(inners):
            return InvalidValueError(ErrorTemplate.length_mismatch(len(inners), value))
        for i, (validator, item) in enumerate(zip(inners, value, strict=True)):
            result = validator(item)
            if isinstance(result, InvalidValueError):
                return InvalidValueError(ErrorTemplate.invalid_item(i, str(result)))
        return value

    return validate


def one_of(*inners: Validator[Any]) -> Validator[Any]:
    """Return the result of the first validator that accepts the value.

    When all reject, the error lists every individual reason in order.
    """

    def validate(value: object) -> Any:
        reasons: list[str] = []
        for validator in inners:
            result = validator(value)
            if not isinstance(result, InvalidValueError):
                return result
            reasons.append(str(result))
        return InvalidValueError(ErrorTemplate.no_alternative(reasons))

    return validate


def all_of(*inners: Validator[Any]) -> Validator[Any]:
    """Accept the value only if every validator does; report the failing step."""

    def validate(value: object) -> Any:
        for step, validator in enumerate(inners):
            result = validator(value)
            if isinstance(result, InvalidValueError):
                return InvalidValueError(ErrorTemplate.step_failed(step, str(result)))
        return value

    return validate


def literal[A](expected: A) -> Validator[A]:
    """Accept only values equal to ``expected``.

    Booleans never equal numbers here, although ``True == 1`` in Python.
    """

    def validate(value: object) -> Any:
        if value != expected or isinstance(value, bool) != isinstance(expected, bool):
            return InvalidValueError(ErrorTemplate.not_equal(expected, value))
        return expected

    return validate


def where[A](
    validator: Validator[A],
    predicate: Callable[[A], bool],
    error: InvalidValueError | None = None,
) -> Validator[A]:
    """Refine ``validator`` with ``predicate``.

    Errors from ``validator`` pass through; a rejected predicate yields
    ``error`` or a generic message.

    Example:
        >>> adult = where(number, lambda n: n >= 18)
        >>> is_invalid(adult(12))
        True
    """

    def validate(value: object) -> Any:
        result = validator(value)
        if isinstance(result, InvalidValueError):
            return result
        if not predicate(result):
            if error is not None:
                return error
            return InvalidValueError(ErrorTemplate.predicate_failed(result))
        return result

    return validate
