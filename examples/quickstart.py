"""Quickstart Example - Building Parsers From Combinators.

Demonstrates the core workflow:

1. Combine primitives into a small grammar
2. Attach grammar-specific failures and read diagnostics
3. Define recursive rules with lazy()
4. Capture source ranges
5. Decode JSON and validate its shape
6. Parse and rewrite a markup fragment

Python 3.13+.
"""

from __future__ import annotations


def example_1_time_of_day() -> None:
    """Parse "HH:MM" into a pair of integers."""
    from crazyparser import digit, template

    print("=" * 60)
    print("Example 1: Combining Primitives")
    print("=" * 60)

    two_digits = (digit * 2).map(lambda ds: int("".join(ds)))
    clock = template("{}:{}", two_digits, two_digits)

    print(f"clock.eval('09:45') = {clock.eval('09:45')}")
    print(f"clock.eval('9:45')  = {clock.eval('9:45')}")
    print()


def example_2_custom_failures() -> None:
    """Tag failures with a grammar-specific type and format them."""
    from crazyparser import ParseFailure, char, is_failure, string

    print("=" * 60)
    print("Example 2: Custom Failures")
    print("=" * 60)

    class MissingColon(ParseFailure):
        pass

    key_value = string("key") >> char(":").error(MissingColon()) >> string("value")

    result, state = key_value.run("key value")
    if is_failure(result):
        print(f"Failure type: {type(result).__name__}")
        print(result.format_with_context(state))
    print()


def example_3_recursion() -> None:
    """Count nesting depth of balanced parentheses."""
    from crazyparser import Parser, char, lazy
    from crazyparser.syntax import NestingDepthExceeded

    print("=" * 60)
    print("Example 3: Recursive Rules")
    print("=" * 60)

    nested: Parser[int] = lazy(
        lambda: (char("(") >> nested.otherwise(0) << char(")")).map(lambda n: n + 1)
    )

    print(f"Depth of '((()))': {nested.eval('((()))')}")
    result = nested.eval("(" * 50 + ")" * 50, max_depth=10)
    print(f"Exceeded max_depth=10: {isinstance(result, NestingDepthExceeded)}")
    print()


def example_4_ranges() -> None:
    """Report where each word starts and ends."""
    from crazyparser import alpha, char, many, some

    print("=" * 60)
    print("Example 4: Source Ranges")
    print("=" * 60)

    word = some(alpha).map("".join).with_range()
    words = many(word << char(" ").optional())

    for text, (start, end) in words.eval("parse these words"):
        print(f"  {text!r}: {start}..{end}")
    print()


def example_5_json() -> None:
    """Decode JSON, then check the decoded value against a schema."""
    from crazyparser.grammars import loads
    from crazyparser.validation import array, is_invalid, number, record, string

    print("=" * 60)
    print("Example 5: JSON and Validation")
    print("=" * 60)

    students = array(record({"name": string, "age": number}))

    for source in ('[{"name": "Alice", "age": 12}]', '[{"name": "David", "age": "10"}]'):
        result = students(loads(source))
        status = f"invalid: {result}" if is_invalid(result) else "valid"
        print(f"  {source} -> {status}")
    print()


def example_6_markup() -> None:
    """Parse a markup fragment and flatten its inline tags."""
    from crazyparser.grammars import parse_markup
    from crazyparser.grammars.markup import Tag

    print("=" * 60)
    print("Example 6: Markup")
    print("=" * 60)

    [paragraph] = parse_markup("<p>Wo<b>r</b><i>ld</i> &amp; more</p>")
    print(f"Parsed:    {paragraph.dump()}")
    if isinstance(paragraph, Tag):
        paragraph.flatten_inline()
    print(f"Flattened: {paragraph.dump()}")
    print()


def main() -> None:
    """Run all quickstart examples."""
    print()
    print("crazyparser Quickstart")
    print()

    example_1_time_of_day()
    example_2_custom_failures()
    example_3_recursion()
    example_4_ranges()
    example_5_json()
    example_6_markup()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
