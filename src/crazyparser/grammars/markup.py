"""Markup grammar: tags, attributes, void tags, text and entities.

A small HTML-like language built from the public combinator API, with a
mutable node tree for post-processing (replace_with, text merging,
inline flattening).

Supported:
    - Tags ``<name attr="v">...</name>``; the closing name must match
    - Void tags (br, img, ...) with an optional ``/`` before ``>``
    - Attribute values in single or double quotes, possibly empty
    - Entities ``&amp; &lt; &gt; &quot; &apos;`` in text and values

Not supported: comments, doctypes, CDATA, unquoted attribute values,
numeric character references.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from crazyparser.diagnostics import ErrorTemplate, MarkupSyntaxError
from crazyparser.syntax import (
    ParseFailure,
    Parser,
    any_char,
    asum,
    char,
    eof,
    lazy,
    many,
    one,
    some,
    span,
    string,
)

__all__ = [
    "INLINE_TAG_NAMES",
    "VOID_TAG_NAMES",
    "Attribute",
    "Node",
    "Tag",
    "TextNode",
    "VoidTag",
    "div",
    "document",
    "node",
    "parse_markup",
]

logger = logging.getLogger(__name__)

ENTITIES: dict[str, str] = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

VOID_TAG_NAMES: frozenset[str] = frozenset({
    "br", "hr", "img", "input",
    "meta", "link", "base", "area", "col",
    "embed", "param", "source", "track", "wbr",
})  # fmt: skip

# Phrasing elements unwrapped by Tag.flatten_inline().
INLINE_TAG_NAMES: frozenset[str] = frozenset({
    "a", "abbr", "b", "bdi", "bdo", "cite", "code", "data", "dfn", "em",
    "i", "kbd", "mark", "q", "s", "samp", "small", "span", "strong",
    "sub", "sup", "time", "u", "var",
})  # fmt: skip

_TEXT_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})
_VALUE_ESCAPES = str.maketrans({"&": "&amp;", '"': "&quot;", "'": "&apos;"})

_NAME_START = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_")
_NAME_REST = _NAME_START | frozenset("0123456789.-")


# ============================================================================
# NODES
# ============================================================================


class Node:
    """Base class of all markup nodes.

    Attributes:
        parent: Enclosing tag, or None for top-level nodes
    """

    __slots__ = ("parent",)

    def __init__(self) -> None:
        self.parent: Tag | None = None

    def dump(self) -> str:
        """Serialize back to markup, re-escaping special characters."""
        raise NotImplementedError

    def replace_with(self, node: Node) -> None:
        """Replace this node in its parent's children with ``node``.

        Raises:
            ValueError: If this node has no parent
        """
        parent = self.parent
        if parent is None:
            msg = "Cannot replace a node without a parent"
            raise ValueError(msg)
        position = next(i for i, child in enumerate(parent.children) if child is self)
        parent.children[position] = node
        node.parent = parent
        self.parent = None


class Attribute:
    """A ``key="value"`` pair; ``value`` holds the unescaped text."""

    __slots__ = ("key", "value")

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value

    def __repr__(self) -> str:
        return f"Attribute({self.key!r}, {self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attribute):
            return NotImplemented
        return self.key == other.key and self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def dump(self) -> str:
        return f'{self.key}="{self.value.translate(_VALUE_ESCAPES)}"'


class VoidTag(Node):
    """A tag without children or closing tag, such as ``<br>``."""

    __slots__ = ("attributes", "tag_name")

    def __init__(self, tag_name: str, attributes: Iterable[Attribute] = ()) -> None:
        super().__init__()
        self.tag_name = tag_name
        self.attributes = list(attributes)

    def __repr__(self) -> str:
        return f"VoidTag({self.tag_name!r}, {self.attributes!r})"

    def _dump_head(self) -> str:
        return self.tag_name + "".join(" " + a.dump() for a in self.attributes)

    def dump(self) -> str:
        return f"<{self._dump_head()}>"


class Tag(VoidTag):
    """A tag with children, such as ``<p>text</p>``."""

    __slots__ = ("children",)

    def __init__(
        self,
        tag_name: str,
        attributes: Iterable[Attribute] = (),
        children: Iterable[Node] = (),
    ) -> None:
        super().__init__(tag_name, attributes)
        self.children: list[Node] = list(children)
        for child in self.children:
            child.parent = self

    def __repr__(self) -> str:
        return f"Tag({self.tag_name!r}, {self.attributes!r}, {self.children!r})"

    def dump(self) -> str:
        inner = "".join(child.dump() for child in self.children)
        return f"<{self._dump_head()}>{inner}</{self.tag_name}>"

    def merge_continuous_texts(self) -> None:
        """Merge adjacent TextNodes, recursively through child tags."""
        merged: list[Node] = []
        for child in self.children:
            if isinstance(child, Tag):
                child.merge_continuous_texts()
            if isinstance(child, TextNode) and merged and isinstance(merged[-1], TextNode):
                merged[-1].text += child.text
                child.parent = None
            else:
                merged.append(child)
        self.children = merged

    def flatten_inline(self) -> None:
        """Unwrap inline tags (b, i, span, ...) into their children, then merge texts.

        Example:
            >>> [p] = parse_markup("<p>Wo<b>r</b><i>ld</i></p>")
            >>> p.flatten_inline()
            >>> p.dump()
            '<p>World</p>'
        """
        flattened: list[Node] = []
        for child in self.children:
            if isinstance(child, Tag):
                child.flatten_inline()
                if child.tag_name in INLINE_TAG_NAMES:
                    for grandchild in child.children:
                        grandchild.parent = self
                    flattened.extend(child.children)
                    child.parent = None
                    continue
            flattened.append(child)
        self.children = flattened
        self.merge_continuous_texts()


class TextNode(Node):
    """Character data; ``text`` holds the unescaped text."""

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"

    def dump(self) -> str:
        return self.text.translate(_TEXT_ESCAPES)


def div(
    attributes: Iterable[tuple[str, str]] = (),
    children: Iterable[Node] = (),
) -> Tag:
    """Shorthand for building a ``<div>`` programmatically.

    Example:
        >>> div([("class", "note")], [TextNode("hi")]).dump()
        '<div class="note">hi</div>'
    """
    return Tag("div", [Attribute(k, v) for k, v in attributes], children)


# ============================================================================
# GRAMMAR
# ============================================================================

ws = span(str.isspace)

tag_name: Parser[str] = (
    one.where(_NAME_START.__contains__) & span(_NAME_REST.__contains__)
).map("".join)

_entity = (
    char("&") >> asum([string(name + ";").const(ch) for name, ch in ENTITIES.items()])
).try_()


def _quoted(delimiter: str) -> Parser[str]:
    value_char = _entity | one.where(lambda c: c != delimiter and c != "&")
    return many(value_char).map("".join) << char(delimiter)


_quoted_values = {d: _quoted(d) for d in "\"'"}

attribute_value: Parser[str] = any_char("\"'").bind(_quoted_values.__getitem__)

attribute: Parser[Attribute] = (
    (tag_name << ws << char("=") << ws) & attribute_value
).map(lambda kv: Attribute(*kv))

_attributes = many((ws >> attribute).try_())

# "<" name attributes, returned as (name, [Attribute, ...])
_tag_head = (char("<") >> ws >> tag_name) & (_attributes << ws)

void_tag: Parser[VoidTag] = (
    _tag_head.where(lambda head: head[0] in VOID_TAG_NAMES)
    << char("/").optional()
    << ws
    << char(">")
).map(lambda head: VoidTag(*head))


def _closing(name: str) -> Parser[str]:
    return string("</") >> ws >> string(name) << ws << char(">")


def _element_body(head: tuple[str, list[Attribute]]) -> Parser[Tag]:
    name, attributes = head
    return (many(node) << _closing(name)).map(
        lambda children: Tag(name, attributes, children)
    )


element: Parser[Tag] = (_tag_head << char(">")).bind(_element_body)

text: Parser[TextNode] = some(_entity | one.where(lambda c: c not in "<>&")).map(
    lambda cs: TextNode("".join(cs))
)

# Void tags first: "<br>" must not wait for a "</br>".
_node_choice = asum(void_tag.try_(), element.try_(), text)

# element refers back to node; lazy() also counts tag nesting depth.
node: Parser[Node] = lazy(lambda: _node_choice)

document: Parser[list[Node]] = many(node) << eof.expecting("end of input")


def parse_markup(
    source: str | bytes,
    *,
    max_source_size: int | None = None,
    max_depth: int | None = None,
) -> list[Node]:
    """Parse a markup fragment into its top-level nodes.

    Args:
        source: Markup text; bytes are decoded as UTF-8
        max_source_size: Maximum source length (default: 10 MiB, 0 disables)
        max_depth: Maximum tag nesting (default: 100)

    Raises:
        MarkupSyntaxError: If the fragment is malformed (also a ValueError)
        ValueError: If source exceeds max_source_size

    Example:
        >>> [p] = parse_markup('<p class="x">a &amp; b<br/></p>')
        >>> p.children
        [TextNode('a & b'), VoidTag('br', [])]
    """
    result: Any
    result, state = document.run(
        source, max_source_size=max_source_size, max_depth=max_depth
    )
    if isinstance(result, ParseFailure):
        logger.debug("Markup parse failed at offset %d", state.index)
        diagnostic = result.diagnostic
        if diagnostic is None:
            diagnostic = ErrorTemplate.parse_failed(state.span(state.index))
        raise MarkupSyntaxError(diagnostic, failure=result, state=state)
    return result
