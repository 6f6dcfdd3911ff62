"""Tests for grammars/markup.py: parsing, serialization and tree edits.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import event, given

from crazyparser.diagnostics import DiagnosticCode, MarkupSyntaxError, ParseFailedError
from crazyparser.grammars import parse_markup
from crazyparser.grammars.markup import (
    Attribute,
    Node,
    Tag,
    TextNode,
    VoidTag,
    attribute,
    div,
    tag_name,
)
from crazyparser.syntax import FAIL, NestingDepthExceeded
from tests.strategies import markup_trees

# ============================================================================
# Parsing
# ============================================================================


class TestParseNested:
    """Test a realistic nested fragment."""

    SOURCE = (
        "<div><div>Hello</div>"
        '<img alt="description &amp; care">'
        "<p>Wo<b>r</b>ld</p></div>"
    )

    def test_structure(self) -> None:
        """Tags, void tags and text nest as written."""
        [outer] = parse_markup(self.SOURCE)

        assert isinstance(outer, Tag)
        assert outer.tag_name == "div"
        a, b, c = outer.children

        assert isinstance(a, Tag)
        assert a.tag_name == "div"
        assert len(a.children) == 1
        assert isinstance(a.children[0], TextNode)
        assert a.children[0].dump() == "Hello"

        assert isinstance(b, VoidTag)
        assert not isinstance(b, Tag)
        assert b.tag_name == "img"
        assert b.attributes == [Attribute("alt", "description & care")]

        assert isinstance(c, Tag)
        assert c.tag_name == "p"
        assert len(c.children) == 3
        wo, bold, ld = c.children
        assert isinstance(wo, TextNode)
        assert wo.text == "Wo"
        assert isinstance(bold, Tag)
        assert bold.tag_name == "b"
        assert [child.dump() for child in bold.children] == ["r"]
        assert isinstance(ld, TextNode)
        assert ld.text == "ld"

    def test_parent_links(self) -> None:
        """Every child points back to its enclosing tag."""
        [outer] = parse_markup(self.SOURCE)

        assert outer.parent is None
        assert isinstance(outer, Tag)
        for child in outer.children:
            assert child.parent is outer

    def test_dump_round_trip(self) -> None:
        """Serializing the parsed tree reproduces the source."""
        [outer] = parse_markup(self.SOURCE)

        assert outer.dump() == self.SOURCE


class TestTags:
    """Test tag and attribute syntax."""

    def test_top_level_sequence(self) -> None:
        """A fragment may hold several top-level nodes."""
        nodes = parse_markup("hi <br> there")

        assert [type(n) for n in nodes] == [TextNode, VoidTag, TextNode]
        assert all(n.parent is None for n in nodes)

    def test_empty_fragment(self) -> None:
        """An empty fragment has no nodes."""
        assert parse_markup("") == []

    @pytest.mark.parametrize("source", ["<br>", "<br/>", "<br />", "< br >"])
    def test_void_tag_forms(self, source: str) -> None:
        """Void tags need no closing tag; a trailing slash is optional."""
        [node] = parse_markup(source)

        assert type(node) is VoidTag
        assert node.tag_name == "br"

    def test_void_tag_inside_text(self) -> None:
        """A void tag does not swallow the following content."""
        [p] = parse_markup("<p>a<br>b</p>")

        assert isinstance(p, Tag)
        assert [type(c) for c in p.children] == [TextNode, VoidTag, TextNode]

    def test_attribute_quoting(self) -> None:
        """Values may use either quote, contain the other, or be empty."""
        [a] = parse_markup("<a href=\"x'y\" title='say \"hi\"' data-x=''>link</a>")

        assert isinstance(a, Tag)
        assert a.attributes == [
            Attribute("href", "x'y"),
            Attribute("title", 'say "hi"'),
            Attribute("data-x", ""),
        ]

    def test_whitespace_inside_tags(self) -> None:
        """Whitespace is allowed around names, '=' and before '>'."""
        [p] = parse_markup('< p  class = "c" >x</ p >')

        assert isinstance(p, Tag)
        assert p.attributes == [Attribute("class", "c")]
        assert p.dump() == '<p class="c">x</p>'

    def test_tag_name_parser(self) -> None:
        """Names start with a letter or underscore."""
        assert tag_name.eval("my-tag.v2 rest") == "my-tag.v2"
        assert tag_name.eval("2tag") is FAIL

    def test_attribute_parser(self) -> None:
        """attribute parses one key/value pair."""
        assert attribute.eval("k='a &lt; b'") == Attribute("k", "a < b")


class TestTextAndEntities:
    """Test character data."""

    def test_entities_decoded(self) -> None:
        """Named entities decode in text."""
        [text] = parse_markup("a &lt;b&gt; &amp; &quot;c&quot; &apos;d&apos;")

        assert isinstance(text, TextNode)
        assert text.text == "a <b> & \"c\" 'd'"

    def test_text_dump_escapes(self) -> None:
        """Dumping re-escapes &, < and >."""
        assert TextNode("a <b> & c").dump() == "a &lt;b&gt; &amp; c"

    def test_attribute_dump_escapes(self) -> None:
        """Attribute values re-escape &, quotes and apostrophes."""
        assert Attribute("k", "a & \"b\" 'c'").dump() == 'k="a &amp; &quot;b&quot; &apos;c&apos;"'

    def test_whitespace_preserved(self) -> None:
        """Text keeps its whitespace."""
        [p] = parse_markup("<p>  two  spaces\n</p>")

        assert isinstance(p, Tag)
        assert p.children[0].dump() == "  two  spaces\n"


class TestMalformedMarkup:
    """Test rejection of malformed fragments."""

    @pytest.mark.parametrize(
        "source",
        [
            "<p></q>",
            "<p>unclosed",
            "</p>",
            "a & b",
            "&nbsp;",
            "a > b",
            "<p class=unquoted></p>",
            '<p class="unterminated></p>',
            "<1p></1p>",
            "<br></br>",
        ],
    )
    def test_rejected(self, source: str) -> None:
        """Malformed markup raises MarkupSyntaxError."""
        with pytest.raises(MarkupSyntaxError):
            parse_markup(source)

    def test_error_hierarchy(self) -> None:
        """MarkupSyntaxError is a ValueError and a ParseFailedError."""
        assert issubclass(MarkupSyntaxError, ValueError)
        assert issubclass(MarkupSyntaxError, ParseFailedError)

    def test_error_points_at_unparsed_input(self) -> None:
        """The diagnostic expects end of input where parsing stopped."""
        with pytest.raises(MarkupSyntaxError) as exc_info:
            parse_markup("ok <p>mismatch</q>")

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code is DiagnosticCode.EXPECTED
        assert diagnostic.span is not None
        assert diagnostic.span.start == 3

    def test_depth_limit(self) -> None:
        """Deep tag nesting fails with NestingDepthExceeded."""
        source = "<a>" * 20 + "</a>" * 20

        assert len(parse_markup(source)) == 1
        with pytest.raises(MarkupSyntaxError) as exc_info:
            parse_markup(source, max_depth=5)

        assert isinstance(exc_info.value.failure, NestingDepthExceeded)


# ============================================================================
# Tree manipulation
# ============================================================================


class TestReplaceWith:
    """Test in-place node replacement."""

    def test_replace_child(self) -> None:
        """replace_with swaps the node in its parent's children."""
        [p] = parse_markup("<p>a<b>x</b>c</p>")
        assert isinstance(p, Tag)
        bold = p.children[1]
        replacement = TextNode("y")

        bold.replace_with(replacement)

        assert p.dump() == "<p>ayc</p>"
        assert replacement.parent is p
        assert bold.parent is None

    def test_replace_by_identity(self) -> None:
        """Equal-looking siblings are told apart by identity."""
        first, second = TextNode("same"), TextNode("same")
        parent = Tag("p", [], [first, second])

        second.replace_with(VoidTag("br"))

        assert parent.children[0] is first
        assert parent.dump() == "<p>same<br></p>"

    def test_replace_without_parent(self) -> None:
        """A top-level node cannot be replaced."""
        with pytest.raises(ValueError, match="without a parent"):
            TextNode("orphan").replace_with(TextNode("x"))


class TestMergeContinuousTexts:
    """Test adjacent text merging."""

    def test_merge_recursive(self) -> None:
        """Runs of TextNodes merge at every level."""
        tag = Tag(
            "div",
            [],
            [
                TextNode("H"),
                TextNode("E"),
                Tag("div", [], [TextNode("!"), TextNode("#"), TextNode("?")]),
                TextNode("L"),
                TextNode("L"),
                TextNode("O"),
                Tag("div", [], []),
                TextNode("WOR"),
                TextNode("LD"),
            ],
        )

        tag.merge_continuous_texts()

        texts = [c.text for c in tag.children if isinstance(c, TextNode)]
        assert texts == ["HE", "LLO", "WORLD"]
        inner = tag.children[1]
        assert isinstance(inner, Tag)
        assert [c.dump() for c in inner.children] == ["!#?"]
        assert len(tag.children) == 5

    def test_merge_keeps_dump(self) -> None:
        """Merging never changes the serialized form."""
        tag = Tag("p", [], [TextNode("a"), TextNode("<"), VoidTag("br"), TextNode("b")])
        before = tag.dump()

        tag.merge_continuous_texts()

        assert tag.dump() == before
        assert len(tag.children) == 3


class TestFlattenInline:
    """Test unwrapping of inline tags."""

    def test_flatten(self) -> None:
        """Nested inline tags disappear and their texts merge."""
        [p] = parse_markup("<p>Wo<b>r</b><b><b><b>l</b></b></b><i>d</i></p>")
        assert isinstance(p, Tag)

        p.flatten_inline()

        assert len(p.children) == 1
        assert isinstance(p.children[0], TextNode)
        assert p.children[0].text == "World"
        assert p.children[0].parent is p

    def test_block_tags_kept(self) -> None:
        """Non-inline tags stay, but their own inline content is flattened."""
        [d] = parse_markup("<div><p>a<em>b</em></p><span>c</span>d</div>")
        assert isinstance(d, Tag)

        d.flatten_inline()

        assert d.dump() == "<div><p>ab</p>cd</div>"


class TestDiv:
    """Test the programmatic shorthand."""

    def test_div(self) -> None:
        """div builds a div tag with attributes and children."""
        tag = div([("class", "note")], [TextNode("hi")])

        assert tag.dump() == '<div class="note">hi</div>'
        assert tag.children[0].parent is tag

    def test_empty_div(self) -> None:
        """div() with no arguments is an empty div."""
        assert div().dump() == "<div></div>"


# ============================================================================
# Properties
# ============================================================================


class TestMarkupProperties:
    """Round-trip properties over generated trees."""

    @given(markup_trees)
    def test_dump_parse_dump(self, tree: Node) -> None:
        """Parsing a dumped tree and dumping again is the identity."""
        source = tree.dump()
        event(f"root={type(tree).__name__}")

        nodes = parse_markup(source)

        assert "".join(node.dump() for node in nodes) == source
