"""Tests for HTML parsing, tree walking and serialization."""

import pytest

from mailcss.html import (
    Attribute,
    Comment,
    Doctype,
    Document,
    Element,
    Text,
    parse_html,
    serialize,
    walk,
)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseHtml:
    def test_doctype_and_root(self):
        doc = parse_html("<!DOCTYPE html><html><head></head><body></body></html>")
        assert isinstance(doc.children[0], Doctype)
        assert doc.children[0].data == "html"
        root = doc.children[1]
        assert isinstance(root, Element)
        assert [c.tag for c in root.children] == ["head", "body"]

    def test_fragment_gets_no_implied_elements(self):
        doc = parse_html('<p class="a b">Hi</p>')
        assert len(doc.children) == 1
        assert doc.children[0].tag == "p"
        assert doc.find("html") is None

    def test_class_attribute_is_a_single_string(self):
        doc = parse_html('<p class="a  b">x</p>')
        assert doc.find("p").get("class") == "a  b"
        assert doc.find("p").classes == ["a", "b"]

    def test_attribute_order_is_kept(self):
        doc = parse_html('<img src="x.png" alt="X" width="10">')
        assert [a.name for a in doc.find("img").attrs] == ["src", "alt", "width"]

    def test_comments(self):
        doc = parse_html("<div><!-- note --></div>")
        [comment] = doc.find("div").children
        assert isinstance(comment, Comment)
        assert comment.data == " note "

    def test_entities_are_decoded(self):
        doc = parse_html("<p>a &amp; b</p>")
        assert doc.find("p").children == [Text("a & b")]


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------


class TestElement:
    def test_set_updates_in_place(self):
        el = Element("p", [Attribute("class", "a"), Attribute("id", "x")])
        el.set("class", "b")
        assert [(a.name, a.value) for a in el.attrs] == [("class", "b"), ("id", "x")]

    def test_set_appends_when_missing(self):
        el = Element("p")
        el.set("style", "color: red")
        assert el.get("style") == "color: red"

    def test_remove_many(self):
        el = Element(
            "img",
            [Attribute("onload", "x()"), Attribute("src", "a"), Attribute("onerror", "y()")],
        )
        el.remove("onload", "onerror")
        assert [a.name for a in el.attrs] == ["src"]

    def test_classes_when_absent(self):
        assert Element("p").classes == []

    def test_find_is_depth_first(self):
        doc = parse_html("<div><section><head></head></section></div><head></head>")
        head = doc.find("head")
        assert head is doc.find("section").children[0]


# ---------------------------------------------------------------------------
# Walking
# ---------------------------------------------------------------------------


class TestWalk:
    def test_children_are_visited_before_parents(self):
        doc = parse_html("<div><p><b></b></p><i></i></div>")
        order = []

        def visit(node):
            if isinstance(node, Element):
                order.append(node.tag)
            return node

        walk(doc, visit)
        assert order == ["b", "p", "i", "div"]

    def test_none_deletes_the_node(self):
        doc = parse_html("<div>a<!-- c -->b</div>")
        walk(doc, lambda node: None if isinstance(node, Comment) else node)
        assert serialize(doc) == "<div>ab</div>"

    def test_replacement(self):
        doc = parse_html("<div><span>x</span></div>")

        def visit(node):
            if isinstance(node, Element) and node.tag == "span":
                return Text("y")
            return node

        walk(doc, visit)
        assert serialize(doc) == "<div>y</div>"


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerialize:
    @pytest.mark.parametrize(
        "markup",
        [
            "<!DOCTYPE html><html><head></head><body><p>Hi</p></body></html>",
            '<table width="100%"><tr><td align="center">x</td></tr></table>',
            '<p class="a">1 &lt; 2 &amp; 3</p>',
            "<div><br><img src=\"a.png\"></div>",
        ],
    )
    def test_round_trip(self, markup):
        assert serialize(parse_html(markup)) == markup

    def test_attribute_quotes_are_escaped(self):
        doc = Document([Element("a", [Attribute("title", 'say "hi" & go')])])
        assert serialize(doc) == '<a title="say &quot;hi&quot; &amp; go"></a>'

    def test_non_breaking_space_is_written_as_entity(self):
        assert serialize(parse_html("<p>a&nbsp;b</p>")) == "<p>a&nbsp;b</p>"
        doc = Document([Element("td", [Attribute("title", "a\xa0b")], [Text("\xa0")])])
        assert serialize(doc) == '<td title="a&nbsp;b">&nbsp;</td>'

    def test_style_contents_are_raw(self):
        doc = Document([Element("style", children=[Text("a > b { color: red; }")])])
        assert serialize(doc) == "<style>a > b { color: red; }</style>"

    def test_doctype(self):
        assert serialize(Document([Doctype("html")])) == "<!DOCTYPE html>"
