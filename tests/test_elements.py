"""Tests for the element-tree adapter: child sequences, kinds, selectors, cursor."""

import pytest

from jatsgraph.elements import (
    ChildCursor,
    ElementKind,
    TextRun,
    attr,
    child_nodes,
    kind_of,
    parse_xml,
    person_name,
    select_all,
    select_one,
    tag_name,
    text_content,
    to_markup,
)
from jatsgraph.errors import ImporterError

from conftest import element


class TestChildNodes:
    def test_mixed_content_interleaves_text_and_elements(self):
        p = element("<p>Hello <bold>big</bold> world<!-- note -->!</p>")
        nodes = child_nodes(p)
        assert [kind_of(n) for n in nodes] == [
            ElementKind.TEXT,
            ElementKind.BOLD,
            ElementKind.TEXT,
            ElementKind.COMMENT,
            ElementKind.TEXT,
        ]
        assert nodes[0] == TextRun("Hello ")
        assert nodes[2] == TextRun(" world")
        assert nodes[4] == TextRun("!")

    def test_empty_element_has_no_children(self):
        assert child_nodes(element("<p/>")) == []


class TestKinds:
    def test_known_and_unknown_tags(self):
        assert kind_of(element("<sec/>")) is ElementKind.SEC
        assert kind_of(element("<ext-link/>")) is ElementKind.EXT_LINK
        assert kind_of(element("<inline-graphic/>")) is ElementKind.UNKNOWN

    def test_namespaced_math(self):
        math = element("<mml:math><mml:mi>x</mml:mi></mml:math>")
        assert tag_name(math) == "mml:math"
        assert kind_of(math) is ElementKind.MATH

    def test_default_namespace_is_ignored(self):
        root = parse_xml('<article xmlns="http://jats.nlm.nih.gov"><p>x</p></article>')
        assert kind_of(root) is ElementKind.ARTICLE
        assert kind_of(root[0]) is ElementKind.P


class TestAttributes:
    def test_xlink_attribute(self):
        link = element('<ext-link xlink:href="http://example.org">x</ext-link>')
        assert attr(link, "xlink:href") == "http://example.org"

    def test_missing_attribute_and_element(self):
        assert attr(element("<p/>"), "id") is None
        assert attr(None, "id", "fallback") == "fallback"


class TestSelectors:
    DOC = (
        "<article>"
        '<fig id="f1"/>'
        '<sec><media mimetype="video" id="v1"/><media mimetype="application" id="m2"/>'
        '<table-wrap id="t1"/></sec>'
        "<supplementary-material id=\"s1\"/>"
        "</article>"
    )

    def test_alternatives_in_document_order(self):
        root = parse_xml(self.DOC)
        found = select_all(root, "fig, table-wrap, supplementary-material, media[mimetype=video]")
        assert [attr(el, "id") for el in found] == ["f1", "v1", "t1", "s1"]

    def test_quoted_attribute_value(self):
        root = parse_xml('<a><object-id pub-id-type="doi">10.1/x</object-id></a>')
        assert text_content(select_one(root, "object-id[pub-id-type='doi']")) == "10.1/x"

    def test_select_excludes_self_unless_asked(self):
        root = parse_xml("<article><article/></article>")
        assert select_one(root, "article") is root[0]
        assert select_one(root, "article", include_self=True) is root

    def test_no_match(self):
        assert select_one(parse_xml("<a/>"), "b") is None
        assert select_all(None, "b") == []

    def test_invalid_selector(self):
        with pytest.raises(ValueError, match="Unsupported selector"):
            select_all(parse_xml("<a/>"), "a > b")


def test_to_markup_drops_tail():
    p = element("<p><table><tr><td>1</td></tr></table> trailing</p>")
    assert to_markup(p[0]) == "<table><tr><td>1</td></tr></table>"


def test_text_content_skips_comments():
    assert text_content(element("<p>a<!-- hidden --><i>b</i>c</p>")) == "abc"


def test_person_name():
    name = element("<name><surname>Curie</surname><given-names>Marie</given-names></name>")
    assert person_name(name) == "Marie Curie"
    assert person_name(element("<name><surname>Curie</surname></name>")) == "Curie"


def test_parse_error_is_fatal():
    with pytest.raises(ImporterError, match="Failed to parse XML"):
        parse_xml("<article><p></article>")


class TestChildCursor:
    def test_advance_and_rewind(self):
        cursor = ChildCursor([TextRun("a"), TextRun("b")])
        assert len(cursor) == 2
        assert cursor.current == TextRun("a")
        cursor.advance()
        assert cursor.current == TextRun("b")
        cursor.rewind()
        assert cursor.pos == 0
        cursor.advance()
        cursor.advance()
        assert cursor.done


def test_text_content_keeps_text_after_nested_comments():
    el = element("<title>A <italic>b<!-- x --></italic><!-- y --> c</title>")
    assert text_content(el) == "A b c"
