"""Recursive-descent walker over block-level article content.

Each block element found in a body, section, abstract or list item is
dispatched on its `ElementKind` and turned into zero or more nodes:

- `<p>` becomes one or more paragraphs; block elements nested inside a
  paragraph (lists, formulas) split it into siblings
- `<sec>` becomes a heading followed by the section's own nodes
- `<list>` becomes a list node whose items are the ids of the nodes found
  in its list items
- `<disp-formula>` becomes a formula with a MathML or TeX payload
- `<boxed-text>` is unwrapped in place

Figure-like elements are skipped here because a global pass extracts them
once for the whole article.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Sequence

from jatsgraph.annotations import AnnotatedTextExtractor, is_annotation
from jatsgraph.elements import (
    ChildCursor,
    ElementKind,
    attr,
    direct_children,
    element_children,
    kind_of,
    select_one,
    text_content,
    to_markup,
)
from jatsgraph.errors import GapKind
from jatsgraph.state import ConversionState
from jatsschema.nodes import BaseNode, FormulaNode, HeadingNode, ListNode, ParagraphNode

FIGURE_KINDS = frozenset(
    {
        ElementKind.FIG,
        ElementKind.FIG_GROUP,
        ElementKind.TABLE_WRAP,
        ElementKind.SUPPLEMENTARY_MATERIAL,
    }
)

ORDERED_LIST_TYPES = frozenset({"order", "ordered"})


def is_extracted_globally(el: ET.Element) -> bool:
    """True for figure-like elements the global figure pass converts.

    Only video media is extracted; other media is left to the caller.
    """
    kind = kind_of(el)
    if kind is ElementKind.MEDIA:
        return attr(el, "mimetype") == "video"
    return kind in FIGURE_KINDS


class StructuralWalker:
    """Produces nodes for block-level elements."""

    def __init__(self, state: ConversionState, text: AnnotatedTextExtractor | None = None) -> None:
        self.state = state
        self.text = text or AnnotatedTextExtractor(state)

    def body_nodes(self, children: Sequence[ET.Element], start: int = 0) -> list[BaseNode]:
        """Convert block-level siblings, returning the created nodes in order."""
        nodes: list[BaseNode] = []
        for child in children[start:]:
            kind = kind_of(child)
            if kind is ElementKind.P:
                nodes.extend(self.paragraph(child))
            elif kind is ElementKind.SEC:
                nodes.extend(self.section(child))
            elif kind is ElementKind.LIST:
                nodes.append(self.list_block(child))
            elif kind is ElementKind.DISP_FORMULA:
                formula = self.formula(child)
                if formula is not None:
                    nodes.append(formula)
            elif kind is ElementKind.BOXED_TEXT:
                nodes.extend(self.body_nodes(list(child)))
            elif kind is ElementKind.COMMENT or is_extracted_globally(child):
                continue
            else:
                self.state.report(GapKind.UNSUPPORTED_ELEMENT, child, "not yet supported within section")
        return nodes

    def section(self, section: ET.Element) -> list[BaseNode]:
        """A heading for the section title, followed by the section body."""
        children = list(section)
        start = 0
        title = ""
        # leading <label>/<title>; the title is taken as plain text
        while start < len(children) and kind_of(children[start]) in (ElementKind.LABEL, ElementKind.TITLE):
            if kind_of(children[start]) is ElementKind.TITLE:
                title = text_content(children[start]).strip()
            start += 1
        if not title:
            self.state.report(GapKind.MISSING_PART, section, "section without title")

        self.state.section_level += 1
        try:
            heading = HeadingNode(
                id=self.state.next_id("heading"),
                source_id=attr(section, "id"),
                level=self.state.section_level,
                content=title,
            )
            self.state.doc.create(heading)
            nodes: list[BaseNode] = [heading]
            nodes.extend(self.body_nodes(children, start))
        finally:
            self.state.section_level -= 1
        return nodes

    def paragraph(self, paragraph: ET.Element) -> list[BaseNode]:
        """Paragraph nodes for the text runs of `<p>`, plus any block content.

        Block elements inside a paragraph end the current text run; what
        follows them starts a new paragraph node.
        """
        nodes: list[BaseNode] = []
        cursor = ChildCursor.over(paragraph)
        while not cursor.done:
            child = cursor.current
            kind = kind_of(child)
            if kind is ElementKind.TEXT or is_annotation(kind):
                node = self._text_run(paragraph, cursor)
                if node is not None:
                    nodes.append(node)
            elif kind is ElementKind.LIST:
                nodes.append(self.list_block(child))
            elif kind is ElementKind.DISP_FORMULA:
                formula = self.formula(child)
                if formula is not None:
                    nodes.append(formula)
            elif kind is ElementKind.COMMENT or is_extracted_globally(child):
                pass
            else:
                self.state.report(GapKind.UNSUPPORTED_ELEMENT, child, "not yet supported within paragraph")
            cursor.advance()
        return nodes

    def _text_run(self, paragraph: ET.Element, cursor: ChildCursor) -> ParagraphNode | None:
        node = ParagraphNode(id=self.state.next_id("paragraph"), source_id=attr(paragraph, "id"))
        mark = len(self.state.annotations)
        self.state.push(node.id, "content")
        try:
            content = self.text.extract(cursor, 0)
        finally:
            self.state.pop()

        if not content.strip():
            # drop annotations found on text that is not kept
            del self.state.annotations[mark:]
            return None
        node.content = content
        self.state.doc.create(node)
        return node

    def list_block(self, list_el: ET.Element) -> ListNode:
        node = ListNode(
            id=self.state.next_id("list"),
            source_id=attr(list_el, "id"),
            ordered=(attr(list_el, "list-type") or "") in ORDERED_LIST_TYPES,
        )
        for item in direct_children(list_el, ElementKind.LIST_ITEM):
            node.items.extend(n.id for n in self.body_nodes(list(item)))
        self.state.doc.create(node)
        return node

    def formula(self, formula: ET.Element) -> FormulaNode | None:
        """A formula node from the first MathML or TeX payload, if any."""
        candidates: list[ET.Element] = []
        for child in element_children(formula):
            if kind_of(child) is ElementKind.ALTERNATIVES:
                candidates.extend(element_children(child))
            else:
                candidates.append(child)

        fmt, data = "", ""
        for child in candidates:
            kind = kind_of(child)
            if kind is ElementKind.MATH:
                rows = element_children(child)
                fmt, data = "mathml", to_markup(rows[0] if rows else child)
                break
            if kind is ElementKind.TEX_MATH:
                fmt, data = "latex", text_content(child)
                break

        if not fmt:
            self.state.report(GapKind.UNSUPPORTED_FORMULA, formula, "formula has no MathML or TeX payload")
            return None

        node = FormulaNode(
            id=self.state.next_id("formula"),
            source_id=attr(formula, "id"),
            label=text_content(select_one(formula, "label")),
            data=data,
            format=fmt,
        )
        self.state.doc.create(node)
        return node
