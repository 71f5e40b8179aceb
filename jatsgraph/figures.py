"""Global extraction of figure-like content and citations.

Figures, tables, supplementary material and videos are collected from the
whole article in one pass, wherever they sit structurally, and shown in the
"figures" view. The reference list is converted the same way into citation
nodes in the "citations" view. Both passes run before the body is walked,
so cross-references found in body text resolve to generated ids.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from jatsgraph.configurations.base import enhance
from jatsgraph.elements import (
    ElementKind,
    attr,
    direct_children,
    element_children,
    kind_of,
    person_name,
    select_all,
    select_one,
    text_content,
    to_markup,
)
from jatsgraph.errors import GapKind
from jatsgraph.logging import setup_logging
from jatsgraph.state import ConversionState
from jatsgraph.walker import StructuralWalker
from jatsschema.nodes import (
    BaseNode,
    CaptionNode,
    CitationNode,
    FigureNode,
    SupplementNode,
    TableNode,
    VideoNode,
)
from jatsschema.storage import CITATIONS_VIEW

logger = setup_logging()

FIGURE_SELECTOR = "fig, table-wrap, supplementary-material, media[mimetype=video]"
DOI_SELECTOR = "pub-id[pub-id-type=doi], ext-link[ext-link-type=doi]"


class FigureExtractor:
    """Converts figure-like elements and reference lists."""

    def __init__(self, state: ConversionState, walker: StructuralWalker) -> None:
        self.state = state
        self.walker = walker

    @property
    def settings(self):
        return self.state.settings

    def extract_figures(self, article: ET.Element) -> list[BaseNode]:
        nodes: list[BaseNode] = []
        for el in select_all(article, FIGURE_SELECTOR):
            kind = kind_of(el)
            if kind is ElementKind.FIG:
                node = self.figure(el)
            elif kind is ElementKind.TABLE_WRAP:
                node = self.table_wrap(el)
            elif kind is ElementKind.MEDIA:
                node = self.video(el)
            else:
                node = self.supplement(el)
            nodes.append(node)
        if nodes:
            self.state.show(nodes)
        logger.debug(f"Extracted {len(nodes)} figure-like nodes")
        return nodes

    def _label(self, el: ET.Element) -> str:
        label = select_one(el, "label")
        if label is None:
            self.state.report(GapKind.MISSING_PART, el, "no label")
            return ""
        return text_content(label)

    def _caption_id(self, el: ET.Element) -> str | None:
        caption = select_one(el, "caption")
        if caption is None:
            return None
        node = self.caption(caption)
        return node.id if node is not None else None

    def figure(self, figure: ET.Element) -> FigureNode:
        label = select_one(figure, "label")
        node = FigureNode(
            id=self.state.next_id("figure"),
            source_id=attr(figure, "id"),
            label=text_content(label),
            url=self.settings.placeholder_figure_url,
        )
        node.caption = self._caption_id(figure)
        enhance(self.state, "enhance_figure", node, figure)
        self.state.doc.create(node)
        return node

    def supplement(self, supplement: ET.Element) -> SupplementNode:
        label = select_one(supplement, "label")
        doi = select_one(supplement, "object-id[pub-id-type=doi]")
        node = SupplementNode(
            id=self.state.next_id("supplement"),
            source_id=attr(supplement, "id"),
            label=text_content(label),
            url=self.settings.placeholder_supplement_url,
            doi=f"{self.settings.doi_base_url}{text_content(doi).strip()}" if doi is not None else "",
        )
        node.caption = self._caption_id(supplement)
        enhance(self.state, "enhance_supplement", node, supplement)
        self.state.doc.create(node)
        return node

    def video(self, video: ET.Element) -> VideoNode:
        node = VideoNode(
            id=self.state.next_id("video"),
            source_id=attr(video, "id"),
            label=self._label(video),
            url=attr(video, "xlink:href") or "",
        )
        node.caption = self._caption_id(video)
        enhance(self.state, "enhance_video", node, video)
        self.state.doc.create(node)
        return node

    def table_wrap(self, table_wrap: ET.Element) -> TableNode:
        node = TableNode(
            id=self.state.next_id("table"),
            source_id=attr(table_wrap, "id"),
            label=self._label(table_wrap),
        )
        table = select_one(table_wrap, "table")
        if table is not None:
            node.content = to_markup(table)
        else:
            self.state.report(GapKind.MISSING_PART, table_wrap, "table-wrap without <table>")
        node.caption = self._caption_id(table_wrap)
        enhance(self.state, "enhance_table", node, table_wrap)
        self.state.doc.create(node)
        return node

    def caption(self, caption: ET.Element) -> CaptionNode | None:
        """A caption from the title and the caption's own paragraphs.

        Paragraphs nested deeper inside the caption are not considered. A
        caption without direct paragraphs yields no node.
        """
        paragraphs = direct_children(caption, ElementKind.P)
        if not paragraphs:
            return None

        node = CaptionNode(id=self.state.next_id("caption"), source_id=attr(caption, "id"))
        title = select_one(caption, "title")
        if title is not None:
            # titles can be annotated, so they go through the paragraph logic
            title_nodes = self.walker.paragraph(title)
            if title_nodes:
                node.title = title_nodes[0].id

        for p in paragraphs:
            p_nodes = self.walker.paragraph(p)
            if len(p_nodes) > 1:
                logger.warning(f"Caption paragraph produced {len(p_nodes)} nodes, only using the first one")
            if p_nodes:
                node.children.append(p_nodes[0].id)

        self.state.doc.create(node)
        return node

    # Citations
    # ---------

    def extract_citations(self, article: ET.Element) -> list[CitationNode]:
        nodes: list[CitationNode] = []
        ref_list = select_one(article, "ref-list")
        if ref_list is None:
            return nodes
        for ref in select_all(ref_list, "ref"):
            nodes.extend(self.ref(ref))
        logger.debug(f"Extracted {len(nodes)} citations")
        return nodes

    def ref(self, ref: ET.Element) -> list[CitationNode]:
        nodes = []
        for child in element_children(ref):
            kind = kind_of(child)
            if kind in (ElementKind.ELEMENT_CITATION, ElementKind.MIXED_CITATION):
                node = self.citation(ref, child)
                if node is not None:
                    nodes.append(node)
            elif kind is ElementKind.LABEL:
                continue
            else:
                self.state.report(GapKind.UNSUPPORTED_ELEMENT, child, "not supported in 'ref'")
        return nodes

    def citation(self, ref: ET.Element, citation: ET.Element) -> CitationNode | None:
        """A citation node, for citations with a structured person group only."""
        person_group = select_one(citation, "person-group")
        if person_group is None:
            self.state.report(GapKind.UNSTRUCTURED_CITATION, citation, "citation without person-group, skipping")
            return None

        node = CitationNode(id=self.state.next_id("article_citation"), source_id=attr(ref, "id"))
        node.authors = [person_name(name) for name in select_all(person_group, "name")]

        title = select_one(citation, "article-title")
        if title is not None:
            node.title = text_content(title)
        else:
            self.state.report(GapKind.MISSING_PART, citation, "citation has no title")

        for field in ("source", "volume", "fpage", "lpage", "year"):
            el = select_one(citation, field)
            if el is not None:
                setattr(node, field, text_content(el))

        label = select_one(ref, "label")
        if label is not None:
            node.label = text_content(label)

        doi = select_one(citation, DOI_SELECTOR)
        if doi is not None:
            node.doi = f"{self.settings.doi_base_url}{text_content(doi).strip()}"

        for link in select_all(citation, "ext-link[ext-link-type=uri]"):
            href = attr(link, "xlink:href")
            if href:
                node.citation_urls.append(href)

        self.state.doc.create(node)
        self.state.doc.show(CITATIONS_VIEW, node.id)
        return node
