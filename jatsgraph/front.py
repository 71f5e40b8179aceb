"""Front matter: article metadata, contributors, dates and abstracts."""

from __future__ import annotations

import uuid
import xml.etree.ElementTree as ET
from datetime import date

from jatsgraph.elements import (
    ElementKind,
    attr,
    element_children,
    kind_of,
    person_name,
    select_all,
    select_one,
    text_content,
)
from jatsgraph.errors import GapKind, ImporterError
from jatsgraph.state import ConversionState
from jatsgraph.walker import StructuralWalker
from jatsschema.nodes import BaseNode, CoverNode, HeadingNode, InstitutionNode, PersonNode


def article_id(article: ET.Element) -> str:
    """The first <article-id>, or a random id when the article has none."""
    el = select_one(article, "article-id")
    value = text_content(el).strip()
    return value or uuid.uuid4().hex


class FrontMatterReader:
    def __init__(self, state: ConversionState, walker: StructuralWalker) -> None:
        self.state = state
        self.walker = walker

    def front(self, front: ET.Element) -> None:
        article_meta = select_one(front, "article-meta")
        if article_meta is None:
            raise ImporterError("Expected element: 'article-meta'")

        root = self.state.doc.root
        ids = select_all(article_meta, "article-id")
        if ids:
            self.state.doc.set_id(text_content(ids[0]).strip() or self.state.doc.id)

        title_group = select_one(article_meta, "title-group")
        if title_group is not None:
            title = select_one(title_group, "article-title")
            if title is not None:
                root.title = text_content(title).strip()

        for aff in select_all(article_meta, "aff"):
            self.affiliation(aff)
        for contrib in select_all(article_meta, "contrib"):
            self.contributor(contrib)

        pub_dates = select_all(article_meta, "pub-date")
        if pub_dates:
            root.created_at = self.pub_date(pub_dates[0])

        abstracts = select_all(article_meta, "abstract")
        if abstracts:
            root.abstract = " ".join(text_content(p).strip() for p in select_all(abstracts[0], "p"))

        cover = CoverNode(id="cover", title=root.title, authors=list(root.authors), abstract=root.abstract)
        self.state.doc.create(cover)
        self.state.show([cover])

        for abstract in abstracts:
            self.abstract(abstract)

    def affiliation(self, aff: ET.Element) -> InstitutionNode:
        label = select_one(aff, "label")
        names = [text_content(el).strip() for el in select_all(aff, "institution")]
        if not names:
            # unstructured affiliation: everything but the label
            text = text_content(aff)
            if label is not None:
                text = text.replace(text_content(label), "", 1)
            names = [text.strip()]
        node = InstitutionNode(
            id=self.state.next_id("institution"),
            source_id=attr(aff, "id"),
            label=text_content(label).strip(),
            name=", ".join(n for n in names if n),
        )
        self.state.doc.create(node)
        return node

    def contributor(self, contrib: ET.Element) -> PersonNode:
        node = PersonNode(id=self.state.next_id("person"), source_id=attr(contrib, "id"))
        name = select_one(contrib, "name")
        if name is not None:
            node.name = person_name(name)
        else:
            node.name = text_content(select_one(contrib, "collab")).strip()
            if not node.name:
                self.state.report(GapKind.MISSING_PART, contrib, "contributor without name")

        for xref in select_all(contrib, "xref[ref-type=aff]"):
            rid = attr(xref, "rid")
            if rid:
                node.affiliations.append(rid)
        node.emails = [text_content(email).strip() for email in select_all(contrib, "email")]

        if attr(contrib, "contrib-type") == "author":
            self.state.doc.root.authors.append(node.id)
        self.state.doc.create(node)
        return node

    def pub_date(self, pub_date: ET.Element) -> date | None:
        """Date of a <pub-date>; a missing day or month counts as the first."""
        parts = {ElementKind.DAY: 1, ElementKind.MONTH: 1}
        for el in element_children(pub_date):
            kind = kind_of(el)
            if kind in (ElementKind.DAY, ElementKind.MONTH, ElementKind.YEAR):
                try:
                    parts[kind] = int(text_content(el).strip())
                except ValueError:
                    self.state.report(GapKind.MISSING_PART, el, f"not a number: {text_content(el)!r}")
        if ElementKind.YEAR not in parts:
            self.state.report(GapKind.MISSING_PART, pub_date, "pub-date without year")
            return None
        try:
            return date(parts[ElementKind.YEAR], parts[ElementKind.MONTH], parts[ElementKind.DAY])
        except ValueError as e:
            self.state.report(GapKind.MISSING_PART, pub_date, f"invalid date: {e}")
            return None

    def abstract(self, abstract: ET.Element) -> list[BaseNode]:
        children = list(abstract)
        title = children[0] if children and kind_of(children[0]) is ElementKind.TITLE else None
        heading = HeadingNode(
            id=self.state.next_id("heading"),
            source_id=attr(abstract, "id"),
            level=1,
            content=text_content(title).strip() if title is not None else "Abstract",
        )
        self.state.doc.create(heading)

        start = 0 if title is None else 1
        nodes: list[BaseNode] = [heading]
        nodes.extend(self.walker.body_nodes(children, start))
        self.state.show(nodes)
        return nodes
