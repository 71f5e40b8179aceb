"""PLOS: figures and supplements are fetched through the journal's object API."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any
from urllib.parse import quote

from jatsgraph.configurations.base import DefaultConfiguration
from jatsgraph.elements import attr, select_one, text_content
from jatsschema.nodes import FigureNode, SupplementNode

FETCH_OBJECT_URL = "http://www.plosone.org/article/fetchObject.action"
FETCH_REPRESENTATION_URL = "http://www.plosone.org/article/fetchSingleRepresentation.action"


class PlosConfiguration(DefaultConfiguration):
    name = "plos"

    def enhance_article(self, converter: Any, state, article: ET.Element) -> None:
        doi = select_one(article, "article-id[pub-id-type=doi]")
        if doi is not None:
            state.doc.root.doi = f"{state.settings.doi_base_url}{text_content(doi).strip()}"

    def enhance_figure(self, state, node: FigureNode, element: ET.Element) -> None:
        doi = self.object_doi(element)
        if doi:
            node.url = f"{FETCH_OBJECT_URL}?uri={quote(f'info:doi/{doi}', safe=':/')}&representation=PNG_M"

    def enhance_supplement(self, state, node: SupplementNode, element: ET.Element) -> None:
        href = attr(element, "xlink:href") or attr(select_one(element, "media"), "xlink:href")
        if href:
            node.url = f"{FETCH_REPRESENTATION_URL}?uri={quote(href, safe=':/')}"
