"""eLife: media is served from the eLife CDN, keyed by article id."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import PurePosixPath
from typing import Any

from jatsgraph.configurations.base import DefaultConfiguration
from jatsgraph.elements import attr, select_one, text_content
from jatsschema.nodes import FigureNode, SupplementNode, VideoNode

CDN_URL = "https://cdn.elifesciences.org/elife-articles"


class ElifeConfiguration(DefaultConfiguration):
    name = "elife"

    def _asset_url(self, state, folder: str, filename: str) -> str:
        return f"{CDN_URL}/{state.doc.id}/{folder}/{filename}"

    def enhance_article(self, converter: Any, state, article: ET.Element) -> None:
        doi = select_one(article, "article-id[pub-id-type=doi]")
        if doi is not None:
            state.doc.root.doi = f"{state.settings.doi_base_url}{text_content(doi).strip()}"

    def enhance_figure(self, state, node: FigureNode, element: ET.Element) -> None:
        href = attr(select_one(element, "graphic"), "xlink:href")
        if href:
            node.url = self._asset_url(state, "jpg", f"{href}.jpg")

    def enhance_supplement(self, state, node: SupplementNode, element: ET.Element) -> None:
        href = attr(select_one(element, "media"), "xlink:href")
        if href:
            node.url = self._asset_url(state, "suppl", href)

    def enhance_video(self, state, node: VideoNode, element: ET.Element) -> None:
        href = attr(element, "xlink:href")
        if href:
            stem = PurePosixPath(href).stem
            node.url = self._asset_url(state, "media", href)
            node.poster = self._asset_url(state, "jpg", f"{stem}.jpg")
        node.title = self.caption_title(element)
