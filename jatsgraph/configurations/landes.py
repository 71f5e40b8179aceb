"""Landes Bioscience: graphics and supplements are referenced by file name."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from jatsgraph.configurations.base import DefaultConfiguration
from jatsgraph.elements import attr, select_one
from jatsschema.nodes import FigureNode, SupplementNode

FIGURE_BASE_URL = "https://www.landesbioscience.com/article_figure/journals"


class LandesConfiguration(DefaultConfiguration):
    name = "landes"

    def enhance_figure(self, state, node: FigureNode, element: ET.Element) -> None:
        href = attr(select_one(element, "graphic"), "xlink:href")
        if href:
            node.url = f"{FIGURE_BASE_URL}/{href}"

    def enhance_supplement(self, state, node: SupplementNode, element: ET.Element) -> None:
        # the file name sits on the element itself or on its <media> child
        href = attr(element, "xlink:href") or attr(select_one(element, "media"), "xlink:href")
        if href:
            node.url = href
