"""Configuration strategy interface.

A configuration bundles the publisher-specific adjustments applied to nodes
after the generic conversion built them: resolving real media URLs,
attaching DOIs and similar. Hooks receive the in-progress node together
with the XML element it was built from and may mutate the node before it is
stored.

Hooks must never abort a conversion. `enhance` calls a hook and, when it
raises, restores the node to its generic form and records a coverage gap.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from jatsgraph.elements import select_one, text_content
from jatsgraph.errors import GapKind
from jatsgraph.logging import setup_logging
from jatsschema.nodes import BaseNode, FigureNode, SupplementNode, TableNode, VideoNode

if TYPE_CHECKING:
    from jatsgraph.state import ConversionState

logger = setup_logging()


class ConfigurationInterface(ABC):
    """Publisher-specific node enhancement hooks."""

    name: str = "abstract"

    @abstractmethod
    def enhance_article(self, converter: Any, state: ConversionState, article: ET.Element) -> None:
        """Called once, after the body has been converted."""

    @abstractmethod
    def enhance_figure(self, state: ConversionState, node: FigureNode, element: ET.Element) -> None:
        """Patch a figure node built from a <fig> element."""

    @abstractmethod
    def enhance_supplement(self, state: ConversionState, node: SupplementNode, element: ET.Element) -> None:
        """Patch a supplement node built from <supplementary-material>."""

    @abstractmethod
    def enhance_table(self, state: ConversionState, node: TableNode, element: ET.Element) -> None:
        """Patch a table node built from <table-wrap>."""

    @abstractmethod
    def enhance_video(self, state: ConversionState, node: VideoNode, element: ET.Element) -> None:
        """Patch a video node built from <media mimetype="video">."""


class DefaultConfiguration(ConfigurationInterface):
    """Leaves every node in its generic form."""

    name = "default"

    def enhance_article(self, converter: Any, state: ConversionState, article: ET.Element) -> None:
        pass

    def enhance_figure(self, state: ConversionState, node: FigureNode, element: ET.Element) -> None:
        pass

    def enhance_supplement(self, state: ConversionState, node: SupplementNode, element: ET.Element) -> None:
        pass

    def enhance_table(self, state: ConversionState, node: TableNode, element: ET.Element) -> None:
        pass

    def enhance_video(self, state: ConversionState, node: VideoNode, element: ET.Element) -> None:
        pass

    # Helpers for publisher configurations

    @staticmethod
    def object_doi(element: ET.Element) -> str:
        return text_content(select_one(element, "object-id[pub-id-type=doi]")).strip()

    @staticmethod
    def caption_title(element: ET.Element) -> str:
        caption = select_one(element, "caption")
        return text_content(select_one(caption, "title")).strip()


def enhance(state: ConversionState, hook: str, node: BaseNode, element: ET.Element) -> bool:
    """Run a node hook of the active configuration without letting it fail.

    Returns:
        True if the hook completed, False if it raised and the node was
        restored to the state it had before the call.
    """
    snapshot = node.model_copy(deep=True)
    try:
        getattr(state.configuration, hook)(state, node, element)
        return True
    except Exception as e:
        logger.exception(f"{state.configuration.name}.{hook} failed for {node.id}: {e}")
        for field in type(node).model_fields:
            setattr(node, field, getattr(snapshot, field))
        state.report(GapKind.ENHANCEMENT_FAILED, element, f"{hook} failed: {e}")
        return False
