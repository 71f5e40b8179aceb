"""Per-run conversion state.

One `ConversionState` belongs to exactly one conversion. It is threaded
explicitly through the walker, the text extractor and the configuration
hooks; nothing about a run lives in module globals, so independent
conversions can run side by side.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jatsgraph.config import ConverterSettings
from jatsgraph.elements import Node, TextRun, attr, tag_name
from jatsgraph.errors import CoverageGap, GapKind, ImporterError
from jatsgraph.ids import IdGenerator
from jatsgraph.logging import setup_logging
from jatsschema.annotation import Annotation
from jatsschema.nodes import FIGURE_TYPES, BaseNode
from jatsschema.storage import CONTENT_VIEW, FIGURES_VIEW, DocumentSinkInterface

logger = setup_logging()


class StackFrame(BaseModel, frozen=True):
    """Node text field that newly discovered annotations attach to."""

    node_id: str
    field: str = "content"

    @property
    def path(self) -> tuple[str, str]:
        return (self.node_id, self.field)


class ConversionState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    doc: DocumentSinkInterface
    configuration: Any = Field(frozen=True, description="The ConfigurationInterface selected for this run.")
    settings: ConverterSettings = Field(default_factory=ConverterSettings)
    ids: IdGenerator = Field(default_factory=IdGenerator)

    stack: list[StackFrame] = Field(default_factory=list)
    annotations: list[Annotation] = Field(
        default_factory=list,
        description="Annotations found while walking, created only after the walk.",
    )
    section_level: int = 0
    stage: str = "select_config"
    diagnostics: list[CoverageGap] = Field(default_factory=list)

    def next_id(self, type_name: str) -> str:
        return self.ids.next_id(type_name)

    def push(self, node_id: str, field: str = "content") -> StackFrame:
        frame = StackFrame(node_id=node_id, field=field)
        self.stack.append(frame)
        return frame

    def pop(self) -> StackFrame:
        if not self.stack:
            raise ImporterError("Annotation context stack is empty")
        return self.stack.pop()

    @property
    def top(self) -> StackFrame:
        if not self.stack:
            raise ImporterError("Text scanned outside of any annotation context")
        return self.stack[-1]

    def show(self, nodes: list[BaseNode]) -> None:
        """Show nodes in their view: figure-like ones in "figures", others in "content"."""
        for node in nodes:
            view = FIGURES_VIEW if node.type in FIGURE_TYPES else CONTENT_VIEW
            self.doc.show(view, node.id)

    def report(self, kind: GapKind, element: Node | str, message: str) -> CoverageGap:
        """Record a coverage gap and continue.

        Raises:
            ImporterError: In strict mode, instead of recording the gap.
        """
        if isinstance(element, str):
            gap = CoverageGap(kind=kind, element=element, message=message)
        else:
            gap = CoverageGap(
                kind=kind,
                element=tag_name(element),
                message=message,
                source_id=None if isinstance(element, TextRun) else attr(element, "id"),
            )
        if self.settings.strict:
            raise ImporterError(str(gap))
        self.diagnostics.append(gap)
        logger.warning(str(gap))
        return gap

