"""Node models for the converted article graph.

Every unit of the output document is a typed node:

- **DocumentNode**: the article root, carrying title, authors and dates
- **CoverNode**: the title page shown first in the content view
- **PersonNode** / **InstitutionNode**: contributors and their affiliations
- **HeadingNode**, **ParagraphNode**, **ListNode**, **FormulaNode**: body text
- **FigureNode**, **TableNode**, **SupplementNode**, **VideoNode**: figure-like
  content extracted globally, each with an optional **CaptionNode**
- **CitationNode**: structured bibliography entries

Nodes keep the identifier of the XML element they came from in `source_id`,
which is how cross-references inside text are resolved to generated ids.

Node models are mutable while a conversion builds them (configuration
strategies patch URLs and DOIs before the node is stored), but assignments
are still validated.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class NodeType(str, Enum):
    """Closed set of node types a conversion can produce."""

    DOCUMENT = "document"
    COVER = "cover"
    PERSON = "person"
    INSTITUTION = "institution"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    FORMULA = "formula"
    FIGURE = "figure"
    TABLE = "table"
    VIDEO = "video"
    SUPPLEMENT = "supplement"
    CAPTION = "caption"
    CITATION = "citation"


class BaseNode(BaseModel):
    """Common fields shared by every node in the article graph."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(min_length=1, description="Generator-issued unique identifier.")
    source_id: str | None = Field(
        default=None,
        description="Identifier of the originating XML element, if it had one.",
    )
    type: NodeType


class DocumentNode(BaseNode):
    type: NodeType = NodeType.DOCUMENT
    title: str = ""
    authors: list[str] = Field(
        default_factory=list,
        description="Person node ids, appended as contributors are discovered.",
    )
    abstract: str = ""
    created_at: date | None = None
    doi: str = ""


class CoverNode(BaseNode):
    type: NodeType = NodeType.COVER
    title: str = ""
    authors: list[str] = Field(default_factory=list)
    abstract: str = ""


class PersonNode(BaseNode):
    type: NodeType = NodeType.PERSON
    name: str = ""
    affiliations: list[str] = Field(
        default_factory=list,
        description="Source ids of the referenced <aff> elements.",
    )
    image: str = ""
    emails: list[str] = Field(default_factory=list)
    contribution: str = ""


class InstitutionNode(BaseNode):
    type: NodeType = NodeType.INSTITUTION
    label: str = ""
    name: str = ""


class HeadingNode(BaseNode):
    type: NodeType = NodeType.HEADING
    level: int = Field(ge=0)
    content: str = ""


class ParagraphNode(BaseNode):
    type: NodeType = NodeType.PARAGRAPH
    content: str = ""


class ListNode(BaseNode):
    type: NodeType = NodeType.LIST
    items: list[str] = Field(default_factory=list)
    ordered: bool = False


class FormulaNode(BaseNode):
    type: NodeType = NodeType.FORMULA
    label: str = ""
    data: str = ""
    format: str = ""


class CaptionNode(BaseNode):
    type: NodeType = NodeType.CAPTION
    title: str | None = Field(
        default=None,
        description="Id of the paragraph node holding the caption title.",
    )
    children: list[str] = Field(default_factory=list)


class FigureNode(BaseNode):
    type: NodeType = NodeType.FIGURE
    label: str = ""
    url: str = ""
    caption: str | None = None


class SupplementNode(BaseNode):
    type: NodeType = NodeType.SUPPLEMENT
    label: str = ""
    url: str = ""
    doi: str = ""
    caption: str | None = None


class VideoNode(BaseNode):
    type: NodeType = NodeType.VIDEO
    label: str = ""
    title: str = ""
    url: str = ""
    poster: str = ""
    caption: str | None = None


class TableNode(BaseNode):
    type: NodeType = NodeType.TABLE
    label: str = ""
    title: str = ""
    content: str = Field(default="", description="Serialized <table> markup.")
    footers: list[str] = Field(default_factory=list)
    caption: str | None = None


class CitationNode(BaseNode):
    type: NodeType = NodeType.CITATION
    label: str = ""
    title: str = "N/A"
    authors: list[str] = Field(default_factory=list)
    doi: str = ""
    source: str = ""
    volume: str = ""
    fpage: str = ""
    lpage: str = ""
    year: str = ""
    citation_urls: list[str] = Field(default_factory=list)


NODE_MODELS: dict[NodeType, type[BaseNode]] = {
    NodeType.DOCUMENT: DocumentNode,
    NodeType.COVER: CoverNode,
    NodeType.PERSON: PersonNode,
    NodeType.INSTITUTION: InstitutionNode,
    NodeType.HEADING: HeadingNode,
    NodeType.PARAGRAPH: ParagraphNode,
    NodeType.LIST: ListNode,
    NodeType.FORMULA: FormulaNode,
    NodeType.FIGURE: FigureNode,
    NodeType.TABLE: TableNode,
    NodeType.VIDEO: VideoNode,
    NodeType.SUPPLEMENT: SupplementNode,
    NodeType.CAPTION: CaptionNode,
    NodeType.CITATION: CitationNode,
}

# Figure-like node types are presented in the "figures" view.
FIGURE_TYPES = frozenset({NodeType.FIGURE, NodeType.TABLE, NodeType.VIDEO, NodeType.SUPPLEMENT})
