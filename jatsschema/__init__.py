"""
Article Graph Schema - Node Models and Interfaces

This package contains only Pydantic models and ABC interfaces with no
conversion logic. It defines:

- Node models for every node type of the article graph
- The annotation model and its types
- The document sink interface the converter writes into

These are used by jatsgraph (conversion) and by consumers of converted
articles.
"""

from jatsschema.annotation import Annotation, AnnotationType, REFERENCE_TYPES
from jatsschema.nodes import (
    FIGURE_TYPES,
    NODE_MODELS,
    BaseNode,
    CaptionNode,
    CitationNode,
    CoverNode,
    DocumentNode,
    FigureNode,
    FormulaNode,
    HeadingNode,
    InstitutionNode,
    ListNode,
    NodeType,
    ParagraphNode,
    PersonNode,
    SupplementNode,
    TableNode,
    VideoNode,
)
from jatsschema.storage import (
    CITATIONS_VIEW,
    CONTENT_VIEW,
    DEFAULT_VIEWS,
    FIGURES_VIEW,
    INFO_VIEW,
    DocumentSinkInterface,
    DuplicateNodeError,
)

__all__ = [
    "Annotation",
    "AnnotationType",
    "BaseNode",
    "CITATIONS_VIEW",
    "CONTENT_VIEW",
    "CaptionNode",
    "CitationNode",
    "CoverNode",
    "DEFAULT_VIEWS",
    "DocumentNode",
    "DocumentSinkInterface",
    "DuplicateNodeError",
    "FIGURES_VIEW",
    "FIGURE_TYPES",
    "FigureNode",
    "FormulaNode",
    "HeadingNode",
    "INFO_VIEW",
    "InstitutionNode",
    "ListNode",
    "NODE_MODELS",
    "NodeType",
    "ParagraphNode",
    "PersonNode",
    "REFERENCE_TYPES",
    "SupplementNode",
    "TableNode",
    "VideoNode",
]

__version__ = "0.1.0"
