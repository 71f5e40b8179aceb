"""Document sink interface consumed by the converter.

The sink owns node storage for the lifetime of the converted document. The
converter only ever creates nodes, registers them into views and looks
previously created nodes up by their source identifier.
"""

from abc import ABC, abstractmethod

from jatsschema.annotation import Annotation
from jatsschema.nodes import BaseNode, DocumentNode

CONTENT_VIEW = "content"
FIGURES_VIEW = "figures"
CITATIONS_VIEW = "citations"
INFO_VIEW = "info"

DEFAULT_VIEWS = (CONTENT_VIEW, FIGURES_VIEW, CITATIONS_VIEW, INFO_VIEW)


class DuplicateNodeError(ValueError):
    """Raised when a node or annotation id is created twice."""


class DocumentSinkInterface(ABC):
    """Abstract interface for the output article graph."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Identifier of the article (taken from the first article-id)."""

    @abstractmethod
    def set_id(self, document_id: str) -> None:
        """Assign the article identifier."""

    @property
    @abstractmethod
    def root(self) -> DocumentNode:
        """The document root node (title, authors, abstract, dates)."""

    @property
    @abstractmethod
    def annotations(self) -> list[Annotation]:
        """All annotations in creation order."""

    @abstractmethod
    def create(self, item: BaseNode | Annotation) -> None:
        """Insert a node or an annotation.

        Raises:
            DuplicateNodeError: If an item with the same id already exists.
        """

    @abstractmethod
    def get(self, node_id: str) -> BaseNode | Annotation | None:
        """Return the node or annotation with the given id, or None."""

    @abstractmethod
    def get_node_by_source_id(self, source_id: str) -> BaseNode | None:
        """Return the first created node whose source id matches, or None."""

    @abstractmethod
    def show(self, view: str, node_id: str) -> None:
        """Append a node id to a named view."""

    @abstractmethod
    def view(self, view: str) -> list[str]:
        """Return the ordered node ids of a view."""

    @property
    @abstractmethod
    def views(self) -> list[str]:
        """Names of all views of this document."""

    @abstractmethod
    def rebuild(self, view: str) -> None:
        """Recompute view-internal consistency after bulk creation."""
