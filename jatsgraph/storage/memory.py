"""In-memory document sink for testing, development and the CLI.

This module provides a dictionary-based implementation of the document sink
interface that keeps the whole converted article in memory. It is suitable
for:

- **Unit testing**: Fast, isolated tests without a host application
- **The command line**: Converting a file and dumping the graph as JSON
- **Prototyping**: Inspecting what the converter produces for an article

Host applications with their own document model implement
`DocumentSinkInterface` on top of it instead.
"""

from typing import Any

from jatsschema.annotation import Annotation
from jatsschema.nodes import BaseNode, DocumentNode
from jatsschema.storage import DEFAULT_VIEWS, DocumentSinkInterface, DuplicateNodeError


class InMemoryArticle(DocumentSinkInterface):
    """In-memory article graph keyed by node id.

    Nodes and annotations share one id namespace. The first node created
    with a given source id wins the source-id index, so cross-references
    resolve to the element's primary node.

    Thread safety: Not thread-safe. Each conversion gets its own instance.

    Example:
        ```python
        doc = InMemoryArticle()
        doc.create(ParagraphNode(id="paragraph_1", content="Hello"))
        doc.show("content", "paragraph_1")
        ```
    """

    def __init__(self, views: tuple[str, ...] = DEFAULT_VIEWS) -> None:
        self._id = ""
        self._root = DocumentNode(id="document")
        self._nodes: dict[str, BaseNode] = {self._root.id: self._root}
        self._annotations: dict[str, Annotation] = {}
        self._by_source_id: dict[str, str] = {}
        self._views: dict[str, list[str]] = {name: [] for name in views}
        self._shown_in: dict[str, str] = {}

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, document_id: str) -> None:
        self._id = document_id

    @property
    def root(self) -> DocumentNode:
        return self._root

    @property
    def nodes(self) -> dict[str, BaseNode]:
        return dict(self._nodes)

    @property
    def annotations(self) -> list[Annotation]:
        return list(self._annotations.values())

    def create(self, item: BaseNode | Annotation) -> None:
        """Stores a node or annotation.

        Args:
            item: The node or annotation to store.

        Raises:
            DuplicateNodeError: If anything with the same id was already created.
        """
        if item.id in self._nodes or item.id in self._annotations:
            raise DuplicateNodeError(f"Node {item.id!r} already exists")
        if isinstance(item, Annotation):
            self._annotations[item.id] = item
            return
        self._nodes[item.id] = item
        if item.source_id and item.source_id not in self._by_source_id:
            self._by_source_id[item.source_id] = item.id

    def get(self, node_id: str) -> BaseNode | Annotation | None:
        node = self._nodes.get(node_id)
        if node is not None:
            return node
        return self._annotations.get(node_id)

    def get_node_by_source_id(self, source_id: str) -> BaseNode | None:
        node_id = self._by_source_id.get(source_id)
        return self._nodes.get(node_id) if node_id is not None else None

    def show(self, view: str, node_id: str) -> None:
        """Appends a node id to a view, creating the view on first use.

        Raises:
            ValueError: If the node is already shown in a different view.
        """
        shown_in = self._shown_in.get(node_id)
        if shown_in is not None and shown_in != view:
            raise ValueError(f"Node {node_id!r} is already shown in view {shown_in!r}")
        self._views.setdefault(view, []).append(node_id)
        self._shown_in[node_id] = view

    def view(self, view: str) -> list[str]:
        return list(self._views.get(view, []))

    @property
    def views(self) -> list[str]:
        return list(self._views)

    def rebuild(self, view: str) -> None:
        """Drops unknown and repeated ids from a view, keeping first-seen order."""
        seen: set[str] = set()
        rebuilt: list[str] = []
        for node_id in self._views.get(view, []):
            if node_id in seen or node_id not in self._nodes:
                continue
            seen.add(node_id)
            rebuilt.append(node_id)
        self._views[view] = rebuilt

    def to_dict(self) -> dict[str, Any]:
        """Serializes the whole graph into plain JSON-compatible data."""
        return {
            "id": self._id,
            "nodes": {node_id: node.model_dump(mode="json") for node_id, node in self._nodes.items()},
            "annotations": [anno.model_dump(mode="json") for anno in self._annotations.values()],
            "views": {name: list(ids) for name, ids in self._views.items()},
        }
