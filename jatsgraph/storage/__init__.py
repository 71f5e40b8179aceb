"""Document sink implementations."""

from jatsgraph.storage.memory import InMemoryArticle

__all__ = ["InMemoryArticle"]
