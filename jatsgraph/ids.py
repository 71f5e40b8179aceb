"""Per-type identifier generation."""

from collections import defaultdict


class IdGenerator:
    """Issues `<type>_<n>` identifiers, counting from 1 per type name.

    One generator belongs to one conversion run; ids are never reused
    within it.
    """

    def __init__(self) -> None:
        self._counters: defaultdict[str, int] = defaultdict(int)

    def next_id(self, type_name: str) -> str:
        self._counters[type_name] += 1
        return f"{type_name}_{self._counters[type_name]}"

    def count(self, type_name: str) -> int:
        """How many ids were issued for `type_name` so far."""
        return self._counters.get(type_name, 0)
