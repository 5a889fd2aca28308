"""Bounded undo/redo history for the graph store."""

from dataclasses import dataclass

from weave.models.graph import Edge, GeneratorNode, ImageNode, TextNode

DEFAULT_HISTORY_LIMIT = 50


@dataclass(frozen=True)
class HistoryEntry:
    """An immutable deep copy of the graph at one point in time."""

    nodes: tuple[TextNode | ImageNode | GeneratorNode, ...]
    edges: tuple[Edge, ...]

    @classmethod
    def capture(cls, nodes, edges) -> "HistoryEntry":
        return cls(
            nodes=tuple(node.model_copy(deep=True) for node in nodes),
            edges=tuple(edge.model_copy(deep=True) for edge in edges),
        )

    def restore(self) -> tuple[list, list]:
        """Return fresh mutable copies so the entry itself stays untouched."""
        return (
            [node.model_copy(deep=True) for node in self.nodes],
            [edge.model_copy(deep=True) for edge in self.edges],
        )


class History:
    """Linear undo log with a cursor.

    ``entries[:cursor]`` are states that undo can return to (oldest first);
    ``entries[cursor:]`` are states that redo can return to (next first).
    Undo and redo swap the live state into the slot they read from, so the
    log length only changes when a new entry is pushed.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self.limit = limit
        self.entries: list[HistoryEntry] = []
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.entries)

    def push(self, entry: HistoryEntry) -> None:
        """Record a pre-mutation state, discarding anything redoable."""
        del self.entries[self.cursor:]
        self.entries.append(entry)
        if len(self.entries) > self.limit:
            del self.entries[0]
        self.cursor = len(self.entries)

    def can_undo(self) -> bool:
        return self.cursor > 0

    def can_redo(self) -> bool:
        return self.cursor < len(self.entries)

    def undo(self, live: HistoryEntry) -> HistoryEntry | None:
        if not self.can_undo():
            return None
        self.cursor -= 1
        previous = self.entries[self.cursor]
        self.entries[self.cursor] = live
        return previous

    def redo(self, live: HistoryEntry) -> HistoryEntry | None:
        if not self.can_redo():
            return None
        following = self.entries[self.cursor]
        self.entries[self.cursor] = live
        self.cursor += 1
        return following

    def clear(self) -> None:
        self.entries.clear()
        self.cursor = 0
