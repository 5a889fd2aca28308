"""Persisting the graph: sanitizing and debounced auto-save."""

from weave.persistence.autosave import (
    AutoSaver,
    DocumentBackend,
    DocumentLoadError,
    SaveState,
)
from weave.persistence.sanitizer import sanitize_node, sanitize_nodes, sanitize_snapshot

__all__ = [
    "AutoSaver",
    "DocumentBackend",
    "DocumentLoadError",
    "SaveState",
    "sanitize_node",
    "sanitize_nodes",
    "sanitize_snapshot",
]
