"""Strip transient state from a graph before it is persisted.

- Generator nodes never persist as loading or with an error.
- Image nodes with a durable URL persist only the URL; the inline bytes are
  dropped to keep the document small.
- Image nodes without a durable URL keep their inline bytes, copied into
  ``image_url`` so the editor can still display them after reload.

Sanitizing is idempotent and never mutates its input.
"""

from collections.abc import Iterable

from weave.graph.history import HistoryEntry
from weave.models.graph import Edge, GeneratorNode, ImageNode, ImageNodeData
from weave.utils.data_urls import is_durable_url


def sanitize_node(node):
    if isinstance(node, GeneratorNode):
        data = node.data.model_copy(update={"is_loading": False, "error": None})
        return node.model_copy(update={"data": data}, deep=True)

    if isinstance(node, ImageNode):
        image = node.data
        if is_durable_url(image.image_url):
            data = ImageNodeData(label=image.label, image_url=image.image_url, image_base64=None)
        elif image.image_base64:
            data = ImageNodeData(label=image.label, image_url=image.image_base64, image_base64=image.image_base64)
        else:
            return node.model_copy(deep=True)
        return node.model_copy(update={"data": data}, deep=True)

    return node.model_copy(deep=True)


def sanitize_nodes(nodes: Iterable) -> list:
    return [sanitize_node(node) for node in nodes]


def sanitize_snapshot(nodes: Iterable, edges: Iterable[Edge]) -> HistoryEntry:
    """Sanitized deep copy of a whole graph."""
    return HistoryEntry(
        nodes=tuple(sanitize_nodes(nodes)),
        edges=tuple(edge.model_copy(deep=True) for edge in edges),
    )
