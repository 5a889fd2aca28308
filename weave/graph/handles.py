"""Handle (port) names and the rules for what may connect to them.

A generator node exposes a ``prompt`` target, ``image-0``..``image-{n-1}``
targets, and ``output`` / ``image-output`` sources. Text and image nodes only
have one unlabeled source handle.
"""

from typing import Iterable

from weave.models.graph import (
    Connection,
    Edge,
    GeneratorNode,
    ImageNode,
    NodeKind,
    TextNode,
    node_kind,
)

PROMPT_HANDLE = "prompt"
OUTPUT_HANDLE = "output"
IMAGE_OUTPUT_HANDLE = "image-output"
IMAGE_HANDLE_PREFIX = "image-"

AnyNode = TextNode | ImageNode | GeneratorNode


def image_handle(index: int) -> str:
    return f"{IMAGE_HANDLE_PREFIX}{index}"


def is_image_handle(handle: str | None) -> bool:
    """True for numbered image input handles (``image-0``, ``image-1``, ...)."""
    return image_handle_index(handle) is not None


def image_handle_index(handle: str | None) -> int | None:
    if not handle or not handle.startswith(IMAGE_HANDLE_PREFIX):
        return None
    suffix = handle[len(IMAGE_HANDLE_PREFIX):]
    if not suffix.isdigit():
        return None
    return int(suffix)


def target_handles(node: AnyNode) -> list[str]:
    """Target handles a node exposes, in display order."""
    if isinstance(node, GeneratorNode):
        return [PROMPT_HANDLE] + [
            image_handle(i) for i in range(node.data.image_input_count)
        ]
    return []


def source_handles(node: AnyNode) -> list[str | None]:
    """Source handles a node exposes. ``None`` is the unlabeled output."""
    if isinstance(node, GeneratorNode):
        return [OUTPUT_HANDLE, IMAGE_OUTPUT_HANDLE]
    return [None, OUTPUT_HANDLE]


def is_valid_image_source(source: AnyNode, source_handle: str | None) -> bool:
    """Image inputs accept image nodes, or generators via their image output."""
    kind = node_kind(source)
    if kind == NodeKind.image:
        return True
    return kind == NodeKind.generator and source_handle == IMAGE_OUTPUT_HANDLE


def connection_rejection(
    nodes_by_id: dict[str, AnyNode],
    edges: Iterable[Edge],
    connection: Connection,
) -> str | None:
    """Return why a candidate connection is not allowed, or None if it is.

    Checks that both endpoints exist and declare the handles, that the target
    port is free (one incoming edge per port), and that the source type is
    compatible with the target port.
    """
    source = nodes_by_id.get(connection.source)
    target = nodes_by_id.get(connection.target)
    if source is None or target is None:
        return "unknown node"

    if connection.target_handle not in target_handles(target):
        return f"target handle {connection.target_handle!r} not on {target.type} node"
    if connection.source_handle not in source_handles(source):
        return f"source handle {connection.source_handle!r} not on {source.type} node"

    for edge in edges:
        if edge.target == connection.target and edge.target_handle == connection.target_handle:
            return f"port {connection.target_handle!r} already connected"

    if is_image_handle(connection.target_handle):
        if not is_valid_image_source(source, connection.source_handle):
            return "image input only accepts image sources"
    elif connection.target_handle == PROMPT_HANDLE:
        if node_kind(source) == NodeKind.image:
            return "prompt input does not accept image nodes"

    return None
