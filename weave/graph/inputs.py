"""Collecting a generator node's upstream values into a request payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from weave.graph.handles import (
    IMAGE_OUTPUT_HANDLE,
    OUTPUT_HANDLE,
    PROMPT_HANDLE,
    image_handle_index,
)
from weave.graph.images import ImageFetcher
from weave.models.graph import Edge, GeneratorNode, ImageNode, TextNode

logger = logging.getLogger(__name__)


@dataclass
class CollectedInputs:
    """What a generator node receives from its incoming edges."""

    prompt_text: str = ""
    images: list[str] = field(default_factory=list)


def _edge_order(edge: Edge) -> tuple[int, int]:
    # prompt first, then image inputs by handle number
    index = image_handle_index(edge.target_handle)
    return (0, 0) if index is None else (1, index)


async def collect_inputs(
    nodes: Iterable[TextNode | ImageNode | GeneratorNode],
    edges: Iterable[Edge],
    node_id: str,
    fetcher: ImageFetcher | None = None,
) -> CollectedInputs:
    """Walk the edges into ``node_id`` and gather prompt text and images.

    Images are ordered by their target handle (``image-0`` first). An image
    node holding only a durable URL is fetched and inlined, since providers
    need the bytes.
    """
    nodes_by_id = {node.id: node for node in nodes}
    incoming = sorted((e for e in edges if e.target == node_id), key=_edge_order)
    collected = CollectedInputs()

    for edge in incoming:
        source = nodes_by_id.get(edge.source)
        if source is None:
            continue
        to_prompt = edge.target_handle == PROMPT_HANDLE
        to_image = image_handle_index(edge.target_handle) is not None

        if isinstance(source, TextNode):
            if to_prompt and source.data.content:
                collected.prompt_text = source.data.content

        elif isinstance(source, ImageNode):
            if not to_image:
                continue
            if source.data.image_base64:
                collected.images.append(source.data.image_base64)
            elif source.data.image_url:
                inline = await (fetcher or ImageFetcher()).to_inline(source.data.image_url)
                if inline:
                    collected.images.append(inline)
                else:
                    logger.warning("Skipping image from node %s: could not inline it", source.id)

        elif isinstance(source, GeneratorNode):
            if to_prompt and edge.source_handle == OUTPUT_HANDLE and source.data.response:
                collected.prompt_text = source.data.response
            elif to_image and edge.source_handle == IMAGE_OUTPUT_HANDLE and source.data.generated_image:
                collected.images.append(source.data.generated_image)

    return collected
