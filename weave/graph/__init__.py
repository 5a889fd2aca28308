"""Workflow graph engine: store, connection rules, history and node behaviors."""

from weave.graph.handles import (
    IMAGE_OUTPUT_HANDLE,
    OUTPUT_HANDLE,
    PROMPT_HANDLE,
    connection_rejection,
    image_handle,
    source_handles,
    target_handles,
)
from weave.graph.history import History, HistoryEntry
from weave.graph.images import ImageFetcher, attach_image
from weave.graph.inputs import CollectedInputs, collect_inputs
from weave.graph.runner import NodeRunner
from weave.graph.store import GraphStore

__all__ = [
    "IMAGE_OUTPUT_HANDLE",
    "OUTPUT_HANDLE",
    "PROMPT_HANDLE",
    "connection_rejection",
    "image_handle",
    "source_handles",
    "target_handles",
    "History",
    "HistoryEntry",
    "ImageFetcher",
    "attach_image",
    "CollectedInputs",
    "collect_inputs",
    "NodeRunner",
    "GraphStore",
]
