"""nodeweave - node-based workflows of AI text and image generation."""

from weave.models.generation import (
    GenerationRequest,
    GenerationResult,
    Intent,
)
from weave.models.graph import (
    Connection,
    Edge,
    GeneratorNode,
    ImageNode,
    NodeKind,
    Position,
    TextNode,
)
from weave.models.workflow import (
    Workflow,
    WorkflowCreate,
    WorkflowDocument,
    WorkflowUpdate,
)
from weave.graph.store import GraphStore
from weave.graph.runner import NodeRunner
from weave.generation.orchestrator import Orchestrator, build_orchestrator
from weave.persistence.autosave import AutoSaver
from weave.sdk.client import WeaveClient

__all__ = [
    # Graph model
    "Connection",
    "Edge",
    "GeneratorNode",
    "ImageNode",
    "NodeKind",
    "Position",
    "TextNode",
    # Documents
    "Workflow",
    "WorkflowCreate",
    "WorkflowDocument",
    "WorkflowUpdate",
    # Generation
    "GenerationRequest",
    "GenerationResult",
    "Intent",
    # High-level APIs
    "GraphStore",
    "NodeRunner",
    "Orchestrator",
    "build_orchestrator",
    "AutoSaver",
    "WeaveClient",
]
