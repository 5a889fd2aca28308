"""Core data models for weave."""

from weave.models.changes import (
    EdgeChange,
    EdgeRemoveChange,
    EdgeSelectChange,
    NodeChange,
    NodePositionChange,
    NodeRemoveChange,
    NodeSelectChange,
    parse_edge_changes,
    parse_node_changes,
)
from weave.models.generation import (
    GenerationRequest,
    GenerationResult,
    Intent,
    validation_messages,
)
from weave.models.graph import (
    MAX_IMAGE_INPUTS,
    Connection,
    Edge,
    GeneratorNode,
    GeneratorNodeData,
    ImageNode,
    ImageNodeData,
    NodeKind,
    Position,
    TextNode,
    TextNodeData,
    WorkflowNode,
    create_node,
    node_kind,
)
from weave.models.workflow import (
    DEFAULT_WORKFLOW_NAME,
    Workflow,
    WorkflowCreate,
    WorkflowDocument,
    WorkflowUpdate,
)

__all__ = [
    # Graph
    "MAX_IMAGE_INPUTS",
    "Connection",
    "Edge",
    "GeneratorNode",
    "GeneratorNodeData",
    "ImageNode",
    "ImageNodeData",
    "NodeKind",
    "Position",
    "TextNode",
    "TextNodeData",
    "WorkflowNode",
    "create_node",
    "node_kind",
    # Changes
    "EdgeChange",
    "EdgeRemoveChange",
    "EdgeSelectChange",
    "NodeChange",
    "NodePositionChange",
    "NodeRemoveChange",
    "NodeSelectChange",
    "parse_edge_changes",
    "parse_node_changes",
    # Documents
    "DEFAULT_WORKFLOW_NAME",
    "Workflow",
    "WorkflowCreate",
    "WorkflowDocument",
    "WorkflowUpdate",
    # Generation
    "GenerationRequest",
    "GenerationResult",
    "Intent",
    "validation_messages",
]
