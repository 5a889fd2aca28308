"""Data model for persisted workflow documents.

A workflow document is the whole canvas (nodes and edges) under a name.
The server stores it scoped to its owner.
"""

from pydantic import Field

from weave.models.graph import CamelModel, Edge, WorkflowNode

DEFAULT_WORKFLOW_NAME = "Untitled Workflow"


class WorkflowDocument(CamelModel):
    """The portable form of a workflow, used for export and import."""

    id: str
    name: str = DEFAULT_WORKFLOW_NAME
    nodes: list[WorkflowNode] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    created_at: str
    updated_at: str


class Workflow(WorkflowDocument):
    """A workflow as stored by the server."""

    owner_id: str


class WorkflowCreate(CamelModel):
    """Request model for creating a workflow."""

    name: str = DEFAULT_WORKFLOW_NAME
    nodes: list[WorkflowNode] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)


class WorkflowUpdate(CamelModel):
    """Request model for updating a workflow. Omitted fields are left alone."""

    name: str | None = None
    nodes: list[WorkflowNode] | None = None
    edges: list[Edge] | None = None
