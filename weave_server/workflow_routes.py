"""API routes for workflow documents."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from weave.models.workflow import Workflow, WorkflowCreate, WorkflowUpdate
from weave_server.identity import get_owner_id
from weave_server.workflow_db import (
    create_workflow as db_create_workflow,
    delete_workflow as db_delete_workflow,
    get_workflow as db_get_workflow,
    list_workflows as db_list_workflows,
    update_workflow as db_update_workflow,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/workflows")
def list_workflows(owner_id: str = Depends(get_owner_id)) -> list[Workflow]:
    """list the caller's workflows, most recently updated first."""
    return db_list_workflows(owner_id)


@router.post("/workflows")
def create_workflow(request: WorkflowCreate, owner_id: str = Depends(get_owner_id)) -> Workflow:
    """create a workflow owned by the caller."""
    workflow = db_create_workflow(owner_id, request.name or "Untitled Workflow", request.nodes, request.edges)
    logger.info("Created workflow %s", workflow.id)
    return workflow


@router.get("/workflows/{workflow_id}")
def get_workflow(workflow_id: str, owner_id: str = Depends(get_owner_id)) -> Workflow:
    workflow = db_get_workflow(workflow_id, owner_id)
    if not workflow:
        raise HTTPException(status_code=404, detail="Workflow not found")
    return workflow


@router.put("/workflows/{workflow_id}")
def update_workflow(
    workflow_id: str,
    request: WorkflowUpdate,
    owner_id: str = Depends(get_owner_id),
) -> Workflow:
    """update name, nodes and/or edges. Omitted fields keep their stored value."""
    workflow = db_update_workflow(workflow_id, owner_id, request)
    if not workflow:
        raise HTTPException(status_code=404, detail="Workflow not found")
    return workflow


@router.delete("/workflows/{workflow_id}")
def delete_workflow(workflow_id: str, owner_id: str = Depends(get_owner_id)) -> dict:
    if not db_delete_workflow(workflow_id, owner_id):
        raise HTTPException(status_code=404, detail="Workflow not found")
    logger.info("Deleted workflow %s", workflow_id)
    return {"deleted": workflow_id}
