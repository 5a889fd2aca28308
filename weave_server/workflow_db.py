"""SQLite storage for workflow documents.

Every query is scoped by owner. A workflow that belongs to someone else is
indistinguishable from one that does not exist.
"""

import os
import sqlite3
from pathlib import Path

from weave.models.graph import Edge
from weave.models.workflow import Workflow, WorkflowUpdate
from weave.utils.identifiers import generate_workflow_id, utc_timestamp

DEFAULT_DB_PATH = Path(__file__).parent / "data" / "nodeweave.db"
WORKFLOW_DB_PATH = Path(os.getenv("WEAVE_DB_PATH", str(DEFAULT_DB_PATH)))


def _connect() -> sqlite3.Connection:
    WORKFLOW_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(WORKFLOW_DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def init_db() -> None:
    with _connect() as conn:
        conn.execute(
            """
            create table if not exists workflows (
                workflow_id text primary key,
                owner_id text not null,
                name text not null,
                workflow_json text not null,
                created_at text not null,
                updated_at text not null
            )
            """
        )
        conn.execute(
            "create index if not exists idx_workflows_owner on workflows (owner_id, updated_at)"
        )
        conn.commit()


def _save(conn: sqlite3.Connection, workflow: Workflow) -> None:
    conn.execute(
        """
        insert into workflows (workflow_id, owner_id, name, workflow_json, created_at, updated_at)
        values (?, ?, ?, ?, ?, ?)
        on conflict(workflow_id) do update set
            name = excluded.name,
            workflow_json = excluded.workflow_json,
            updated_at = excluded.updated_at
        """,
        (
            workflow.id,
            workflow.owner_id,
            workflow.name,
            workflow.model_dump_json(),
            workflow.created_at,
            workflow.updated_at,
        ),
    )
    conn.commit()


def list_workflows(owner_id: str) -> list[Workflow]:
    """list an owner's workflows, most recently updated first."""
    with _connect() as conn:
        rows = conn.execute(
            "select workflow_json from workflows where owner_id = ? order by updated_at desc",
            (owner_id,),
        ).fetchall()
    return [Workflow.model_validate_json(row["workflow_json"]) for row in rows]


def get_workflow(workflow_id: str, owner_id: str) -> Workflow | None:
    with _connect() as conn:
        row = conn.execute(
            "select workflow_json from workflows where workflow_id = ? and owner_id = ?",
            (workflow_id, owner_id),
        ).fetchone()
    if not row:
        return None
    return Workflow.model_validate_json(row["workflow_json"])


def create_workflow(owner_id: str, name: str, nodes: list, edges: list[Edge]) -> Workflow:
    now = utc_timestamp()
    workflow = Workflow(
        id=generate_workflow_id(),
        owner_id=owner_id,
        name=name,
        nodes=nodes,
        edges=edges,
        created_at=now,
        updated_at=now,
    )
    with _connect() as conn:
        _save(conn, workflow)
    return workflow


def update_workflow(workflow_id: str, owner_id: str, update: WorkflowUpdate) -> Workflow | None:
    """apply the fields present in ``update``; None if the owner has no such workflow."""
    existing = get_workflow(workflow_id, owner_id)
    if existing is None:
        return None

    changes = {"updated_at": utc_timestamp()}
    if update.name is not None:
        changes["name"] = update.name
    if update.nodes is not None:
        changes["nodes"] = update.nodes
    if update.edges is not None:
        changes["edges"] = update.edges
    workflow = existing.model_copy(update=changes)

    with _connect() as conn:
        _save(conn, workflow)
    return workflow


def delete_workflow(workflow_id: str, owner_id: str) -> bool:
    with _connect() as conn:
        cursor = conn.execute(
            "delete from workflows where workflow_id = ? and owner_id = ?",
            (workflow_id, owner_id),
        )
        conn.commit()
    return cursor.rowcount > 0
