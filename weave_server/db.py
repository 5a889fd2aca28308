"""database initialization helpers."""

from weave_server.workflow_db import init_db as init_workflow_db


def init_all() -> None:
    """initialize all sqlite tables."""
    init_workflow_db()
