"""ID generation and timestamp utilities."""

import uuid
from datetime import datetime, timezone


def generate_node_id() -> str:
    """Generate a unique node ID."""
    return f"node_{uuid.uuid4().hex}"


def generate_edge_id() -> str:
    """Generate a unique edge ID."""
    return f"edge_{uuid.uuid4().hex}"


def generate_workflow_id() -> str:
    """Generate a unique workflow ID (UUID4)."""
    return str(uuid.uuid4())


def generate_upload_id() -> str:
    """Generate an upload file stem (32-char hex string)."""
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
