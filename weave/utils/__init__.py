"""Utility functions for weave."""

from weave.utils.data_urls import (
    decode_data_url,
    is_data_url,
    is_durable_url,
    split_data_url,
    to_data_url,
)
from weave.utils.identifiers import (
    generate_edge_id,
    generate_node_id,
    generate_upload_id,
    generate_workflow_id,
    utc_timestamp,
)

__all__ = [
    "decode_data_url",
    "is_data_url",
    "is_durable_url",
    "split_data_url",
    "to_data_url",
    "generate_edge_id",
    "generate_node_id",
    "generate_upload_id",
    "generate_workflow_id",
    "utc_timestamp",
]
