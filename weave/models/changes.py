"""Structural change records applied in batches by the graph store.

These mirror the change events an editor canvas emits while the user drags,
selects and deletes things.
"""

from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from weave.models.graph import CamelModel, Position


class NodePositionChange(CamelModel):
    type: Literal["position"] = "position"
    id: str
    position: Position


class NodeSelectChange(CamelModel):
    type: Literal["select"] = "select"
    id: str
    selected: bool


class NodeRemoveChange(CamelModel):
    type: Literal["remove"] = "remove"
    id: str


class EdgeSelectChange(CamelModel):
    type: Literal["select"] = "select"
    id: str
    selected: bool


class EdgeRemoveChange(CamelModel):
    type: Literal["remove"] = "remove"
    id: str


NodeChange = Annotated[
    Union[NodePositionChange, NodeSelectChange, NodeRemoveChange],
    Field(discriminator="type"),
]

EdgeChange = Annotated[
    Union[EdgeSelectChange, EdgeRemoveChange],
    Field(discriminator="type"),
]

_node_changes_adapter = TypeAdapter(list[NodeChange])
_edge_changes_adapter = TypeAdapter(list[EdgeChange])


def parse_node_changes(raw: list[dict]) -> list[NodePositionChange | NodeSelectChange | NodeRemoveChange]:
    """Validate raw change dicts coming from the canvas."""
    return _node_changes_adapter.validate_python(raw)


def parse_edge_changes(raw: list[dict]) -> list[EdgeSelectChange | EdgeRemoveChange]:
    return _edge_changes_adapter.validate_python(raw)
