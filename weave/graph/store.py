"""The graph store: sole owner of a workflow's nodes and edges.

Every structural action goes through one of the public methods below. Each
internal commit states explicitly whether it records an undo entry; data
edits (keystrokes, run results) never do, discrete structural actions do.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Literal

from weave.graph.handles import connection_rejection
from weave.graph.history import DEFAULT_HISTORY_LIMIT, History, HistoryEntry
from weave.models.changes import (
    EdgeRemoveChange,
    EdgeSelectChange,
    NodePositionChange,
    NodeRemoveChange,
    NodeSelectChange,
)
from weave.models.graph import (
    MAX_IMAGE_INPUTS,
    Connection,
    Edge,
    GeneratorNode,
    ImageNode,
    NodeKind,
    Position,
    TextNode,
    create_node,
)
from weave.models.workflow import DEFAULT_WORKFLOW_NAME, WorkflowDocument
from weave.utils.identifiers import (
    generate_edge_id,
    generate_node_id,
    generate_workflow_id,
    utc_timestamp,
)

logger = logging.getLogger(__name__)

AnyNode = TextNode | ImageNode | GeneratorNode
Listener = Callable[["GraphStore"], None]


class GraphStore:
    """In-memory workflow graph with connection rules and undo/redo."""

    def __init__(
        self,
        nodes: Iterable[AnyNode] = (),
        edges: Iterable[Edge] = (),
        workflow_id: str = "",
        workflow_name: str = DEFAULT_WORKFLOW_NAME,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self.workflow_id = workflow_id
        self.workflow_name = workflow_name
        self._nodes: list[AnyNode] = list(nodes)
        self._edges: list[Edge] = list(edges)
        self._history = History(limit=history_limit)
        self._listeners: list[Listener] = []

    # --- Reading ---

    @property
    def nodes(self) -> list[AnyNode]:
        return list(self._nodes)

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    @property
    def history(self) -> History:
        return self._history

    def get_node(self, node_id: str) -> AnyNode | None:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def snapshot(self) -> HistoryEntry:
        """A deep copy of the current graph."""
        return HistoryEntry.capture(self._nodes, self._edges)

    def is_generating(self) -> bool:
        """True while any generator node has a run in flight."""
        return any(
            isinstance(node, GeneratorNode) and node.data.is_loading
            for node in self._nodes
        )

    # --- Change notification ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(store)`` after every committed change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _commit(
        self,
        *,
        record: bool,
        nodes: list[AnyNode] | None = None,
        edges: list[Edge] | None = None,
    ) -> None:
        """Swap in new collections, optionally recording the prior state first."""
        if record:
            self._history.push(self.snapshot())
        if nodes is not None:
            self._nodes = nodes
        if edges is not None:
            self._edges = edges
        self._notify()

    # --- Batched structural changes ---

    def apply_node_changes(
        self,
        changes: Iterable[NodePositionChange | NodeSelectChange | NodeRemoveChange],
    ) -> None:
        """Apply a batch of move/select/remove changes in one commit.

        Changes naming unknown nodes are dropped. Removing a node also removes
        its edges, and a batch that removes anything is undoable as one step.
        """
        by_id = {node.id: node for node in self._nodes}
        order = [node.id for node in self._nodes]
        removed: set[str] = set()

        for change in changes:
            node = by_id.get(change.id)
            if node is None or change.id in removed:
                logger.debug("Dropping %s change for unknown node %s", change.type, change.id)
                continue
            if isinstance(change, NodePositionChange):
                by_id[change.id] = node.model_copy(update={"position": change.position})
            elif isinstance(change, NodeSelectChange):
                by_id[change.id] = node.model_copy(update={"selected": change.selected})
            elif isinstance(change, NodeRemoveChange):
                removed.add(change.id)

        nodes = [by_id[node_id] for node_id in order if node_id not in removed]
        edges = None
        if removed:
            edges = [
                edge for edge in self._edges
                if edge.source not in removed and edge.target not in removed
            ]
        self._commit(record=bool(removed), nodes=nodes, edges=edges)

    def apply_edge_changes(
        self,
        changes: Iterable[EdgeSelectChange | EdgeRemoveChange],
    ) -> None:
        """Apply a batch of select/remove edge changes in one commit."""
        by_id = {edge.id: edge for edge in self._edges}
        order = [edge.id for edge in self._edges]
        removed: set[str] = set()

        for change in changes:
            edge = by_id.get(change.id)
            if edge is None or change.id in removed:
                logger.debug("Dropping %s change for unknown edge %s", change.type, change.id)
                continue
            if isinstance(change, EdgeSelectChange):
                by_id[change.id] = edge.model_copy(update={"selected": change.selected})
            elif isinstance(change, EdgeRemoveChange):
                removed.add(change.id)

        edges = [by_id[edge_id] for edge_id in order if edge_id not in removed]
        self._commit(record=bool(removed), edges=edges)

    # --- Discrete actions ---

    def connect(self, connection: Connection) -> Edge | None:
        """Add an edge if the connection rules allow it.

        Disallowed connections are rejected silently and return None.
        """
        nodes_by_id = {node.id: node for node in self._nodes}
        reason = connection_rejection(nodes_by_id, self._edges, connection)
        if reason:
            logger.debug(
                "Rejected connection %s:%s -> %s:%s (%s)",
                connection.source,
                connection.source_handle,
                connection.target,
                connection.target_handle,
                reason,
            )
            return None

        edge = Edge(id=generate_edge_id(), **connection.model_dump())
        self._commit(record=True, edges=self._edges + [edge])
        return edge

    def add_node(self, kind: NodeKind | str, position: Position | dict | None = None) -> AnyNode:
        node = create_node(kind, generate_node_id(), position)
        self._commit(record=True, nodes=self._nodes + [node])
        return node

    def update_node_data(self, node_id: str, partial: dict) -> AnyNode | None:
        """Shallow-merge ``partial`` (snake_case keys) into a node's data.

        Not undoable: this is the path for high-frequency edits.
        """
        node = self.get_node(node_id)
        if node is None:
            return None
        data_cls = type(node.data)
        data = data_cls.model_validate({**node.data.model_dump(), **partial})
        updated = node.model_copy(update={"data": data})
        self._commit(
            record=False,
            nodes=[updated if n.id == node_id else n for n in self._nodes],
        )
        return updated

    def add_image_input(self, node_id: str) -> bool:
        """Give a generator node one more image input handle, up to the maximum."""
        node = self.get_node(node_id)
        if not isinstance(node, GeneratorNode):
            return False
        if node.data.image_input_count >= MAX_IMAGE_INPUTS:
            return False
        self.update_node_data(node_id, {"image_input_count": node.data.image_input_count + 1})
        return True

    def delete_node(self, node_id: str) -> bool:
        """Remove a node and every edge touching it."""
        if self.get_node(node_id) is None:
            return False
        self._commit(
            record=True,
            nodes=[node for node in self._nodes if node.id != node_id],
            edges=[
                edge for edge in self._edges
                if edge.source != node_id and edge.target != node_id
            ],
        )
        return True

    def delete_edge_by_handle(
        self,
        node_id: str,
        handle_id: str | None,
        handle_type: Literal["source", "target"],
    ) -> Edge | None:
        """Remove the edge attached to a node's handle, if there is one."""
        for edge in self._edges:
            if handle_type == "target":
                matches = edge.target == node_id and edge.target_handle == handle_id
            else:
                matches = edge.source == node_id and edge.source_handle == handle_id
            if matches:
                self._commit(
                    record=True,
                    edges=[e for e in self._edges if e.id != edge.id],
                )
                return edge
        return None

    # --- Undo / redo ---

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def undo(self) -> bool:
        entry = self._history.undo(self.snapshot())
        if entry is None:
            return False
        nodes, edges = entry.restore()
        nodes = self._with_live_loading(nodes)
        self._commit(record=False, nodes=nodes, edges=edges)
        return True

    def redo(self) -> bool:
        entry = self._history.redo(self.snapshot())
        if entry is None:
            return False
        nodes, edges = entry.restore()
        nodes = self._with_live_loading(nodes)
        self._commit(record=False, nodes=nodes, edges=edges)
        return True

    def _with_live_loading(self, nodes: list[AnyNode]) -> list[AnyNode]:
        """Carry the live run state of each generator into restored nodes.

        A run in flight belongs to the present, not to the snapshot it was
        captured in.
        """
        loading = {
            node.id: node.data.is_loading
            for node in self._nodes
            if isinstance(node, GeneratorNode)
        }
        restored = []
        for node in nodes:
            if isinstance(node, GeneratorNode):
                is_loading = loading.get(node.id, False)
                if node.data.is_loading != is_loading:
                    node = node.model_copy(update={"data": node.data.model_copy(update={"is_loading": is_loading})})
            restored.append(node)
        return restored

    # --- Whole-graph replacement ---

    def replace(
        self,
        nodes: Iterable[AnyNode],
        edges: Iterable[Edge],
        workflow_id: str | None = None,
        workflow_name: str | None = None,
    ) -> None:
        """Bulk replace the graph (load/import). History starts over."""
        if workflow_id is not None:
            self.workflow_id = workflow_id
        if workflow_name is not None:
            self.workflow_name = workflow_name
        self._history.clear()
        self._commit(record=False, nodes=list(nodes), edges=list(edges))

    def set_workflow_name(self, name: str) -> None:
        self.workflow_name = name
        self._notify()

    def create_new_workflow(self) -> None:
        self.replace([], [], workflow_id=generate_workflow_id(), workflow_name=DEFAULT_WORKFLOW_NAME)

    def reset(self) -> None:
        self.replace([], [], workflow_id="", workflow_name="")

    def load_sample_workflow(self) -> None:
        from weave.graph.samples import product_listing_sample

        document = product_listing_sample()
        self.replace(document.nodes, document.edges, document.id, document.name)

    def to_document(self) -> WorkflowDocument:
        now = utc_timestamp()
        return WorkflowDocument(
            id=self.workflow_id,
            name=self.workflow_name,
            nodes=self.nodes,
            edges=self.edges,
            created_at=now,
            updated_at=now,
        )

    def export_workflow(self) -> str:
        """Serialize the graph as a pretty-printed JSON document."""
        return self.to_document().model_dump_json(by_alias=True, indent=2)

    def import_workflow(self, json_text: str) -> WorkflowDocument:
        """Replace the graph with an exported document.

        Raises pydantic.ValidationError if the document is malformed.
        """
        document = WorkflowDocument.model_validate_json(json_text)
        self.replace(document.nodes, document.edges, document.id, document.name)
        return document
