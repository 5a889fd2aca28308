"""Running a generator node: collect inputs, call generation, write results back."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Awaitable, Callable

from weave.graph.images import ImageFetcher
from weave.graph.inputs import collect_inputs
from weave.graph.store import GraphStore
from weave.models.generation import GenerationRequest, GenerationResult
from weave.models.graph import GeneratorNode

logger = logging.getLogger(__name__)

MISSING_PROMPT_ERROR = "Please connect a Prompt input or enter a system prompt"

GenerateFn = Callable[[GenerationRequest], Awaitable[GenerationResult]]


class NodeRunner:
    """Runs generator nodes against a generation backend.

    Runs on different nodes proceed independently. Every run is numbered per
    node; when a run finishes after a newer run on the same node has started,
    its result is dropped instead of overwriting the newer one.
    """

    def __init__(
        self,
        store: GraphStore,
        generate: GenerateFn,
        fetcher: ImageFetcher | None = None,
    ) -> None:
        self.store = store
        self.generate = generate
        self.fetcher = fetcher or ImageFetcher()
        self._issued: dict[str, int] = defaultdict(int)

    def _is_latest(self, node_id: str, sequence: int) -> bool:
        return self._issued[node_id] == sequence

    def _apply(self, node_id: str, sequence: int, partial: dict) -> bool:
        if not self._is_latest(node_id, sequence):
            logger.info("Discarding stale result for node %s (run %d)", node_id, sequence)
            return False
        self.store.update_node_data(node_id, partial)
        return True

    async def run(self, node_id: str) -> GenerationResult | None:
        """Run one generator node and store its response on the node.

        Returns the generation result, or None when the run did not reach the
        generation backend (no prompt).
        """
        node = self.store.get_node(node_id)
        if not isinstance(node, GeneratorNode):
            raise ValueError(f"Node {node_id} is not a generator node")

        self._issued[node_id] += 1
        sequence = self._issued[node_id]
        self.store.update_node_data(
            node_id,
            {"is_loading": True, "error": None, "response": None, "generated_image": None},
        )

        try:
            inputs = await collect_inputs(self.store.nodes, self.store.edges, node_id, self.fetcher)

            # connected text first, then the node's own prompts
            user_prompt = inputs.prompt_text or node.data.user_prompt or node.data.system_prompt
            if not user_prompt:
                self._apply(node_id, sequence, {"error": MISSING_PROMPT_ERROR, "is_loading": False})
                return None

            request = GenerationRequest(
                model=node.data.model or "gpt-4o",
                system_prompt=node.data.system_prompt or None,
                user_prompt=user_prompt,
                images=inputs.images or None,
            )
            result = await self.generate(request)
        except Exception as e:
            logger.exception("Run %d of node %s failed", sequence, node_id)
            self._apply(node_id, sequence, {"error": str(e) or "An error occurred", "is_loading": False})
            raise

        if result.success:
            self._apply(
                node_id,
                sequence,
                {"response": result.content, "generated_image": result.image, "is_loading": False},
            )
        else:
            self._apply(node_id, sequence, {"error": result.error, "is_loading": False})
        return result
