"""Data model for the workflow graph.

Nodes are a tagged union keyed on ``type``; each kind carries its own data
payload. Attributes are snake_case in Python and camelCase on the wire, so a
saved document round-trips with the editor unchanged.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_IMAGE_INPUTS = 5


class CamelModel(BaseModel):
    """base model that reads and writes camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


class NodeKind(str, Enum):
    """Kinds of nodes on the canvas."""

    text = "text"
    image = "image"
    generator = "llm"  # wire tag used by saved documents


class Position(CamelModel):
    x: float = 0.0
    y: float = 0.0


class TextNodeData(CamelModel):
    label: str = "Text Input"
    content: str = ""


class ImageNodeData(CamelModel):
    label: str = "Image"
    image_url: str | None = None  # durable reference, or inline bytes as display fallback
    image_base64: str | None = None  # inline bytes sent to providers


class GeneratorNodeData(CamelModel):
    label: str = "LLM"
    model: str = "gpt-4o"
    system_prompt: str = ""
    user_prompt: str = ""
    response: str | None = None
    generated_image: str | None = None

    # transient, never durable
    is_loading: bool = False
    error: str | None = None

    image_input_count: int = Field(default=1, ge=1, le=MAX_IMAGE_INPUTS)


class TextNode(CamelModel):
    id: str
    type: Literal["text"] = "text"
    position: Position = Field(default_factory=Position)
    data: TextNodeData = Field(default_factory=TextNodeData)
    selected: bool = False


class ImageNode(CamelModel):
    id: str
    type: Literal["image"] = "image"
    position: Position = Field(default_factory=Position)
    data: ImageNodeData = Field(default_factory=ImageNodeData)
    selected: bool = False


class GeneratorNode(CamelModel):
    id: str
    type: Literal["llm"] = "llm"
    position: Position = Field(default_factory=Position)
    data: GeneratorNodeData = Field(default_factory=GeneratorNodeData)
    selected: bool = False


WorkflowNode = Annotated[
    Union[TextNode, ImageNode, GeneratorNode],
    Field(discriminator="type"),
]

NODE_CLASSES: dict[NodeKind, type[TextNode] | type[ImageNode] | type[GeneratorNode]] = {
    NodeKind.text: TextNode,
    NodeKind.image: ImageNode,
    NodeKind.generator: GeneratorNode,
}


def node_kind(node: TextNode | ImageNode | GeneratorNode) -> NodeKind:
    return NodeKind(node.type)


def create_node(
    kind: NodeKind | str,
    node_id: str,
    position: Position | dict | None = None,
) -> TextNode | ImageNode | GeneratorNode:
    """Create a node of the given kind with its default payload."""
    node_cls = NODE_CLASSES[NodeKind(kind)]
    if isinstance(position, dict):
        position = Position.model_validate(position)
    return node_cls(id=node_id, position=position or Position())


class Connection(CamelModel):
    """a candidate edge, before it has been accepted and given an id."""

    source: str
    target: str
    source_handle: str | None = None
    target_handle: str | None = None


class Edge(Connection):
    """a directed, handle-qualified connection between two nodes."""

    id: str
    selected: bool = False
