"""Sample workflows bundled with the editor."""

from weave.models.graph import (
    Edge,
    GeneratorNode,
    GeneratorNodeData,
    ImageNode,
    ImageNodeData,
    Position,
    TextNode,
    TextNodeData,
)
from weave.models.workflow import WorkflowDocument
from weave.utils.identifiers import utc_timestamp


def _writer(node_id: str, x: float, y: float, label: str, system_prompt: str, user_prompt: str) -> GeneratorNode:
    return GeneratorNode(
        id=node_id,
        position=Position(x=x, y=y),
        data=GeneratorNodeData(label=label, system_prompt=system_prompt, user_prompt=user_prompt),
    )


def product_listing_sample() -> WorkflowDocument:
    """A product photo and spec sheet analysed once, then fanned out to three copywriters."""
    nodes = [
        ImageNode(
            id="img_product",
            position=Position(x=50, y=150),
            data=ImageNodeData(label="Product Photo"),
        ),
        TextNode(
            id="text_specs",
            position=Position(x=50, y=400),
            data=TextNodeData(
                label="Product Name & Specs",
                content=(
                    "Gentle hydrating face wash cleanser with niacinamide and vitamin B5, "
                    "paraben and sulphate free, for dry to normal sensitive skin - 125ml"
                ),
            ),
        ),
        _writer(
            "llm_analyze", 450, 200, "Analyze Product",
            "You are a product analyst. Analyze the product image and specifications provided.",
            "Analyze this product and provide key selling points and target audience.",
        ),
        _writer(
            "llm_instagram", 900, 50, "Write Instagram Caption",
            "Write Instagram caption for the described product.",
            "Create an engaging Instagram caption for this product with relevant hashtags.",
        ),
        _writer(
            "llm_seo", 900, 320, "Write SEO Meta Description",
            "Write SEO meta description for the described product.",
            "Write an SEO-optimized meta description (under 160 characters) for this product.",
        ),
        _writer(
            "llm_amazon", 900, 590, "Write Amazon Listing",
            "Write Amazon listing for the following described product.",
            "Based on the product analysis, write a compelling Amazon product listing "
            "with title, bullet points, and description.",
        ),
    ]
    edges = [
        Edge(id="e1", source="img_product", target="llm_analyze", target_handle="image-0"),
        Edge(id="e2", source="text_specs", target="llm_analyze", target_handle="prompt"),
        Edge(id="e3", source="llm_analyze", source_handle="output", target="llm_amazon", target_handle="prompt"),
        Edge(id="e4", source="llm_analyze", source_handle="output", target="llm_instagram", target_handle="prompt"),
        Edge(id="e5", source="llm_analyze", source_handle="output", target="llm_seo", target_handle="prompt"),
    ]
    now = utc_timestamp()
    return WorkflowDocument(
        id="sample_product_listing",
        name="Product Listing Generator",
        nodes=nodes,
        edges=edges,
        created_at=now,
        updated_at=now,
    )
