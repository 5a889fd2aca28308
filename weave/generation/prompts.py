"""Fixed instructions and phrase lists used by the generation pipeline."""

INTENT_SYSTEM_PROMPT = """You are an intent classifier. Analyze the user's prompt and determine what type of output they need.

Reply with ONLY one of these exact words:
- "text_only" - for questions, explanations, analysis, writing tasks, descriptions
- "image_only" - for generating/creating/drawing NEW images
- "both" - when user wants BOTH text response AND a new image generated

Key indicators for IMAGE generation:
- "generate image", "create image", "draw", "make image", "give me image"
- "make it look", "modify this", "new version", "recreate", "redesign"
- "give me a new image", "new image", "another image", "different image"
- "make this more realistic", "stylize", "transform"

Examples:
- "What is this?" -> text_only
- "Describe this image" -> text_only
- "Generate an image of sunset" -> image_only
- "Draw me a logo" -> image_only
- "Make this image more realistic" -> image_only
- "Give me a new image of this" -> image_only
- "Make it look better and give me new image" -> image_only
- "Explain this and create a new version" -> both
- "Describe and illustrate the water cycle" -> both"""

# Substrings that force an image when the classifier says text only.
IMAGE_KEYWORDS = (
    "new image",
    "generate image",
    "create image",
    "make image",
    "draw",
    "give me image",
    "give me a image",
    "another image",
    "new version",
    "generate a",
    "create a",
    "make a new",
)

# Appended to the system prompt when text and image are produced together.
BOTH_SYSTEM_CLAUSE = (
    "CRITICAL INSTRUCTION: A separate AI system handles ALL image generation and editing. "
    "You MUST NOT: 1) Say you cannot create/generate/edit/modify images "
    "2) Suggest using other software like Photoshop or GIMP "
    "3) Apologize about image capabilities. "
    "Just provide the text content requested and assume images are handled."
)

DESCRIPTION_SYSTEM_PROMPT = (
    "You are an image description expert for image generation. Describe visual elements "
    "like style, colors, lighting, composition WITHOUT naming specific characters or "
    "copyrighted content. Focus on artistic qualities. Output a prompt suitable for "
    "generating a similar style image."
)

DESCRIPTION_USER_TEMPLATE = (
    "Analyze the visual style and composition of this image. Then create a prompt to "
    'generate a new version based on: "{prompt}". Do not mention any copyrighted character names.'
)

REFUSAL_PHRASES = (
    "i can't help",
    "i cannot help",
    "sorry",
    "i'm unable",
    "i am unable",
    "cannot assist",
)

REFUSAL_FALLBACK_TEMPLATE = "A detailed, realistic digital artwork. {prompt}. High quality, professional art style."
DESCRIPTION_FAILED_TEMPLATE = "A detailed digital artwork. {prompt}. High quality art."

IMAGE_ONLY_CONTENT = "Image generated successfully!"
IMAGE_FAILED_ERROR = "Image generation failed. Please check CLIPDROP_API_KEY configuration."


def with_both_clause(system_prompt: str | None) -> str:
    return f"{system_prompt or ''}\n\n{BOTH_SYSTEM_CLAUSE}"


def is_refusal(text: str) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in REFUSAL_PHRASES)
