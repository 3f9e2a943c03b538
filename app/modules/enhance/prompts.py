SYSTEM_PROMPT = (
    "You are a helpful assistant that enhances text quality. "
    "Always respond with improved text only, without explanations or meta-commentary."
)

DEFAULT_ENHANCEMENT_TYPE = "general"

ENHANCEMENT_PROMPTS = {
    "general": (
        "Enhance and improve the following text while maintaining its original meaning. "
        "Make it more clear, engaging, and well-structured:\n\n{text}"
    ),
    "professional": "Rewrite the following text in a professional and business-appropriate tone:\n\n{text}",
    "casual": "Rewrite the following text in a casual and friendly tone:\n\n{text}",
    "concise": "Make the following text more concise while keeping all important information:\n\n{text}",
    "detailed": "Expand and add more detail to the following text:\n\n{text}",
}


def build_prompt(text: str, enhancement_type: str) -> str:
    """Unknown types fall back to the general prompt."""
    template = ENHANCEMENT_PROMPTS.get(enhancement_type, ENHANCEMENT_PROMPTS[DEFAULT_ENHANCEMENT_TYPE])
    return template.format(text=text)
