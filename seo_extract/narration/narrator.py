"""Claude-powered narrator: turns an analysis request into narrative prose."""

from __future__ import annotations

import logging

from anthropic import Anthropic
from anthropic.types import TextBlock

from seo_extract.config import settings

logger = logging.getLogger(__name__)


def narrate(instruction: str, system_prompt: str) -> str:
    """Ask Claude for a free-form SEO analysis.

    Args:
        instruction: The user-turn request, e.g. an audit of one URL.
        system_prompt: The domain's analyst persona and reporting format.

    Returns:
        The narrative text, all text blocks joined in order.

    Raises:
        ValueError: If the response carries no text block.
    """
    client = Anthropic(api_key=settings.anthropic_api_key)
    response = client.messages.create(
        model=settings.llm_model,
        max_tokens=settings.narrator_max_tokens,
        temperature=settings.narrator_temperature,
        system=system_prompt,
        messages=[{"role": "user", "content": instruction}],
    )

    # We never request tools, so anything but text means a malformed reply.
    texts = [block.text for block in response.content if isinstance(block, TextBlock)]
    if not texts:
        kinds = ", ".join(type(block).__name__ for block in response.content) or "nothing"
        raise ValueError(f"Expected TextBlock from Claude, got {kinds}")

    narrative = "\n".join(texts)
    logger.debug("Narrator returned %d characters (model=%s)", len(narrative), response.model)
    return narrative
