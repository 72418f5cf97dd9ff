"""
Recommendation System - Single-shot LLM over the game catalog

Gemini receives the catalog as [id, title] pairs plus the user's recent
favorite titles and answers with a bare JSON array of game ids.

The service layer is in:
- gamehub/services/recommendation_service.py
"""

from gamehub.agents.recommendation.generator import (
    GeminiTextGenerator,
    TextGenerator,
    get_text_generator,
)
from gamehub.agents.recommendation.prompts import (
    MAX_FAVORITES_IN_PROMPT,
    build_prompt_summary,
    build_recommendation_prompt,
)

__all__ = [
    "GeminiTextGenerator",
    "TextGenerator",
    "get_text_generator",
    "MAX_FAVORITES_IN_PROMPT",
    "build_prompt_summary",
    "build_recommendation_prompt",
]
