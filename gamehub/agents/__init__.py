"""
AI components for GameHub Insight backend.

Recommendation system (single-shot LLM):
- Prompt construction: gamehub/agents/recommendation/prompts.py
- Gemini client wrapper: gamehub/agents/recommendation/generator.py
- Orchestration, parsing and persistence: gamehub/services/recommendation_service.py
"""
