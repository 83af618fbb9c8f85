"""Optional language-model helpers for synced memos."""

from memosync.ai.service import (
    GEMINI_MODELS,
    AIService,
    GeminiModel,
    create_ai_service,
    create_dummy_ai_service,
)

__all__ = [
    "GEMINI_MODELS",
    "AIService",
    "GeminiModel",
    "create_ai_service",
    "create_dummy_ai_service",
]
