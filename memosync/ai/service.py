"""Summary, tag and weekly-digest generation backed by language models.

Every backend degrades to empty output instead of raising: an empty string or
an empty list means "nothing generated", never an error the caller must handle.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Literal

import httpx
from loguru import logger

AIModelType = Literal["openai", "gemini", "claude", "ollama"]


@dataclass(frozen=True)
class GeminiModel:
    """A Gemini model the user can pick."""

    name: str
    display_name: str
    description: str


GEMINI_MODELS: list[GeminiModel] = [
    GeminiModel("gemini-1.5-flash", "Gemini 1.5 Flash", "Fast, versatile performance across many tasks"),
    GeminiModel("gemini-1.5-flash-8b", "Gemini 1.5 Flash-8B", "High-volume, lower-intelligence tasks"),
    GeminiModel("gemini-1.5-pro", "Gemini 1.5 Pro", "Complex reasoning tasks that need more intelligence"),
    GeminiModel("gemini-1.0-pro", "Gemini 1.0 Pro", "Natural language tasks, multi-turn text and code chat"),
]

DIGEST_SEPARATOR = "\n---\n"

SUMMARY_PROMPT = "Summarize the following content concisely in {language} (under 100 words):\n\n{content}"

TAGS_PROMPT = (
    "Generate 3-5 relevant tags for the following content. "
    "Reply with English tags only, without '#', separated by commas:\n\n{content}"
)

DIGEST_PROMPT = """Summarize the following notes as a warm, positive and insightful weekly review in markdown.
1. Describe this week's main activities and thoughts in short, vivid language
2. Point out patterns and insights in the content
3. Highlight important achievements and progress
4. Suggest possible improvements
5. Stay positive but objective

Format:
- Use markdown
- Use emoji where it helps readability
- Use bullet points with a clear hierarchy
- Write warmly, like sharing with a friend

Notes:
{content}"""


class AIService(ABC):
    """Capability set shared by all language-model backends."""

    def __init__(self, api_key: str, model_name: str):
        self.api_key = api_key
        self.model_name = model_name

    @abstractmethod
    async def generate_summary(self, content: str, language: str) -> str:
        """Short summary of ``content`` in ``language``; "" if unavailable."""
        ...

    @abstractmethod
    async def generate_tags(self, content: str) -> list[str]:
        """A handful of short labels for ``content``; [] if unavailable."""
        ...

    @abstractmethod
    async def generate_weekly_digest(self, contents: list[str]) -> str:
        """Multi-section markdown review of several notes; "" if unavailable."""
        ...


class GeminiService(AIService):
    """Google Gemini through the ``generateContent`` REST endpoint."""

    API_BASE = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(api_key, model_name)
        self.timeout = timeout
        self.transport = transport

    async def generate_summary(self, content: str, language: str) -> str:
        try:
            return await self._generate(SUMMARY_PROMPT.format(language=language, content=content))
        except Exception as e:
            logger.error(f"Failed to generate summary: {e}")
            return ""

    async def generate_tags(self, content: str) -> list[str]:
        try:
            text = await self._generate(TAGS_PROMPT.format(content=content))
        except Exception as e:
            logger.error(f"Failed to generate tags: {e}")
            return []
        tags = [tag.strip().lstrip("#").strip() for tag in text.split(",")]
        return [tag for tag in tags if tag]

    async def generate_weekly_digest(self, contents: list[str]) -> str:
        try:
            return await self._generate(DIGEST_PROMPT.format(content=DIGEST_SEPARATOR.join(contents)))
        except Exception as e:
            logger.error(f"Failed to generate weekly digest: {e}")
            return ""

    async def _generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ValueError("Gemini API key not configured")

        url = f"{self.API_BASE}/models/{self.model_name}:generateContent"
        body = {"contents": [{"parts": [{"text": prompt}]}]}

        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            response = await client.post(url, params={"key": self.api_key}, json=body)
            response.raise_for_status()
            data = response.json()

        return self._extract_text(data)

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(part.get("text", "") for part in parts).strip()


class _NotImplementedService(AIService):
    """Backend that is selectable but not built yet; always returns empty output."""

    backend = ""

    async def generate_summary(self, content: str, language: str) -> str:
        logger.debug(f"{self.backend} summary generation is not implemented")
        return ""

    async def generate_tags(self, content: str) -> list[str]:
        logger.debug(f"{self.backend} tag generation is not implemented")
        return []

    async def generate_weekly_digest(self, contents: list[str]) -> str:
        logger.debug(f"{self.backend} weekly digest is not implemented")
        return ""


class OpenAIService(_NotImplementedService):
    backend = "openai"


class ClaudeService(_NotImplementedService):
    backend = "claude"


class OllamaService(_NotImplementedService):
    backend = "ollama"


class DummyAIService(_NotImplementedService):
    """Used when no backend is configured at all."""

    backend = "dummy"

    def __init__(self):
        super().__init__(api_key="", model_name="")


_BACKENDS: dict[str, type[AIService]] = {
    "openai": OpenAIService,
    "gemini": GeminiService,
    "claude": ClaudeService,
    "ollama": OllamaService,
}


def create_ai_service(model_type: str, api_key: str, model_name: str) -> AIService:
    """
    Create an AI service for the given backend.

    Args:
        model_type: One of "openai", "gemini", "claude", "ollama".
        api_key: Credential for the backend.
        model_name: Backend-specific model id.

    Raises:
        ValueError: If ``model_type`` is unknown.
    """
    backend = _BACKENDS.get(model_type)
    if backend is None:
        raise ValueError(f"Unsupported AI model type: {model_type}")
    return backend(api_key, model_name)


def create_dummy_ai_service() -> AIService:
    """AI service that generates nothing."""
    return DummyAIService()
