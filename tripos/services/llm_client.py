"""
LLM Client - Unified interface for OpenAI-compatible providers.
Supports OpenRouter, OpenAI and Ollama, plus an offline mock.
"""
from openai import AsyncOpenAI
from typing import Optional
import logging

from ..config import get_llm_config, settings

logger = logging.getLogger(__name__)

# Sent to OpenRouter for app attribution; ignored by other providers
OPENROUTER_HEADERS = {
    "HTTP-Referer": settings.public_base_url,
    "X-Title": "Trip OS - AI Travel Planner",
}


class LLMClient:
    """Async LLM client with OpenAI-compatible API."""

    def __init__(self):
        config = get_llm_config()

        # Use mock client if provider is 'mock'
        if settings.llm_provider == "mock":
            from .mock_llm import MockLLMClient
            self._mock = MockLLMClient()
            self.model = self._mock.model
            self.client = None
        else:
            self._mock = None
            self.client = AsyncOpenAI(
                api_key=config["api_key"] or "missing-key",
                base_url=config["base_url"],
                timeout=config["timeout"],
                max_retries=0,
                default_headers=OPENROUTER_HEADERS if settings.llm_provider == "openrouter" else None,
            )
            self.model = config["model"]
        self.temperature = config["temperature"]
        logger.info(f"LLM client ready: provider={settings.llm_provider}, model={self.model}")

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None
    ) -> str:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Override default temperature

        Returns:
            The assistant's response content, empty if the provider sent none
        """
        # Use mock client if available
        if self._mock is not None:
            return await self._mock.chat(messages, temperature)

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature if temperature is not None else self.temperature,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


# Global LLM client instance
llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client."""
    global llm_client
    if llm_client is None:
        llm_client = LLMClient()
    return llm_client
