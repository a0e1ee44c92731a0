"""Tests for plan generation."""
import pytest
from unittest.mock import AsyncMock, patch

import httpx
from openai import APIConnectionError, APITimeoutError

from tripos.models.trip import Language, TripInput
from tripos.services.mock_llm import MockLLMClient
from tripos.services.plan_generator import (
    PlanGenerationError,
    PlanGenerator,
    build_system_prompt,
    build_user_prompt,
)


REQUEST = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")


@pytest.fixture
def generator():
    with patch("tripos.services.plan_generator.get_llm_client", return_value=MockLLMClient()):
        return PlanGenerator()


class TestPrompts:
    """Test prompt construction."""

    def test_system_prompt_language(self):
        """The language instruction follows the base instruction."""
        prompt = build_system_prompt(Language.ZH_TW)
        assert prompt.startswith('You are "Trip OS"')
        assert "TRADITIONAL CHINESE" in prompt

    def test_every_language_has_instructions(self):
        """All supported languages build a prompt."""
        for language in Language:
            assert "IMPORTANT: OUTPUT MUST BE IN" in build_system_prompt(language)

    def test_user_prompt_fields(self):
        """Form fields are listed with their labels."""
        trip = TripInput(destination="Kyoto", dates="4 days", must_dos="Fushimi Inari")
        prompt = build_user_prompt(trip, Language.EN)
        assert "- Destination: Kyoto" in prompt
        assert "- Dates: 4 days" in prompt
        assert "- Must Dos: Fushimi Inari" in prompt
        assert "- Pace: Moderate" in prompt
        assert prompt.endswith("Language Requirement: en")


class TestPlanGenerator:
    """Test generation and its failure modes."""

    @pytest.mark.asyncio
    async def test_mock_plan(self, generator):
        """The mock provider answers with a plan for the destination."""
        plan = await generator.generate(TripInput(destination="Lisbon"), Language.EN)
        assert plan.markdown.startswith("# Lisbon Itinerary")
        assert plan.sources == []

    @pytest.mark.asyncio
    async def test_empty_answer(self, generator):
        """Blank content is an error."""
        generator.llm = AsyncMock()
        generator.llm.chat.return_value = "   "
        with pytest.raises(PlanGenerationError, match="No content"):
            await generator.generate(TripInput(destination="Lisbon"))

    @pytest.mark.asyncio
    async def test_timeout(self, generator):
        """Provider timeouts get a retry-later message."""
        generator.llm = AsyncMock()
        generator.llm.chat.side_effect = APITimeoutError(request=REQUEST)
        with pytest.raises(PlanGenerationError, match="timed out"):
            await generator.generate(TripInput(destination="Lisbon"))

    @pytest.mark.asyncio
    async def test_provider_error(self, generator):
        """Other provider errors are wrapped."""
        generator.llm = AsyncMock()
        generator.llm.chat.side_effect = APIConnectionError(request=REQUEST)
        with pytest.raises(PlanGenerationError, match="LLM provider error"):
            await generator.generate(TripInput(destination="Lisbon"))
