"""OpenAI coaching client tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from forge_ai.infrastructure.llm.coach_client import CoachModelError, OpenAICoachClient


def make_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


@pytest.fixture
def openai_client() -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def coach(openai_client: MagicMock) -> OpenAICoachClient:
    with patch("forge_ai.infrastructure.llm.coach_client.settings") as mock_settings:
        mock_settings.openai_model = "gpt-4o-mini"
        mock_settings.openai_temperature = 0.7
        mock_settings.openai_max_tokens = 1024
        return OpenAICoachClient(client=openai_client)


class TestOpenAICoachClient:
    """Single-call completion."""

    async def test_sends_prompt_as_single_user_message(
        self, coach: OpenAICoachClient, openai_client: MagicMock
    ) -> None:
        """The whole prompt is one user message with configured parameters."""
        # Given
        openai_client.chat.completions.create.return_value = make_response("Observation.")

        # When
        result = await coach.complete("full prompt")

        # Then
        assert result == "Observation."
        openai_client.chat.completions.create.assert_awaited_once_with(
            model="gpt-4o-mini",
            messages=[{"role": "user", "content": "full prompt"}],
            temperature=0.7,
            max_tokens=1024,
        )

    async def test_api_error_becomes_model_error(
        self, coach: OpenAICoachClient, openai_client: MagicMock
    ) -> None:
        """Transport and API failures are wrapped."""
        # Given
        openai_client.chat.completions.create.side_effect = RuntimeError("rate limited")

        # When & Then
        with pytest.raises(CoachModelError):
            await coach.complete("full prompt")

    @pytest.mark.parametrize("content", [None, ""])
    async def test_empty_reply_is_model_error(
        self, coach: OpenAICoachClient, openai_client: MagicMock, content: str | None
    ) -> None:
        """A reply without text is treated as a failure."""
        # Given
        openai_client.chat.completions.create.return_value = make_response(content)

        # When & Then
        with pytest.raises(CoachModelError):
            await coach.complete("full prompt")

    async def test_no_choices_is_model_error(
        self, coach: OpenAICoachClient, openai_client: MagicMock
    ) -> None:
        """A reply with no choices is treated as a failure."""
        # Given
        response = MagicMock()
        response.choices = []
        openai_client.chat.completions.create.return_value = response

        # When & Then
        with pytest.raises(CoachModelError):
            await coach.complete("full prompt")
