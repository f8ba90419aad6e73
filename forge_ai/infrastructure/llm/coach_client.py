"""OpenAI client for the prose coach.

Sends one complete prompt as a single user message and returns the text
of the reply. No streaming and no retries; timeouts and backoff belong to
the caller.
"""

import logging

from openai import AsyncOpenAI

from forge_ai.core.config.settings import settings

logger = logging.getLogger(__name__)


class CoachModelError(Exception):
    """Coaching model call failed."""

    pass


class OpenAICoachClient:
    """Coaching model client backed by the OpenAI chat completions API."""

    def __init__(self, client: AsyncOpenAI | None = None) -> None:
        """Initialises the client from settings.

        Args:
            client: Preconfigured AsyncOpenAI instance, built from settings when None
        """
        self.client = client or AsyncOpenAI(api_key=settings.openai_api_key, max_retries=0)
        self.model = settings.openai_model
        self.temperature = settings.openai_temperature
        self.max_tokens = settings.openai_max_tokens

    async def complete(self, prompt: str) -> str:
        """Sends the prompt and returns the model's text.

        Args:
            prompt: Full coaching prompt

        Returns:
            Response text

        Raises:
            CoachModelError: The request failed or returned no text
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error("Coaching model request failed", extra={"error": str(e)})
            raise CoachModelError("Failed to get coaching response") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise CoachModelError("Coaching model returned an empty response")

        return content
