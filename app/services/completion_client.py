"""
Client for the OpenAI-compatible chat completion API.
Sends one system/user prompt pair and returns the JSON object the model replies with.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import httpx

from app.config import settings
from app.services.exceptions import (
    ProviderConfigurationError,
    ProviderUnavailableError,
    RecommendationError,
)

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Calls `/chat/completions` with a bounded fixed-delay retry."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.model = model or settings.openai_model
        self.temperature = settings.openai_temperature if temperature is None else temperature
        self.timeout = settings.openai_timeout if timeout is None else timeout
        self.max_attempts = settings.recommendation_max_attempts if max_attempts is None else max_attempts
        self.retry_delay = settings.recommendation_retry_delay if retry_delay is None else retry_delay
        self.transport = transport

    def _build_payload(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }

    async def complete_json(self, system_prompt: str, user_prompt: str) -> Any:
        """
        Ask the model for a JSON object and return it parsed.

        Args:
            system_prompt: Instructions describing the expected JSON schema
            user_prompt: The trip details

        Returns:
            The parsed content of the first choice, unmodified

        Raises:
            ProviderConfigurationError: No API key configured (no request is sent)
            ProviderUnavailableError: Every attempt failed
            RecommendationError: The reply is not the expected JSON
        """
        if not self.api_key:
            raise ProviderConfigurationError("OpenAI API key is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self._build_payload(system_prompt, user_prompt)

        response: Optional[httpx.Response] = None
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    response = await client.post("/chat/completions", json=payload, headers=headers)
                except httpx.TransportError as exc:
                    logger.warning(f"Completion request failed (attempt {attempt}/{self.max_attempts}): {exc}")
                    if attempt >= self.max_attempts:
                        raise ProviderUnavailableError(f"Could not reach the AI provider: {exc}") from exc
                    await asyncio.sleep(self.retry_delay)
                    continue

                if response.is_success:
                    break

                logger.warning(
                    f"Completion request returned {response.status_code} "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.retry_delay)

        if response is None:
            logger.error("OpenAI API error: no response received")
            raise ProviderUnavailableError("No response received from the AI provider")

        if not response.is_success:
            logger.error(f"OpenAI API error: {response.status_code} - {response.text}")
            raise ProviderUnavailableError("Failed to get a recommendation from the AI")

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
            return json.loads(content)
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error(f"Unreadable completion reply: {exc}")
            raise RecommendationError("The AI returned a response that could not be read") from exc
