"""
LLM client for toolcatalog.

Provides an async interface to OpenAI-compatible chat-completion APIs,
used by natural-language search to turn queries into structured intents.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from .config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM."""
    content: str
    model: str
    usage: dict[str, int] | None = None
    raw_response: Any = None


def extract_json(text: str) -> str:
    """Extract a JSON object from text that might have markdown formatting."""
    text = text.strip()

    # Remove thinking tags emitted by reasoning models
    text = re.sub(r'<think>.*?</think>', '', text, flags=re.DOTALL).strip()

    # Remove markdown code blocks
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]

    start = text.find("{")
    end = text.rfind("}") + 1

    if start != -1 and end > start:
        return text[start:end]

    return text.strip()


class LLMClient:
    """
    Async client for OpenAI-compatible chat completions.

    Features:
    - JSON-mode completions for structured output
    - Timeout handling
    - Logging

    A single request is made per call; retry policy belongs to the caller.
    """

    def __init__(
        self,
        model: str | None = None,
        base_url: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float = 10.0,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None
    ):
        """
        Initialize LLM client.

        Args:
            model: Model name (e.g., "gpt-4o-mini")
            base_url: API base URL (e.g., "https://api.openai.com/v1")
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            timeout: Request timeout in seconds
            api_key: Optional API key for authentication
            client: Pre-built httpx client (headers and timeout are left as is)
        """
        settings = get_settings()

        self.model = model or settings.llm.model
        self.base_url = (base_url or settings.llm.base_url).rstrip("/")
        self.temperature = temperature if temperature is not None else settings.llm.temperature
        self.max_tokens = max_tokens or settings.llm.max_tokens
        self.timeout = timeout

        # API key: explicit arg > settings/env > None. Keys pasted from
        # dashboards often carry stray newlines or spaces.
        key = api_key or settings.llm.api_key
        self.api_key = re.sub(r"\s+", "", key) if key else None

        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout, headers=headers)

        logger.info(f"LLMClient initialized: model={self.model}, base_url={self.base_url}")

    async def complete_json(
        self,
        system_prompt: str,
        prompt: str,
        temperature: float | None = None,
        max_tokens: int | None = None
    ) -> LLMResponse:
        """
        Request a JSON-object completion.

        Args:
            system_prompt: Instruction describing the JSON to return
            prompt: User input
            temperature: Override temperature
            max_tokens: Override max tokens

        Returns:
            LLMResponse whose content should decode as a JSON object

        Raises:
            httpx.HTTPError: On transport failures and non-2xx responses
            ValueError: When the response has no message content
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ]
        return await self._chat_completion(
            messages=messages,
            temperature=temperature if temperature is not None else self.temperature,
            max_tokens=max_tokens or self.max_tokens,
            response_format={"type": "json_object"},
        )

    async def _chat_completion(
        self,
        messages: list[dict],
        temperature: float,
        max_tokens: int,
        response_format: dict | None = None
    ) -> LLMResponse:
        """Make chat completion request to OpenAI-compatible API."""
        url = f"{self.base_url}/chat/completions"

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if response_format:
            payload["response_format"] = response_format

        try:
            logger.debug(f"LLM request to {url}")
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
        except httpx.TimeoutException:
            logger.error(f"LLM request timed out after {self.timeout}s")
            raise
        except httpx.HTTPStatusError as e:
            logger.error(f"LLM request failed: {e.response.status_code}")
            raise

        data = response.json()

        try:
            content = data["choices"][0]["message"].get("content") or ""
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ValueError(f"Unexpected completion payload: {e}") from e

        if not isinstance(content, str):
            raise ValueError(f"LLM message content is {type(content).__name__}, expected text")

        if not content.strip():
            raise ValueError("LLM response is empty")

        return LLMResponse(
            content=content,
            model=data.get("model", self.model),
            usage=data.get("usage"),
            raw_response=data
        )

    async def is_available(self) -> bool:
        """Check if the LLM service is available."""
        try:
            response = await self.client.get(f"{self.base_url}/models", timeout=5.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def aclose(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "LLMClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
