"""OpenAI chat-completion provider over plain HTTP."""

from typing import Any, Optional

import httpx

from ssmgpt.observability.logging import get_logger
from ssmgpt.providers.base import LLMProvider, ProviderConfig, ProviderError, resolve_api_key

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAILLMProvider(LLMProvider):
    """LLM provider using the OpenAI chat completions API (or a compatible endpoint)."""

    def __init__(self, config: ProviderConfig) -> None:
        """Initialize the OpenAI LLM provider.

        Args:
            config: Provider configuration with api_key, model_name, etc.

        Raises:
            ProviderError: If no API key is configured
        """
        super().__init__(config)
        self.api_key = resolve_api_key(config.api_key)
        if not self.api_key:
            raise ProviderError(message="API key is required", provider="openai")

        self.model_name = config.model_name
        self.extra_params = config.extra_params
        self.base_url = self.extra_params.get("base_url", DEFAULT_BASE_URL)

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.extra_params.get("timeout", 60.0),
        )

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = 0.7,
    ) -> str:
        """Generate text completion using the chat completions endpoint.

        Returns:
            Generated text with surrounding whitespace stripped

        Raises:
            ProviderError: If the request fails or the response is malformed
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload: dict[str, Any] = {
            "model": self.model_name,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            payload["max_tokens"] = max_tokens

        try:
            response = await self.client.post("/chat/completions", json=payload)
            response.raise_for_status()
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                message=f"OpenAI API error: {e.response.status_code} - {e.response.text}",
                provider="openai",
                original_error=e,
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(
                message=f"Unexpected chat completion response: {str(e)}",
                provider="openai",
                original_error=e,
            )
        except httpx.HTTPError as e:
            raise ProviderError(
                message=f"LLM generation failed: {str(e)}",
                provider="openai",
                original_error=e,
            )

        logger.info("chat_completion_generated", model=self.model_name, answer_length=len(content or ""))
        return (content or "").strip()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
