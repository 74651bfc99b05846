import httpx
import openai

from portfolio_builder.ai.base import BaseModelProvider
from portfolio_builder.ai.exceptions import ProviderError, ProviderNetworkError


class OpenAIClientAdapter(BaseModelProvider):
    """Single-shot model provider built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
        temperature: float = 0.6,
        top_p: float = 0.95,
        max_tokens: int | None = None,
        label: str = "OpenAI",
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._model = model
        self._temperature = temperature
        self._top_p = top_p
        self._max_tokens = max_tokens
        self._label = label

    def name(self) -> str:
        return f"{self._label} ({self._model})"

    def generate_text(self, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                top_p=self._top_p,
                max_tokens=self._max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ProviderNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ProviderError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ProviderError("AI returned empty response")
        return content
