from dataclasses import dataclass
from typing import ClassVar

from portfolio_builder.ai.base import BaseModelProvider
from portfolio_builder.ai.example_provider import ExampleModelProvider
from portfolio_builder.ai.openai_client_adapter import OpenAIClientAdapter
from portfolio_builder.ai.openai_stream_adapter import OpenAIStreamAdapter
from portfolio_builder.config.settings import Settings


@dataclass(frozen=True)
class _ProviderProfile:
    label: str
    base_url: str | None
    streaming: bool


class ModelProviderFactory:
    """Creates the configured model provider."""

    PROFILES: ClassVar[dict[str, _ProviderProfile]] = {
        "cerebras": _ProviderProfile("Cerebras", "https://api.cerebras.ai/v1", True),
        "gemini": _ProviderProfile(
            "Gemini", "https://generativelanguage.googleapis.com/v1beta/openai/", False
        ),
        "openai": _ProviderProfile("OpenAI", None, False),
        "openai_compatible": _ProviderProfile("OpenAI-compatible", None, False),
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseModelProvider:
        """Create a configured model provider from application settings.

        Raises:
            ValueError: for an unknown provider or missing credentials.
        """
        provider = settings.ai_provider.lower()
        if provider == "example":
            return ExampleModelProvider()

        profile = cls.PROFILES.get(provider)
        if profile is None:
            supported = ["example", *sorted(cls.PROFILES)]
            raise ValueError(f"Unknown AI provider '{provider}'. Choose from: {supported}")

        api_key = cls._resolve_api_key(provider, settings)
        if not api_key:
            raise ValueError(f"{provider.upper()}_API_KEY is required for ai_provider={provider}")

        streaming = profile.streaming if settings.ai_streaming is None else settings.ai_streaming
        adapter_cls: type[OpenAIClientAdapter] | type[OpenAIStreamAdapter] = (
            OpenAIStreamAdapter if streaming else OpenAIClientAdapter
        )
        return adapter_cls(
            api_key=api_key,
            model=cls._resolve_model_name(provider, settings),
            timeout_seconds=settings.ai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, profile, settings),
            temperature=settings.ai_temperature,
            top_p=settings.ai_top_p,
            max_tokens=settings.ai_max_tokens,
            label=profile.label,
        )

    @classmethod
    def _resolve_base_url(
        cls, provider: str, profile: _ProviderProfile, settings: Settings
    ) -> str | None:
        if provider != "openai_compatible":
            return profile.base_url
        url = (settings.openai_compatible_base_url or "").strip()
        if not url:
            raise ValueError(
                "openai_compatible_base_url is required for ai_provider=openai_compatible"
            )
        return url

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "cerebras": settings.cerebras_api_key,
            "gemini": settings.gemini_api_key,
            "openai": settings.openai_api_key,
            "openai_compatible": settings.openai_compatible_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        model_map = {
            "cerebras": settings.cerebras_model_name,
            "gemini": settings.gemini_model_name,
            "openai": settings.openai_model_name,
            "openai_compatible": settings.openai_compatible_model_name,
        }
        model = model_map.get(provider, "") or ""
        if not model:
            raise ValueError(f"A model name is required for ai_provider={provider}")
        return model
