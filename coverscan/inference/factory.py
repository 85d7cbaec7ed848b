from typing import ClassVar

from coverscan.config.settings import Settings
from coverscan.inference.base import BaseCoverExtractor
from coverscan.inference.client_base import BaseVisionClient
from coverscan.inference.example_client_adapter import ExampleVisionAdapter
from coverscan.inference.extractor import CoverExtractor
from coverscan.inference.openai_client_adapter import OpenAIVisionAdapter


class CoverExtractorFactory:
    """Creates the configured cover extractor."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseCoverExtractor:
        """Create a configured extractor from application settings.

        A provider without an API key yields an extractor with no client,
        which reports UNCONFIGURED on use instead of failing at startup.
        """
        provider = settings.inference_provider.lower()
        if provider == "example":
            return CoverExtractor(client=ExampleVisionAdapter(), model="example")

        base_url = cls._resolve_base_url(provider, settings)
        api_key = cls._resolve_api_key(provider, settings)
        client: BaseVisionClient | None = None
        if api_key:
            client = OpenAIVisionAdapter(
                api_key=api_key,
                timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
                base_url=base_url,
            )
        return CoverExtractor(
            client=client,
            model=cls._resolve_model_name(provider, settings),
        )

    @classmethod
    def is_configured(cls, settings: Settings) -> bool:
        """True when the selected provider has a credential to call with."""
        provider = settings.inference_provider.lower()
        return provider == "example" or bool(cls._resolve_api_key(provider, settings))

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.inference_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "inference_openai_compatible_base_url is required for "
                    "inference_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown inference provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.inference_openai_api_key,
            "openai_compatible": settings.inference_openai_compatible_api_key,
            "openrouter": settings.inference_openrouter_api_key,
            "groq": settings.inference_groq_api_key,
            "together": settings.inference_together_api_key,
            "ollama": settings.inference_ollama_api_key,
        }
        return (key_map.get(provider) or "").strip()

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.inference_openai_model_name,
            "openai_compatible": settings.inference_openai_compatible_model_name,
            "openrouter": settings.inference_openrouter_model_name,
            "groq": settings.inference_groq_model_name,
            "together": settings.inference_together_model_name,
            "ollama": settings.inference_ollama_model_name,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int:
        key_map = {
            "openai": settings.inference_openai_timeout_seconds,
            "openai_compatible": settings.inference_openai_compatible_timeout_seconds,
            "openrouter": settings.inference_openrouter_timeout_seconds,
            "groq": settings.inference_groq_timeout_seconds,
            "together": settings.inference_together_timeout_seconds,
            "ollama": settings.inference_ollama_timeout_seconds,
        }
        return key_map.get(provider, 30) or 30
