"""Vision model call for a single cover image."""

from pathlib import Path
from urllib.parse import urlsplit

from coverscan.inference.base import BaseCoverExtractor
from coverscan.inference.client_base import BaseVisionClient
from coverscan.inference.exceptions import InferenceNotConfiguredError, InvalidImageUrlError
from coverscan.inference.prompt_loader import load_extraction_prompt
from coverscan.logging.logger import Log
from coverscan.processor.models import ModelResponse

MAX_RESPONSE_TOKENS = 300


def is_absolute_url(value: str) -> bool:
    """True for scheme://host/... addresses and for data: URLs."""
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    if not parts.scheme:
        return False
    return bool(parts.netloc) or parts.scheme.lower() == "data"


class CoverExtractor(BaseCoverExtractor):
    """Sends one cover image to a vision model and returns its raw answer.

    ``client`` is None when the provider has no credential configured; the
    extractor then refuses before any network call.
    """

    def __init__(
        self,
        *,
        client: BaseVisionClient | None,
        model: str,
        max_tokens: int = MAX_RESPONSE_TOKENS,
        prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._prompt = load_extraction_prompt(prompt_path)

    @property
    def configured(self) -> bool:
        return self._client is not None

    def extract(self, image_url: str) -> ModelResponse:
        if not image_url or not image_url.strip():
            raise InvalidImageUrlError("No imageUrl provided")
        if self._client is None:
            raise InferenceNotConfiguredError("AI provider API key is not configured")
        if not is_absolute_url(image_url):
            raise InvalidImageUrlError(f"Invalid image URL provided: {image_url!r}")

        Log.info(f"Requesting cover extraction from model {self._model}")
        raw_text = self._client.create_vision_completion(
            model=self._model,
            prompt=self._prompt,
            image_url=image_url.strip(),
            max_tokens=self._max_tokens,
        )
        Log.debug(f"AI raw response:\n{raw_text}")
        return ModelResponse(raw_text=raw_text)
