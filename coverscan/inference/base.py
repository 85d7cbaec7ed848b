from abc import ABC, abstractmethod

from coverscan.processor.models import ModelResponse


class BaseCoverExtractor(ABC):
    """Contract for all cover reading adapters."""

    @abstractmethod
    def extract(self, image_url: str) -> ModelResponse:
        """Ask a vision model to read the title and author off a cover.

        Args:
            image_url: Absolute, publicly readable address of the cover image.

        Returns:
            ModelResponse with the model's raw, unparsed text.

        Raises:
            InvalidImageUrlError: if image_url is empty or not absolute.
            InferenceNotConfiguredError: if no credential is configured.
            InferenceError: on any upstream failure. Never retried here.
        """
