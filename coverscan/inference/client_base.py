from abc import ABC, abstractmethod


class BaseVisionClient(ABC):
    """Contract for provider-specific vision completion clients."""

    @abstractmethod
    def create_vision_completion(
        self,
        *,
        model: str,
        prompt: str,
        image_url: str,
        max_tokens: int,
    ) -> str:
        """Return provider response as plain text."""
