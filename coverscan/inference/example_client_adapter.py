"""Offline vision client adapter.

Returns a canned answer without any network call. Useful for local
development and as a template for new provider adapters: implement
BaseVisionClient and register the provider in CoverExtractorFactory.
"""

import json
from typing import ClassVar

from coverscan.inference.client_base import BaseVisionClient


class ExampleVisionAdapter(BaseVisionClient):
    """Adapter that always reads the same book off any cover."""

    DEFAULT_RESPONSE: ClassVar[dict[str, str]] = {
        "title": "Dune",
        "author": "Frank Herbert",
    }

    def create_vision_completion(
        self,
        *,
        model: str,
        prompt: str,
        image_url: str,
        max_tokens: int,
    ) -> str:
        _ = model, prompt, image_url, max_tokens
        return json.dumps(self.DEFAULT_RESPONSE)
