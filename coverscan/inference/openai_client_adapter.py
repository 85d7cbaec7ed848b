import httpx
import openai

from coverscan.inference.client_base import BaseVisionClient
from coverscan.inference.exceptions import (
    InferenceError,
    InferenceNetworkError,
    InferenceTimeoutError,
    InferenceUnauthorizedError,
)


class OpenAIVisionAdapter(BaseVisionClient):
    """Vision client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_vision_completion(
        self,
        *,
        model: str,
        prompt: str,
        image_url: str,
        max_tokens: int,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {"type": "image_url", "image_url": {"url": image_url}},
                        ],
                    },
                ],
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise InferenceTimeoutError(f"AI provider timed out: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise InferenceNetworkError(f"AI provider network error: {exc}") from exc
        except openai.AuthenticationError as exc:
            raise InferenceUnauthorizedError(
                "AI provider authentication failed, check the API key configuration",
                status_code=exc.status_code,
            ) from exc
        except openai.APIStatusError as exc:
            raise InferenceError(
                f"AI provider API error: {exc}", status_code=exc.status_code
            ) from exc
        except openai.APIError as exc:
            raise InferenceError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise InferenceError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise InferenceError("AI returned empty response")
        return content
