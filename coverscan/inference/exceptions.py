from coverscan.processor.exceptions import ProcessorError
from coverscan.processor.models import ErrorKind


class InferenceError(ProcessorError):
    """Raised when the vision model call fails."""

    kind = ErrorKind.INFERENCE_FAILURE

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InferenceNetworkError(InferenceError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class InferenceTimeoutError(InferenceNetworkError):
    """Raised when the AI provider does not answer within the configured timeout."""


class InferenceUnauthorizedError(InferenceError):
    """Raised when the AI provider rejects the configured credential."""

    kind = ErrorKind.UNAUTHORIZED


class InferenceNotConfiguredError(InferenceError):
    """Raised when no credential is configured for the AI provider."""

    kind = ErrorKind.UNCONFIGURED


class InvalidImageUrlError(InferenceError):
    """Raised when the image address is empty or not an absolute URL."""

    kind = ErrorKind.INVALID_INPUT
