from coverscan.processor.models import ErrorKind


class ProcessorError(Exception):
    """Base exception for all pipeline errors. Carries the failure kind."""

    kind: ErrorKind = ErrorKind.INFERENCE_FAILURE

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class UploadValidationError(ProcessorError):
    """Raised when an upload fails a local precondition."""
