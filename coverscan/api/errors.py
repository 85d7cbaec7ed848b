"""Maps pipeline failures and API errors onto HTTP responses."""

from fastapi import Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from coverscan.processor.models import CLIENT_ERROR_KINDS, ErrorKind, Failure

ERROR_TITLES: dict[ErrorKind, str] = {
    ErrorKind.NO_FILE: "No file provided",
    ErrorKind.INVALID_TYPE: "Unsupported file type",
    ErrorKind.TOO_LARGE: "File too large",
    ErrorKind.INVALID_INPUT: "Invalid image URL provided",
    ErrorKind.UNCONFIGURED: "AI provider API key is not configured",
    ErrorKind.UNAUTHORIZED: "AI provider authentication failed",
    ErrorKind.STORAGE_FAILURE: "Error storing image",
    ErrorKind.INFERENCE_FAILURE: "Error processing image",
}


class ApiError(Exception):
    """Raised by route handlers to return a JSON error body."""

    def __init__(self, error: str, message: str, status_code: int = 500) -> None:
        self.error = error
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def status_for(kind: ErrorKind) -> int:
    if kind in CLIENT_ERROR_KINDS:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def failure_response(failure: Failure) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(failure.kind),
        content={
            "error": ERROR_TITLES[failure.kind],
            "message": failure.message,
            "kind": failure.kind.value,
        },
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message},
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Unreadable {imageUrl} bodies are INVALID_INPUT; other routes keep FastAPI's 422."""
    if not request.url.path.endswith("/process-image"):
        return await request_validation_exception_handler(request, exc)
    message = "; ".join(str(error.get("msg", "")) for error in exc.errors())
    return failure_response(
        Failure(kind=ErrorKind.INVALID_INPUT, message=message or "Invalid request body")
    )
