"""Upload preconditions checked before anything touches the network."""

from coverscan.processor.exceptions import UploadValidationError
from coverscan.processor.models import MAX_UPLOAD_BYTES, ErrorKind, UploadRequest

_IMAGE_MIME_PREFIX = "image/"


def validate_upload(request: UploadRequest, max_size_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Check presence, MIME class and size, in that order.

    Only the first failing check is reported.

    Raises:
        UploadValidationError: with kind NO_FILE, INVALID_TYPE or TOO_LARGE.
    """
    if not request.file_bytes:
        raise UploadValidationError("No file provided", ErrorKind.NO_FILE)
    if not request.declared_mime_type.lower().startswith(_IMAGE_MIME_PREFIX):
        raise UploadValidationError(
            f"Unsupported file type '{request.declared_mime_type}', expected an image",
            ErrorKind.INVALID_TYPE,
        )
    if request.size_bytes > max_size_bytes:
        raise UploadValidationError(
            f"File is {request.size_bytes} bytes, limit is {max_size_bytes}",
            ErrorKind.TOO_LARGE,
        )
