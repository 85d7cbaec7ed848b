"""Cover extraction routes."""

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from coverscan.api.dependencies import (
    CurrentUserDep,
    ImageUrlProcessorDep,
    SettingsDep,
    UploadProcessorDep,
)
from coverscan.api.errors import failure_response
from coverscan.api.schemas import (
    CoverMetadataResponse,
    CoverUploadResponse,
    ErrorResponse,
    ProcessImageRequest,
)
from coverscan.processor.models import Failure, UploadRequest

router = APIRouter(tags=["covers"])

NOTHING_DETECTED_NOTICE = (
    "Could not read a title or author from this cover, please enter them manually"
)

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "/process-image",
    response_model=CoverMetadataResponse,
    responses=_ERROR_RESPONSES,
)
def process_image(
    body: ProcessImageRequest,
    processor: ImageUrlProcessorDep,
) -> CoverMetadataResponse | JSONResponse:
    """Read title and author from a cover that is already publicly hosted."""
    outcome = processor.process_image_url(body.image_url or "")
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return CoverMetadataResponse(
        title=outcome.metadata.title,
        author=outcome.metadata.author,
    )


@router.post(
    "/covers",
    response_model=CoverUploadResponse,
    responses=_ERROR_RESPONSES,
)
def upload_cover(
    user_id: CurrentUserDep,
    processor: UploadProcessorDep,
    settings: SettingsDep,
    file: UploadFile | None = File(default=None),
) -> CoverUploadResponse | JSONResponse:
    """Store a cover photo and read title and author off it."""
    file_bytes: bytes | None = None
    size_bytes = 0
    if file is not None:
        # one byte past the ceiling is enough to report TOO_LARGE
        file_bytes = file.file.read(settings.max_upload_bytes + 1)
        size_bytes = file.size if file.size is not None else len(file_bytes)
    request = UploadRequest(
        file_bytes=file_bytes,
        declared_mime_type=(file.content_type or "") if file is not None else "",
        size_bytes=size_bytes,
        owner_id=user_id,
    )
    outcome = processor.process_upload(request)
    if isinstance(outcome, Failure):
        return failure_response(outcome)

    stored = outcome.stored_image
    if stored is None:
        raise RuntimeError("Upload pipeline finished without a stored image")
    metadata = outcome.metadata
    return CoverUploadResponse(
        title=metadata.title,
        author=metadata.author,
        detected=not metadata.is_empty,
        notice=NOTHING_DETECTED_NOTICE if metadata.is_empty else None,
        storage_key=stored.storage_key,
        public_url=stored.public_url,
    )
