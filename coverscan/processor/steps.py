from coverscan.inference.base import BaseCoverExtractor
from coverscan.inference.response_parser import parse_cover_metadata
from coverscan.logging.logger import Log
from coverscan.processor.models import MAX_UPLOAD_BYTES, ErrorKind
from coverscan.processor.pipeline import PipelineContext, PipelineStage, PipelineStep
from coverscan.processor.validator import validate_upload
from coverscan.storage.base import BaseBlobStore


class ValidateUploadStep(PipelineStep):
    stage = PipelineStage.VALIDATING
    failure_kind = ErrorKind.INVALID_INPUT

    def __init__(self, max_size_bytes: int = MAX_UPLOAD_BYTES) -> None:
        self._max_size_bytes = max_size_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before validation")
        validate_upload(context.upload, self._max_size_bytes)
        Log.info(
            f"Validated upload for owner {context.upload.owner_id}: "
            f"{context.upload.declared_mime_type}, {context.upload.size_bytes} bytes"
        )
        return context


class StoreImageStep(PipelineStep):
    stage = PipelineStage.STORING
    failure_kind = ErrorKind.STORAGE_FAILURE

    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    def run(self, context: PipelineContext) -> PipelineContext:
        upload = context.upload
        if upload is None or upload.file_bytes is None:
            raise ValueError("PipelineContext.upload must carry file bytes before storing")
        stored = self._blob_store.store(
            upload.owner_id,
            upload.file_bytes,
            upload.declared_mime_type,
        )
        context.stored_image = stored
        context.image_url = stored.public_url
        Log.info(f"Stored cover as {stored.storage_key}")
        return context


class InferStep(PipelineStep):
    stage = PipelineStage.INFERRING
    failure_kind = ErrorKind.INFERENCE_FAILURE

    def __init__(self, extractor: BaseCoverExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.model_response = self._extractor.extract(context.image_url)
        return context


class ParseResponseStep(PipelineStep):
    stage = PipelineStage.PARSING

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.model_response is None:
            raise ValueError("PipelineContext.model_response must be set before parsing")
        context.metadata = parse_cover_metadata(context.model_response.raw_text)
        if context.metadata.is_empty:
            Log.warning("No title or author detected in model response")
        else:
            Log.info(
                f"Detected title={context.metadata.title!r} author={context.metadata.author!r}"
            )
        return context
