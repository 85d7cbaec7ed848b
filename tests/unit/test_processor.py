from pathlib import Path
from unittest.mock import MagicMock, patch

from coverscan.config.settings import Settings
from coverscan.inference.base import BaseCoverExtractor
from coverscan.inference.exceptions import InferenceError, InferenceUnauthorizedError
from coverscan.inference.extractor import CoverExtractor
from coverscan.processor.models import (
    ErrorKind,
    ExtractedMetadata,
    Failure,
    ModelResponse,
    StoredImageRef,
    Success,
    UploadRequest,
)
from coverscan.processor.pipeline import PipelineContext, PipelineStage
from coverscan.processor.processor import (
    Processor,
    build_image_url_processor,
    build_upload_processor,
)
from coverscan.processor.steps import (
    InferStep,
    ParseResponseStep,
    StoreImageStep,
    ValidateUploadStep,
)
from coverscan.storage.base import BaseBlobStore
from coverscan.storage.exceptions import StorageError

DUNE_JSON = '{"title":"Dune","author":"Frank Herbert"}'


def _make_pipeline(
    raw_text: str = DUNE_JSON,
) -> tuple[Processor, MagicMock, MagicMock]:
    blob_store = MagicMock(spec=BaseBlobStore)
    extractor = MagicMock(spec=BaseCoverExtractor)
    blob_store.store.return_value = StoredImageRef(
        storage_key="user-42/abc.jpg",
        public_url="https://cdn.example.com/book-covers/user-42/abc.jpg",
    )
    extractor.extract.return_value = ModelResponse(raw_text=raw_text)
    processor = Processor(
        steps=[
            ValidateUploadStep(),
            StoreImageStep(blob_store=blob_store),
            InferStep(extractor=extractor),
            ParseResponseStep(),
        ]
    )
    return processor, blob_store, extractor


class TestUploadPipeline:
    def test_runs_all_steps_in_order(self, upload_request: UploadRequest) -> None:
        processor, blob_store, extractor = _make_pipeline()

        outcome = processor.process_upload(upload_request)

        blob_store.store.assert_called_once_with(
            "user-42", upload_request.file_bytes, "image/jpeg"
        )
        extractor.extract.assert_called_once_with(
            "https://cdn.example.com/book-covers/user-42/abc.jpg"
        )
        assert outcome == Success(
            metadata=ExtractedMetadata(title="Dune", author="Frank Herbert"),
            stored_image=StoredImageRef(
                storage_key="user-42/abc.jpg",
                public_url="https://cdn.example.com/book-covers/user-42/abc.jpg",
            ),
        )

    def test_all_empty_metadata_is_still_success(self, upload_request: UploadRequest) -> None:
        processor, _, _ = _make_pipeline(raw_text="no useful data here")
        outcome = processor.process_upload(upload_request)
        assert isinstance(outcome, Success)
        assert outcome.metadata.is_empty

    def test_validation_failure_stops_before_storage(self) -> None:
        processor, blob_store, extractor = _make_pipeline()
        request = UploadRequest(
            file_bytes=b"%PDF", declared_mime_type="application/pdf", size_bytes=4, owner_id="u"
        )

        outcome = processor.process_upload(request)

        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.INVALID_TYPE
        assert outcome.stage == PipelineStage.VALIDATING.value
        blob_store.store.assert_not_called()
        extractor.extract.assert_not_called()

    def test_too_large_upload(self, jpeg_bytes: bytes) -> None:
        processor, blob_store, _ = _make_pipeline()
        request = UploadRequest(
            file_bytes=jpeg_bytes,
            declared_mime_type="image/jpeg",
            size_bytes=5_242_881,
            owner_id="u",
        )
        outcome = processor.process_upload(request)
        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.TOO_LARGE
        blob_store.store.assert_not_called()

    def test_missing_file(self) -> None:
        processor, _, _ = _make_pipeline()
        request = UploadRequest(
            file_bytes=None, declared_mime_type="", size_bytes=0, owner_id="u"
        )
        outcome = processor.process_upload(request)
        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.NO_FILE

    def test_storage_failure_stops_before_inference(self, upload_request: UploadRequest) -> None:
        processor, blob_store, extractor = _make_pipeline()
        blob_store.store.side_effect = StorageError("bucket not found")

        outcome = processor.process_upload(upload_request)

        assert outcome == Failure(
            kind=ErrorKind.STORAGE_FAILURE,
            message="bucket not found",
            stage=PipelineStage.STORING.value,
        )
        assert blob_store.store.call_count == 1
        extractor.extract.assert_not_called()

    def test_unexpected_storage_exception_maps_to_storage_failure(
        self, upload_request: UploadRequest
    ) -> None:
        processor, blob_store, _ = _make_pipeline()
        blob_store.store.side_effect = RuntimeError("disk on fire")

        outcome = processor.process_upload(upload_request)

        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.STORAGE_FAILURE
        assert "disk on fire" in outcome.message

    def test_inference_failure_keeps_its_kind(self, upload_request: UploadRequest) -> None:
        processor, blob_store, extractor = _make_pipeline()
        extractor.extract.side_effect = InferenceUnauthorizedError("bad key", status_code=401)

        outcome = processor.process_upload(upload_request)

        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.UNAUTHORIZED
        assert outcome.stage == PipelineStage.INFERRING.value
        # stored blob is not rolled back
        blob_store.store.assert_called_once()

    def test_inference_is_not_retried(self, upload_request: UploadRequest) -> None:
        processor, _, extractor = _make_pipeline()
        extractor.extract.side_effect = InferenceError("upstream 503", status_code=503)

        outcome = processor.process_upload(upload_request)

        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.INFERENCE_FAILURE
        assert extractor.extract.call_count == 1


class TestImageUrlPipeline:
    def test_infers_and_parses(self) -> None:
        extractor = MagicMock(spec=BaseCoverExtractor)
        extractor.extract.return_value = ModelResponse(raw_text=DUNE_JSON)
        processor = build_image_url_processor(Settings(), extractor=extractor)

        outcome = processor.process_image_url("https://cdn.example.com/cover.jpg")

        assert outcome == Success(
            metadata=ExtractedMetadata(title="Dune", author="Frank Herbert"),
            stored_image=None,
        )


class TestStepContracts:
    def test_context_tracks_final_stage(self, upload_request: UploadRequest) -> None:
        processor, _, _ = _make_pipeline()
        context = PipelineContext(upload=upload_request)
        processor.run(context)
        assert context.stage == PipelineStage.DONE

    def test_context_marked_failed(self) -> None:
        processor, _, _ = _make_pipeline()
        context = PipelineContext(
            upload=UploadRequest(
                file_bytes=None, declared_mime_type="", size_bytes=0, owner_id="u"
            )
        )
        processor.run(context)
        assert context.stage == PipelineStage.FAILED

    def test_parse_step_requires_model_response(self) -> None:
        processor = Processor(steps=[ParseResponseStep()])
        outcome = processor.run(PipelineContext())
        assert isinstance(outcome, Failure)
        assert "model_response" in outcome.message

    def test_warns_when_nothing_detected(self) -> None:
        context = PipelineContext(model_response=ModelResponse(raw_text="nothing"))
        with patch("coverscan.processor.steps.Log") as mock_log:
            ParseResponseStep().run(context)
        mock_log.warning.assert_called_once()


class TestEndToEnd:
    def test_valid_jpeg_yields_done_with_dune(
        self, upload_request: UploadRequest, fake_blob_store: MagicMock
    ) -> None:
        client = MagicMock()
        client.create_vision_completion.return_value = DUNE_JSON
        extractor = CoverExtractor(client=client, model="gpt-4o")
        processor = build_upload_processor(
            Settings(), blob_store=fake_blob_store, extractor=extractor
        )

        outcome = processor.process_upload(upload_request)

        assert isinstance(outcome, Success)
        assert outcome.metadata == ExtractedMetadata(title="Dune", author="Frank Herbert")
        assert outcome.stored_image is not None
        assert outcome.stored_image.public_url.startswith("https://")
        assert fake_blob_store.store.call_count == 1
        assert client.create_vision_completion.call_count == 1

    def test_missing_credential_makes_no_inference_call(
        self, upload_request: UploadRequest, fake_blob_store: MagicMock
    ) -> None:
        settings = Settings(inference_provider="openai", inference_openai_api_key="")
        with patch(
            "coverscan.inference.openai_client_adapter.openai.OpenAI"
        ) as mock_openai:
            processor = build_upload_processor(settings, blob_store=fake_blob_store)
            outcome = processor.process_upload(upload_request)

        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.UNCONFIGURED
        assert mock_openai.call_count == 0
        assert mock_openai.return_value.chat.completions.create.call_count == 0

    def test_local_store_end_to_end(self, upload_request: UploadRequest, tmp_path: Path) -> None:
        settings = Settings(
            inference_provider="example",
            storage_backend="local",
            storage_files_root=str(tmp_path),
            storage_public_base_url="http://localhost:8000/files",
        )
        outcome = build_upload_processor(settings).process_upload(upload_request)

        assert isinstance(outcome, Success)
        assert outcome.stored_image is not None
        assert (tmp_path / outcome.stored_image.storage_key).read_bytes() == (
            upload_request.file_bytes
        )
        assert outcome.metadata.title == "Dune"
