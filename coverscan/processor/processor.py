from coverscan.config.settings import Settings
from coverscan.inference.base import BaseCoverExtractor
from coverscan.inference.factory import CoverExtractorFactory
from coverscan.logging.logger import Log
from coverscan.processor.exceptions import ProcessorError
from coverscan.processor.models import (
    ErrorKind,
    ExtractedMetadata,
    Failure,
    PipelineOutcome,
    Success,
    UploadRequest,
)
from coverscan.processor.pipeline import PipelineContext, PipelineStage, PipelineStep
from coverscan.processor.steps import (
    InferStep,
    ParseResponseStep,
    StoreImageStep,
    ValidateUploadStep,
)
from coverscan.storage.base import BaseBlobStore
from coverscan.storage.factory import BlobStoreFactory


class Processor:
    """Runs pipeline steps in order and folds any failure into one outcome.

    Upload pipeline: validate -> store -> infer -> parse.
    Nothing is retried and nothing already stored is rolled back.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process_upload(self, request: UploadRequest) -> PipelineOutcome:
        return self.run(PipelineContext(upload=request))

    def process_image_url(self, image_url: str) -> PipelineOutcome:
        return self.run(PipelineContext(image_url=image_url))

    def run(self, context: PipelineContext) -> PipelineOutcome:
        for step in self._steps:
            context.stage = step.stage
            try:
                context = step.run(context)
            except ProcessorError as exc:
                return self._fail(context, step, exc.kind, str(exc))
            except Exception as exc:
                Log.exception(f"Unexpected error while {step.stage.value}: {exc}")
                return self._fail(context, step, step.failure_kind, str(exc))

        context.stage = PipelineStage.DONE
        return Success(
            metadata=context.metadata or ExtractedMetadata(),
            stored_image=context.stored_image,
        )

    @staticmethod
    def _fail(
        context: PipelineContext,
        step: PipelineStep,
        kind: ErrorKind,
        message: str,
    ) -> Failure:
        context.stage = PipelineStage.FAILED
        Log.warning(f"Pipeline failed while {step.stage.value}: [{kind}] {message}")
        return Failure(kind=kind, message=message, stage=step.stage.value)


def build_upload_processor(
    settings: Settings,
    blob_store: BaseBlobStore | None = None,
    extractor: BaseCoverExtractor | None = None,
) -> Processor:
    """Build the full upload pipeline with all required adapters."""
    blob_store = blob_store or BlobStoreFactory.create(settings)
    extractor = extractor or CoverExtractorFactory.create(settings)
    return Processor(
        steps=[
            ValidateUploadStep(max_size_bytes=settings.max_upload_bytes),
            StoreImageStep(blob_store=blob_store),
            InferStep(extractor=extractor),
            ParseResponseStep(),
        ]
    )


def build_image_url_processor(
    settings: Settings,
    extractor: BaseCoverExtractor | None = None,
) -> Processor:
    """Build the infer -> parse pipeline for covers that already have a public URL."""
    extractor = extractor or CoverExtractorFactory.create(settings)
    return Processor(steps=[InferStep(extractor=extractor), ParseResponseStep()])
