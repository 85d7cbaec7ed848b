from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from coverscan.processor.models import (
    ErrorKind,
    ExtractedMetadata,
    ModelResponse,
    StoredImageRef,
    UploadRequest,
)


class PipelineStage(str, Enum):
    VALIDATING = "validating"
    STORING = "storing"
    INFERRING = "inferring"
    PARSING = "parsing"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineContext:
    upload: UploadRequest | None = None
    image_url: str = ""
    stored_image: StoredImageRef | None = None
    model_response: ModelResponse | None = None
    metadata: ExtractedMetadata | None = None
    stage: PipelineStage = PipelineStage.VALIDATING


class PipelineStep(ABC):
    stage: ClassVar[PipelineStage]
    # Reported when a collaborator raises something outside ProcessorError.
    failure_kind: ClassVar[ErrorKind] = ErrorKind.INFERENCE_FAILURE

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
