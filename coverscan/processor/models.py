from dataclasses import dataclass
from enum import Enum

MAX_UPLOAD_BYTES = 5_242_880


class ErrorKind(str, Enum):
    """Every way a cover extraction run can fail."""

    NO_FILE = "no_file"
    INVALID_TYPE = "invalid_type"
    TOO_LARGE = "too_large"
    INVALID_INPUT = "invalid_input"
    UNCONFIGURED = "unconfigured"
    UNAUTHORIZED = "unauthorized"
    STORAGE_FAILURE = "storage_failure"
    INFERENCE_FAILURE = "inference_failure"


CLIENT_ERROR_KINDS = frozenset({
    ErrorKind.NO_FILE,
    ErrorKind.INVALID_TYPE,
    ErrorKind.TOO_LARGE,
    ErrorKind.INVALID_INPUT,
})


@dataclass(frozen=True)
class UploadRequest:
    """A cover photo as received from the user, before any checks."""

    file_bytes: bytes | None
    declared_mime_type: str
    size_bytes: int
    owner_id: str


@dataclass(frozen=True)
class StoredImageRef:
    """Where an uploaded cover landed in the blob store."""

    storage_key: str
    public_url: str


@dataclass(frozen=True)
class ModelResponse:
    """Raw text returned by the vision model."""

    raw_text: str


@dataclass(frozen=True)
class ExtractedMetadata:
    """Book fields read off a cover. Empty string means not detected."""

    title: str = ""
    author: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.title and not self.author


@dataclass(frozen=True)
class Success:
    metadata: ExtractedMetadata
    stored_image: StoredImageRef | None = None


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    stage: str = ""


PipelineOutcome = Success | Failure
