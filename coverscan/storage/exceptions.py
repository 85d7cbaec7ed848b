from coverscan.processor.exceptions import ProcessorError
from coverscan.processor.models import ErrorKind


class StorageError(ProcessorError):
    """Raised when the blob store cannot accept or publish an object."""

    kind = ErrorKind.STORAGE_FAILURE
