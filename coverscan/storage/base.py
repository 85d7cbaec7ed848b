import mimetypes
import re
import uuid
from abc import ABC, abstractmethod

from coverscan.processor.models import StoredImageRef
from coverscan.storage.exceptions import StorageError

# One path segment; no separators, dots or percent escapes.
OWNER_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,128}")

_FALLBACK_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "image/heic": ".heic",
}


def is_safe_owner_id(owner_id: str) -> bool:
    return OWNER_ID_PATTERN.fullmatch(owner_id) is not None


def build_storage_key(owner_id: str, mime_type: str) -> str:
    """Build a fresh key: {owner_id}/{random hex}{ext}. Never repeats.

    Raises:
        StorageError: if owner_id is not a single safe path segment.
    """
    if not is_safe_owner_id(owner_id):
        raise StorageError(f"Refusing to store under unsafe owner id {owner_id!r}")
    ext = _FALLBACK_EXTENSIONS.get(mime_type.lower()) or mimetypes.guess_extension(mime_type) or ""
    return f"{owner_id}/{uuid.uuid4().hex}{ext}"


class BaseBlobStore(ABC):
    """Contract for all blob storage adapters."""

    @abstractmethod
    def store(self, owner_id: str, file_bytes: bytes, mime_type: str) -> StoredImageRef:
        """Persist bytes under a new key and return its public address.

        Args:
            owner_id: Identity of the uploading user; used as key prefix.
            file_bytes: Raw file content.
            mime_type: Declared content type.

        Returns:
            StoredImageRef whose public_url is readable without credentials.

        Raises:
            StorageError: on any failure. Never retried here.
        """

    def close(self) -> None:
        """Release clients held by the adapter. No-op unless overridden."""
