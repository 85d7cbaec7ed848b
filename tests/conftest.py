from unittest.mock import MagicMock

import pytest

from coverscan.processor.models import StoredImageRef, UploadRequest
from coverscan.storage.base import BaseBlobStore


@pytest.fixture()
def jpeg_bytes() -> bytes:
    """A tiny JPEG-looking payload: SOI marker, JFIF header, EOI marker."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture()
def upload_request(jpeg_bytes: bytes) -> UploadRequest:
    return UploadRequest(
        file_bytes=jpeg_bytes,
        declared_mime_type="image/jpeg",
        size_bytes=len(jpeg_bytes),
        owner_id="user-42",
    )


@pytest.fixture()
def fake_blob_store() -> MagicMock:
    """Blob store that hands out a fresh public key per call."""
    store = MagicMock(spec=BaseBlobStore)

    def _store(owner_id: str, file_bytes: bytes, mime_type: str) -> StoredImageRef:
        key = f"{owner_id}/cover-{store.store.call_count}.jpg"
        return StoredImageRef(
            storage_key=key,
            public_url=f"https://cdn.example.com/book-covers/{key}",
        )

    store.store.side_effect = _store
    return store
