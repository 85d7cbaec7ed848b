from pathlib import Path

from coverscan.processor.models import StoredImageRef
from coverscan.storage.base import BaseBlobStore, build_storage_key
from coverscan.storage.exceptions import StorageError


class LocalBlobStore(BaseBlobStore):
    """Writes covers to a directory that the web app serves as static files."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, public_base_url: str, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT
        self._public_base_url = public_base_url.rstrip("/")

    def store(self, owner_id: str, file_bytes: bytes, mime_type: str) -> StoredImageRef:
        key = build_storage_key(owner_id, mime_type)
        path = self._files_root / key
        if not path.resolve().is_relative_to(self._files_root.resolve()):
            raise StorageError(f"Storage key {key!r} resolves outside {self._files_root}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("xb") as fh:
                fh.write(file_bytes)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        return StoredImageRef(storage_key=key, public_url=f"{self._public_base_url}/{key}")
