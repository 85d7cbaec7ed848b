from pathlib import Path

from coverscan.config.settings import Settings
from coverscan.storage.base import BaseBlobStore
from coverscan.storage.local_adapter import LocalBlobStore
from coverscan.storage.supabase_adapter import SupabaseBlobStore


class BlobStoreFactory:
    """Creates the blob store selected by settings.storage_backend."""

    BACKENDS = ("local", "supabase")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalBlobStore(
                public_base_url=settings.storage_public_base_url,
                files_root=Path(settings.storage_files_root),
            )
        if backend == "supabase":
            if not settings.supabase_url or not settings.supabase_service_key:
                raise ValueError(
                    "supabase_url and supabase_service_key are required for "
                    "storage_backend=supabase"
                )
            return SupabaseBlobStore(
                base_url=settings.supabase_url,
                service_key=settings.supabase_service_key,
                bucket=settings.supabase_bucket,
                timeout_seconds=settings.storage_timeout_seconds,
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
