import httpx

from coverscan.processor.models import StoredImageRef
from coverscan.storage.base import BaseBlobStore, build_storage_key
from coverscan.storage.exceptions import StorageError


class SupabaseBlobStore(BaseBlobStore):
    """Uploads covers to a public Supabase Storage bucket over its REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        service_key: str,
        bucket: str,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._bucket = bucket
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=timeout_seconds,
            headers={
                "Authorization": f"Bearer {service_key}",
                "apikey": service_key,
            },
        )

    def store(self, owner_id: str, file_bytes: bytes, mime_type: str) -> StoredImageRef:
        key = build_storage_key(owner_id, mime_type)
        try:
            response = self._client.post(
                f"{self._base_url}/storage/v1/object/{self._bucket}/{key}",
                content=file_bytes,
                headers={"Content-Type": mime_type, "x-upsert": "false"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StorageError(
                f"Storage rejected upload ({exc.response.status_code}): {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise StorageError(f"Storage network error: {exc}") from exc
        return StoredImageRef(storage_key=key, public_url=self.public_url(key))

    def public_url(self, key: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{self._bucket}/{key}"

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
