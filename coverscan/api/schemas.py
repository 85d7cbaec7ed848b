from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ProcessImageRequest(CamelModel):
    image_url: str | None = Field(default=None, alias="imageUrl")


class CoverMetadataResponse(CamelModel):
    title: str
    author: str


class CoverUploadResponse(CoverMetadataResponse):
    detected: bool
    notice: str | None = None
    storage_key: str = Field(serialization_alias="storageKey")
    public_url: str = Field(serialization_alias="publicUrl")


class ErrorResponse(BaseModel):
    error: str
    message: str
    kind: str | None = None


class BookCreateRequest(CamelModel):
    title: str = Field(min_length=1)
    author: str = ""
    cover_storage_key: str | None = Field(default=None, alias="coverStorageKey")
    cover_url: str | None = Field(default=None, alias="coverUrl")


class BookResponse(CamelModel):
    id: int
    title: str
    author: str
    cover_storage_key: str | None = Field(default=None, serialization_alias="coverStorageKey")
    cover_url: str | None = Field(default=None, serialization_alias="coverUrl")
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")


class BookListResponse(BaseModel):
    books: list[BookResponse]
    total: int


class ConfigStatusResponse(BaseModel):
    inference_provider: str
    inference_key_configured: bool
    storage_backend: str
    storage_configured: bool
