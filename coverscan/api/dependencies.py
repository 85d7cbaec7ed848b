from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Request, status

from coverscan.api.errors import ApiError
from coverscan.config.settings import Settings
from coverscan.database.repositories.book_repository import BookRepository
from coverscan.processor.processor import Processor
from coverscan.storage.base import is_safe_owner_id


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upload_processor(request: Request) -> Processor:
    return request.app.state.upload_processor


def get_image_url_processor(request: Request) -> Processor:
    return request.app.state.image_url_processor


def get_book_repository(request: Request) -> BookRepository:
    return request.app.state.book_repo


def get_current_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> str:
    """Identity set by the authenticating proxy in front of this service."""
    if not x_user_id or not x_user_id.strip():
        raise ApiError(
            "Not authenticated",
            "X-User-Id header is required",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    user_id = x_user_id.strip()
    if not is_safe_owner_id(user_id):
        raise ApiError(
            "Not authenticated",
            "X-User-Id header is not a valid user id",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return user_id


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
UploadProcessorDep = Annotated[Processor, Depends(get_upload_processor)]
ImageUrlProcessorDep = Annotated[Processor, Depends(get_image_url_processor)]
BookRepositoryDep = Annotated[BookRepository, Depends(get_book_repository)]
CurrentUserDep = Annotated[str, Depends(get_current_user_id)]
