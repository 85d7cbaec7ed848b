"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from coverscan.api.dependencies import get_settings
from coverscan.api.errors import ApiError, api_error_handler, validation_error_handler
from coverscan.api.routes import books, covers, health
from coverscan.config.settings import Settings
from coverscan.database.connection import close_pool, init_pool
from coverscan.database.repositories.book_repository import BookRepository
from coverscan.inference.factory import CoverExtractorFactory
from coverscan.logging.logger import Log
from coverscan.processor.processor import build_image_url_processor, build_upload_processor
from coverscan.storage.factory import BlobStoreFactory

API_PREFIX = "/api"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app: settings -> adapters -> processors -> routes."""
    settings = settings or get_settings()
    Log.configure(settings.log_level)

    extractor = CoverExtractorFactory.create(settings)
    blob_store = BlobStoreFactory.create(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        Log.info(f"Starting coverscan ({settings.app_env})")
        init_pool(settings)
        try:
            yield
        finally:
            close_pool()
            blob_store.close()
            Log.info("Shutting down")

    app = FastAPI(title="coverscan", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.upload_processor = build_upload_processor(
        settings, blob_store=blob_store, extractor=extractor
    )
    app.state.image_url_processor = build_image_url_processor(settings, extractor=extractor)
    app.state.book_repo = BookRepository()

    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        Log.exception(f"Unhandled exception on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "message": str(exc)},
        )

    app.include_router(covers.router, prefix=API_PREFIX)
    app.include_router(books.router, prefix=API_PREFIX)
    app.include_router(health.router, prefix=API_PREFIX)

    if settings.storage_backend.lower() == "local":
        app.mount(
            "/files",
            StaticFiles(directory=Path(settings.storage_files_root), check_dir=False),
            name="files",
        )

    return app


def main() -> None:
    """Entry point: serve the app with uvicorn."""
    uvicorn.run(
        "coverscan.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
