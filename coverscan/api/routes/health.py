"""Configuration health routes. Report presence of secrets, never values."""

from fastapi import APIRouter

from coverscan.api.dependencies import SettingsDep
from coverscan.api.schemas import ConfigStatusResponse
from coverscan.inference.factory import CoverExtractorFactory

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/config", response_model=ConfigStatusResponse)
def config_status(settings: SettingsDep) -> ConfigStatusResponse:
    backend = settings.storage_backend.lower()
    storage_configured = backend == "local" or (
        bool(settings.supabase_url) and bool(settings.supabase_service_key)
    )
    return ConfigStatusResponse(
        inference_provider=settings.inference_provider,
        inference_key_configured=CoverExtractorFactory.is_configured(settings),
        storage_backend=backend,
        storage_configured=storage_configured,
    )
