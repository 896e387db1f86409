from fastapi import APIRouter, Depends

from prepal.core.config import Settings
from prepal.core.deps import get_settings_dep, get_storage_service
from prepal.services.storage import StorageService

router = APIRouter(tags=["system"])


@router.get("/health")
def health(
    settings: Settings = Depends(get_settings_dep),
    storage: StorageService = Depends(get_storage_service),
):
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "model": settings.OPENAI_MODEL,
        "storage": storage.uploads_path.is_dir() and storage.temp_path.is_dir(),
    }


@router.get("/version")
def version(settings: Settings = Depends(get_settings_dep)):
    return {"name": settings.APP_NAME, "version": settings.APP_VERSION, "env": settings.APP_ENV}
