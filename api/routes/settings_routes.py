from fastapi import APIRouter, Depends

from api.bootstrap import Studio
from api.schemas.settings_schemas import SettingsUpdate, UserSettings
from api.utils.dependencies import get_studio

settings_routes = APIRouter()


@settings_routes.get("/settings", response_model=UserSettings)
async def get_settings(studio: Studio = Depends(get_studio)) -> UserSettings:
    return studio.settings.get()


@settings_routes.patch("/settings", response_model=UserSettings)
async def update_settings(body: SettingsUpdate, studio: Studio = Depends(get_studio)) -> UserSettings:
    # Invalid values are rejected by FastAPI body validation (422) before reaching the store.
    return studio.settings.update(body)
