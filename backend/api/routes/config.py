"""Config API routes. Backend maintains settings.json; frontend fetches and overwrites on save."""

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from config import get_layout_settings, get_settings, save_settings
from layout.constants import LayoutSettings

router = APIRouter()


@router.get("")
async def get_config():
    """Return settings.json contents plus the effective layout settings."""
    settings = await get_settings()
    layout = await get_layout_settings()
    return {"config": settings, "layout": layout.model_dump(by_alias=True)}


@router.post("")
async def save_config(body: dict = Body(...)):
    """Overwrite settings.json with request body. The layout section must validate."""
    try:
        LayoutSettings.model_validate(body.get("layout") or {})
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    await save_settings(body)
    return {"success": True}
