import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.settings import (
    EmailTemplatePreview,
    EmailTemplatePreviewRequest,
    SettingsUpdateRequest,
)
from app.services import app_settings

logger = structlog.get_logger()
router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=dict[str, str])
async def get_settings(db: AsyncSession = Depends(get_db)):
    try:
        return await app_settings.get_settings(db)
    except SQLAlchemyError as e:
        logger.error("settings_read_error", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to load settings")


@router.put("")
async def update_settings(
    data: SettingsUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        await app_settings.bulk_update_settings(
            db,
            [(update.key, update.value) for update in data.updates],
            data.updated_by,
        )
    except SQLAlchemyError as e:
        logger.error("settings_update_error", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update settings")
    return {"success": True}


@router.post("/email-template/preview", response_model=EmailTemplatePreview)
async def preview_email_template(data: EmailTemplatePreviewRequest):
    extracted = app_settings.preview_email_template(data.template, data.local_part)
    if extracted is None:
        return EmailTemplatePreview(matched=False)
    first_name, last_name = extracted
    return EmailTemplatePreview(matched=True, first_name=first_name, last_name=last_name)
