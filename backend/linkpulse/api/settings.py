from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.settings import PlatformSettings
from ..services.preferences import get_platform_settings, save_platform_settings

router = APIRouter()


@router.get("/settings", response_model=PlatformSettings)
async def read_settings(db: Session = Depends(get_db)):
    return get_platform_settings(db)


@router.put("/settings", response_model=PlatformSettings)
async def update_settings(preferences: PlatformSettings, db: Session = Depends(get_db)):
    """Replace all platform preferences"""
    return save_platform_settings(db, preferences)
