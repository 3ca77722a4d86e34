import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..config import settings
from ..core.storage import read_slot, write_slot
from ..schemas.settings import PlatformSettings

logger = logging.getLogger(__name__)


def get_platform_settings(db: Session, key: Optional[str] = None) -> PlatformSettings:
    """Stored platform settings, or the defaults when none are stored"""
    key = key or settings.SETTINGS_KEY
    try:
        data = read_slot(db, key)
        if data is not None:
            return PlatformSettings.model_validate(data)
    except (ValueError, ValidationError):
        logger.warning("Invalid platform settings under %r, using defaults", key)
    return PlatformSettings()


def save_platform_settings(db: Session, preferences: PlatformSettings, key: Optional[str] = None) -> PlatformSettings:
    """Overwrite the stored platform settings"""
    write_slot(db, key or settings.SETTINGS_KEY, preferences.model_dump(mode="json", by_alias=True))
    logger.info("Platform settings updated: %s", preferences.model_dump())
    return preferences
