import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys (API and snapshot format)"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class HistoryPoint(CamelModel):
    """Clicks recorded for one calendar day"""
    date: datetime.date
    clicks: int = Field(0, ge=0)


class LinkAnalytics(CamelModel):
    """Click analytics owned by a single link"""
    clicks: int = Field(0, ge=0)
    history: List[HistoryPoint] = []
    last_clicked: Optional[datetime.datetime] = None


class EnrichmentData(CamelModel):
    """AI-derived (or fallback) metadata for a URL"""
    title: str
    tags: List[str]
    summary: str


class Link(CamelModel):
    """A submitted URL plus derived metadata and click analytics"""
    id: str
    original_url: str
    short_code: str
    title: str
    tags: List[str]
    summary: str
    created_at: datetime.datetime
    analytics: LinkAnalytics


class LinkCreate(CamelModel):
    """Schema for submitting a URL"""
    url: str = Field(..., description="Original URL to shorten")


class LinkResponse(Link):
    """Link as returned by the API, with its display short URL"""
    short_url: str
