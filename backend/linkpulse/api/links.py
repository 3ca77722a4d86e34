import io
import logging
from typing import List, Optional

import qrcode
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ..core.exceptions import InvalidUrlError, LinkNotFoundError
from ..core.shortener import build_short_url
from ..database import get_db
from ..schemas.link import Link, LinkCreate, LinkResponse
from ..services.links import LinkService
from ..services.preferences import get_platform_settings
from .deps import get_link_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/links")

PERSISTENCE_WARNING_HEADER = "X-Persistence-Warning"


def to_response(link: Link, domain: str) -> LinkResponse:
    return LinkResponse(**link.model_dump(), short_url=build_short_url(domain, link.short_code))


def flag_persistence_failure(response: Response, service: LinkService) -> None:
    """Mutations succeed in memory even if the snapshot write failed"""
    if service.store.last_save_error:
        response.headers[PERSISTENCE_WARNING_HEADER] = "Changes are kept in memory only; saving to storage failed"


def _get_or_404(service: LinkService, link_id: str) -> Link:
    try:
        return service.get_link(link_id)
    except LinkNotFoundError:
        raise HTTPException(status_code=404, detail="Link not found")


@router.post("", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link(
    link_data: LinkCreate,
    response: Response,
    db: Session = Depends(get_db),
    service: LinkService = Depends(get_link_service)
):
    """
    Enrich a URL and add it to the collection.

    Enrichment never fails the request; only an invalid URL does.
    """
    preferences = get_platform_settings(db)

    try:
        link = await service.create_link(link_data.url, auto_enrichment=preferences.auto_enrichment)
    except InvalidUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))

    flag_persistence_failure(response, service)
    return to_response(link, preferences.link_domain)


@router.get("", response_model=List[LinkResponse])
async def list_links(
    search: Optional[str] = Query(None, description="Match against title, URL or tags"),
    db: Session = Depends(get_db),
    service: LinkService = Depends(get_link_service)
):
    """Links in collection order, most recent first"""
    domain = get_platform_settings(db).link_domain
    return [to_response(link, domain) for link in service.search(search)]


@router.get("/{link_id}", response_model=LinkResponse)
async def get_link(
    link_id: str,
    db: Session = Depends(get_db),
    service: LinkService = Depends(get_link_service)
):
    link = _get_or_404(service, link_id)
    return to_response(link, get_platform_settings(db).link_domain)


@router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_link(
    link_id: str,
    response: Response,
    service: LinkService = Depends(get_link_service)
):
    """Delete a link. Unknown ids are a no-op."""
    if service.delete_link(link_id):
        flag_persistence_failure(response, service)
    return None


@router.get("/{link_id}/qr")
async def get_qr_code(
    link_id: str,
    db: Session = Depends(get_db),
    service: LinkService = Depends(get_link_service)
):
    """PNG QR code pointing at the link's original URL"""
    if not get_platform_settings(db).qr_codes:
        raise HTTPException(status_code=403, detail="QR code generation is disabled")

    link = _get_or_404(service, link_id)

    img = qrcode.make(link.original_url)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    logger.info("Generated QR code for link: %s", link.short_code)
    return StreamingResponse(buf, media_type="image/png")
