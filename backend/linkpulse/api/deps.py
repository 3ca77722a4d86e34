from typing import Optional

from ..database import SessionLocal, init_db
from ..services.enrichment import EnrichmentService
from ..services.links import LinkService
from ..services.store import LinkStore

_link_service: Optional[LinkService] = None


def get_link_service() -> LinkService:
    """Process-wide link service; the store loads (or seeds) on first use"""
    global _link_service
    if _link_service is None:
        init_db()
        _link_service = LinkService(
            store=LinkStore(SessionLocal),
            enrichment=EnrichmentService(),
        )
    return _link_service
