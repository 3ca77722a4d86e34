import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ..config import settings
from ..core.exceptions import InvalidUrlError, LinkNotFoundError
from ..core.shortener import generate_short_code
from ..schemas.link import EnrichmentData, Link, LinkAnalytics
from ..utils.validators import is_valid_url
from .analytics import build_history
from .enrichment import EnrichmentService, fallback_enrichment
from .store import LinkStore

logger = logging.getLogger(__name__)


class LinkService:
    """Presentation-facing link operations over a LinkStore"""

    def __init__(self, store: LinkStore, enrichment: EnrichmentService):
        self.store = store
        self.enrichment = enrichment

    async def create_link(self, url: str, auto_enrichment: bool = True) -> Link:
        """
        Validate, enrich and prepend a new link.

        Raises:
            InvalidUrlError: Before any enrichment call, with no state change
        """
        url = url.strip()
        is_valid, error_msg = is_valid_url(url)
        if not is_valid:
            raise InvalidUrlError(error_msg)

        # Enrichment runs outside the store lock
        if auto_enrichment:
            enrichment = await self.enrichment.analyze(url)
        else:
            enrichment = fallback_enrichment(url)

        link = self.build_link(url, enrichment)
        self.store.create(link)
        logger.info("Link created: %s -> %s", link.short_code, link.original_url)
        return link

    def build_link(self, url: str, enrichment: EnrichmentData) -> Link:
        """A fresh link with zeroed analytics and a zero-click history ending today"""
        return Link(
            id=str(uuid.uuid4()),
            original_url=url,
            short_code=generate_short_code(settings.SHORT_CODE_LENGTH, self.store.short_codes()),
            title=enrichment.title,
            tags=list(enrichment.tags),
            summary=enrichment.summary,
            created_at=datetime.now(timezone.utc),
            analytics=LinkAnalytics(clicks=0, history=build_history(settings.HISTORY_DAYS)),
        )

    def delete_link(self, link_id: str) -> bool:
        deleted = self.store.delete(link_id)
        if deleted:
            logger.info("Link deleted: %s", link_id)
        return deleted

    def get_link(self, link_id: str) -> Link:
        link = self.store.get(link_id)
        if link is None:
            raise LinkNotFoundError(link_id)
        return link

    def search(self, term: Optional[str] = None) -> List[Link]:
        return self.store.query(term)
