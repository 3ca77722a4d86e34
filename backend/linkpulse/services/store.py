"""
In-memory link collection mirrored to a persistent key-value slot.

The whole collection is written as one JSON snapshot after every mutation.
Mutations and snapshot writes are serialized by a single lock.
"""

import logging
import random
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..core.storage import read_slot, write_slot
from ..schemas.link import Link, LinkAnalytics
from .analytics import build_history

logger = logging.getLogger(__name__)


def demo_links(history_days: int = 7) -> List[Link]:
    """Sample links used when no snapshot exists yet"""
    now = datetime.now(timezone.utc)
    return [
        Link(
            id="1",
            original_url="https://developer.google.com/gemini",
            short_code="gm-dev",
            title="Google Gemini Developers",
            tags=["AI", "Google", "Dev"],
            summary="Powerful generative AI models for developers.",
            created_at=now - timedelta(days=3),
            analytics=LinkAnalytics(
                clicks=1245,
                history=build_history(history_days, clicks=lambda: random.randint(100, 299)),
            ),
        ),
        Link(
            id="2",
            original_url="https://tailwindcss.com/docs/installation",
            short_code="tw-docs",
            title="Tailwind CSS Installation",
            tags=["UI", "CSS", "Framework"],
            summary="Quick start guide for Tailwind CSS styling.",
            created_at=now - timedelta(days=1),
            analytics=LinkAnalytics(
                clicks=856,
                history=build_history(history_days, clicks=lambda: random.randint(50, 149)),
            ),
        ),
    ]


def matches(link: Link, term: str) -> bool:
    """Case-insensitive substring match on title, original URL or any tag"""
    needle = term.lower()
    return (
        needle in link.title.lower()
        or needle in link.original_url.lower()
        or any(needle in tag.lower() for tag in link.tags)
    )


class LinkStore:
    """Ordered link collection, most recent first"""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        key: Optional[str] = None,
        seed_demo: Optional[bool] = None
    ):
        self.session_factory = session_factory
        self.key = key or settings.STORAGE_KEY
        self.seed_demo = settings.SEED_DEMO_DATA if seed_demo is None else seed_demo
        self.last_save_error: Optional[str] = None
        self._links: List[Link] = []
        self._lock = threading.RLock()
        self.load()

    def _seed(self) -> None:
        self._links = demo_links(settings.HISTORY_DAYS) if self.seed_demo else []
        logger.info("Seeded %d links under %r", len(self._links), self.key)
        self.save()

    def load(self) -> None:
        """Rehydrate from the snapshot, seeding when it is absent or corrupt"""
        with self._lock:
            db = self.session_factory()
            try:
                data = read_slot(db, self.key)
            except ValueError:
                logger.warning("Corrupt link snapshot under %r, reseeding", self.key)
                data = None
            except SQLAlchemyError as e:
                db.rollback()
                logger.warning("Failed to read links under %r, reseeding: %s", self.key, e)
                data = None
            finally:
                db.close()

            if data is None:
                self._seed()
                return

            try:
                self._links = [Link.model_validate(item) for item in data]
            except (TypeError, ValidationError):
                logger.warning("Invalid link snapshot under %r, reseeding", self.key)
                self._seed()
                return

            logger.info("Loaded %d links from %r", len(self._links), self.key)

    def snapshot(self) -> list:
        """The collection in its persisted JSON form"""
        with self._lock:
            return [link.model_dump(mode="json", by_alias=True) for link in self._links]

    def save(self) -> bool:
        """
        Overwrite the persistent slot with the full collection.

        Returns:
            True on success. On failure the in-memory state is kept,
            the error is logged and remembered in last_save_error.
        """
        with self._lock:
            db = self.session_factory()
            try:
                write_slot(db, self.key, self.snapshot())
            except SQLAlchemyError as e:
                db.rollback()
                self.last_save_error = str(e)
                logger.warning("Failed to persist links under %r: %s", self.key, e)
                return False
            finally:
                db.close()

            self.last_save_error = None
            return True

    def create(self, link: Link) -> Link:
        """Prepend a new link and persist"""
        with self._lock:
            if any(existing.id == link.id for existing in self._links):
                raise ValueError(f"Link id {link.id!r} already exists")
            self._links.insert(0, link)
            self.save()
        return link

    def delete(self, link_id: str) -> bool:
        """Remove a link by id. Absent ids are a no-op."""
        with self._lock:
            remaining = [link for link in self._links if link.id != link_id]
            if len(remaining) == len(self._links):
                return False
            self._links = remaining
            self.save()
        return True

    def get(self, link_id: str) -> Optional[Link]:
        with self._lock:
            for link in self._links:
                if link.id == link_id:
                    return link
        return None

    def query(self, term: Optional[str] = None) -> List[Link]:
        with self._lock:
            if not term:
                return list(self._links)
            return [link for link in self._links if matches(link, term)]

    def short_codes(self) -> set:
        with self._lock:
            return {link.short_code for link in self._links}

    def __len__(self) -> int:
        return len(self._links)
