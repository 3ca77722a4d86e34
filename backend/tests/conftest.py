import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from linkpulse.database import init_db
from linkpulse.schemas.link import EnrichmentData
from linkpulse.services.links import LinkService
from linkpulse.services.store import LinkStore


class StubEnrichment:
    """Records calls and returns a canned result"""

    def __init__(self, result=None):
        self.result = result or EnrichmentData(title="Example", tags=["a", "b", "c"], summary="s")
        self.calls = []

    async def analyze(self, url):
        self.calls.append(url)
        return self.result


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def store(session_factory):
    return LinkStore(session_factory, seed_demo=False)


@pytest.fixture
def stub_enrichment():
    return StubEnrichment()


@pytest.fixture
def link_service(store, stub_enrichment):
    return LinkService(store=store, enrichment=stub_enrichment)


@pytest.fixture
def client(session_factory, link_service):
    from linkpulse.api.deps import get_link_service
    from linkpulse.database import get_db
    from linkpulse.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_link_service] = lambda: link_service
    # No context manager: startup would load the on-disk store
    yield TestClient(app)
    app.dependency_overrides.clear()
