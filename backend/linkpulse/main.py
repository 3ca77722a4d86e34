import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware

from .api import analytics, links
from .api import settings as settings_api
from .api.deps import get_link_service
from .config import settings
from .database import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and load (or seed) the link collection before serving"""
    init_db()
    service = get_link_service()
    logger.info("LinkPulse started with %d links", len(service.store))
    yield


# Initialize FastAPI app
app = FastAPI(
    title="LinkPulse",
    description="AI-enriched link dashboard with click analytics",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[links.PERSISTENCE_WARNING_HEADER],
)

# Dashboard shell lives in ../../frontend when present
frontend_path = Path(__file__).parent.parent.parent / "frontend"

if frontend_path.exists() and (frontend_path / "static").exists():
    app.mount("/static", StaticFiles(directory=str(frontend_path / "static")), name="static")

# Include routers
app.include_router(links.router, prefix="/api", tags=["links"])
app.include_router(analytics.router, prefix="/api", tags=["analytics"])
app.include_router(settings_api.router, prefix="/api", tags=["settings"])


# Root endpoint - serve dashboard page
@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the dashboard page"""
    index_file = frontend_path / "index.html"
    if index_file.exists():
        return HTMLResponse(content=index_file.read_text(encoding='utf-8'))
    return HTMLResponse(content="<h1>LinkPulse</h1><p>Service is running.</p>")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "LinkPulse"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
