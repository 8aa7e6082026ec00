"""
Cookie Session Auth - Main Application
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .auth import InvalidCredentials
from .config import settings
from .dependencies import init_dependencies, close_dependencies
from .middleware import SessionRefreshMiddleware
from .routes import auth_router, pages_router, invalid_credentials_handler

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    logger.info("Starting Cookie Session Auth...")
    init_dependencies()
    logger.info("Application ready")
    yield
    logger.info("Shutting down...")
    close_dependencies()


# Create app
app = FastAPI(
    title="Cookie Session Auth",
    description="Signed cookie sessions with sliding refresh and flash messages",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(SessionRefreshMiddleware)
app.add_exception_handler(InvalidCredentials, invalid_credentials_handler)

# Include routers
app.include_router(auth_router)
app.include_router(pages_router)


@app.get("/health")
async def health():
    """Health check endpoint (no auth required)."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
