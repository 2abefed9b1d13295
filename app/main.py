"""FastAPI application for the inventory tracker."""

import logging
from datetime import datetime
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.auth.router import router as auth_router
from app.config import get_settings
from app.errors import setup_exception_handlers
from app.middleware import limiter, SecurityHeadersMiddleware
from app.products import products_router, export_router
from app.storage.database import init_database, close_database, database_backend

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting inventory backend...")
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info(f"Environment: {settings.app_env}")

    if not settings.jwt_secret:
        if settings.is_production:
            raise RuntimeError("JWT_SECRET must be set in production")
        logger.warning("JWT_SECRET not set - using development secret")

    await init_database()
    logger.info("Database initialized")

    yield

    await close_database()
    logger.info("Shutting down inventory backend...")


# Initialize FastAPI app
app = FastAPI(
    title="Inventory API",
    description="Product inventory with role-based access and Excel export",
    version="1.0.0",
    lifespan=lifespan,
)

# Get settings for CORS configuration
settings = get_settings()

# Configure CORS based on environment
if settings.is_production and settings.cors_origin_list:
    # Production: Use configured origins
    cors_origins = settings.cors_origin_list
else:
    # Development: Allow all origins
    cors_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)
app.add_middleware(SecurityHeadersMiddleware)

app.state.limiter = limiter
setup_exception_handlers(app)

app.include_router(auth_router)
app.include_router(products_router)
app.include_router(export_router)


@app.get("/api/health", tags=["Health"])
async def health_check():
    """Liveness probe."""
    return {
        "status": "healthy",
        "database": database_backend(),
        "timestamp": datetime.utcnow().isoformat(),
    }


# Frontend last so API routes take precedence
app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="frontend")
