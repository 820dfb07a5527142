"""
Restaurant API
Menus, inventory, recipes, tables, reservations, orders and reviews behind one FastAPI app
"""

import os
from contextlib import asynccontextmanager

from alembic import command
from alembic.config import Config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from restaurant.api.responses import register_exception_handlers
from restaurant.api.routes import (
    auth, ingredients, inventory, menus, orders, recipes, reservations, reviews, tables, users,
)
from restaurant.core_settings import get_settings
from restaurant.infrastructure.db import get_engine, init_models
from shared.core import RequestLoggingMiddleware, ServiceHealth, get_logger, setup_logging

settings = get_settings()

SERVICE_NAME = settings.SERVICE_NAME
SERVICE_VERSION = settings.SERVICE_VERSION
SERVICE_DESCRIPTION = "Restaurant management API"
PROJECT_ROOT = os.path.join(os.path.dirname(__file__), "..")

setup_logging(service_name=SERVICE_NAME, level=settings.LOG_LEVEL, version=SERVICE_VERSION)

logger = get_logger(__name__)


def run_migrations() -> None:
    config = Config(os.path.join(PROJECT_ROOT, "alembic.ini"))
    config.set_main_option("script_location", os.path.join(PROJECT_ROOT, "alembic"))
    config.attributes["configure_logger"] = False
    command.upgrade(config, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Restaurant API starting",
        extra={"extra_fields": {"version": SERVICE_VERSION, "run_migrations": settings.RUN_MIGRATIONS}},
    )
    os.makedirs(os.path.join(settings.UPLOAD_DIR, "menu"), exist_ok=True)

    if settings.RUN_MIGRATIONS:
        try:
            run_migrations()
        except Exception:
            # create_all below still brings up a fresh database
            logger.error("alembic upgrade head failed", exc_info=True)
        else:
            logger.info("Database migrated to head")

    init_models()
    yield
    logger.info("Restaurant API stopped")


app = FastAPI(
    title=SERVICE_NAME,
    description=SERVICE_DESCRIPTION,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

health_service = ServiceHealth(SERVICE_NAME, SERVICE_VERSION, engine_provider=get_engine)
app.include_router(health_service.create_health_router())

app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

for module in (auth, users, tables, menus, ingredients, inventory, recipes, reservations, orders, reviews):
    app.include_router(module.router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/api/docs",
    }


@app.get("/info")
async def info():
    """Service information endpoint"""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "health": "/health",
            "ready": "/health/ready",
            "live": "/health/live",
            "metrics": "/metrics",
            "docs": "/api/docs",
        },
    }
