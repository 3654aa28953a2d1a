"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog import RoleCatalog
from cli.config import get_paths
from observability import log_metrics_summary, metrics
from store import init_db, set_default_db_path
from store.learning import seed_resources
from web.deps import get_config, get_registry
from web.routes import (
    activity,
    advisor,
    dashboard,
    gaps,
    goals,
    learning,
    resources,
    roles,
    settings,
    skills,
    target_role,
)

logger = structlog.get_logger()


def _verify_secret_key() -> None:
    """Canary check: encrypt+decrypt roundtrip with SECRET_KEY on startup."""
    key = os.getenv("SECRET_KEY")
    if not key:
        logger.critical("crypto.secret_key_missing")
        raise RuntimeError("SECRET_KEY required")
    from web.crypto import decrypt_value, encrypt_value

    canary = "canary-check"
    enc = encrypt_value(key, canary)
    dec = decrypt_value(key, enc, key_name="canary")
    if dec != canary:
        logger.critical("crypto.canary_failed")
        raise RuntimeError("SECRET_KEY canary failed")
    logger.info("crypto.canary_ok")


@asynccontextmanager
async def lifespan(app: FastAPI):
    set_default_db_path(get_paths(get_config().to_dict())["db_path"])
    init_db()
    if get_config().web.seed_on_startup:
        RoleCatalog().seed()
        seed_resources()
    _verify_secret_key()
    logger.info("web.startup")
    yield
    get_registry().clear()
    log_metrics_summary()
    logger.info("web.shutdown")


app = FastAPI(
    title="Upcraft",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origin
frontend_origin = os.getenv("FRONTEND_ORIGIN", get_config().web.frontend_origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routes
app.include_router(settings.router)
app.include_router(roles.router)
app.include_router(skills.router)
app.include_router(goals.router)
app.include_router(target_role.router)
app.include_router(gaps.router)
app.include_router(dashboard.router)
app.include_router(learning.router)
app.include_router(resources.router)
app.include_router(activity.router)
app.include_router(advisor.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "sessions": len(get_registry()), "metrics": metrics.summary()}
