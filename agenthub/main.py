import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from agenthub.api.v1.router import api_router
from agenthub.core.config import settings
from agenthub.core.seed import seed_on_startup
from agenthub.services.scheduler import start_scheduler, shutdown_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    await seed_on_startup()
    if settings.SCHEDULER_ENABLED:
        await start_scheduler()
    yield
    shutdown_scheduler()


app = FastAPI(
    title="Agent Hub API",
    description="Outreach agent dashboard backend: Instagram lead pipeline, agent webhooks and schedules",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


@app.get("/health")
async def health():
    return {"status": "ok", "service": "agent-hub-api", "version": "0.1.0"}
