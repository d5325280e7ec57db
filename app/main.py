import re
from contextlib import asynccontextmanager
from pathlib import Path

from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError

from app.api.deps import init_people_resolver, shutdown_people_resolver
from app.api.routes import health, search
from app.core.config import settings
from app.core.logging import get_logger
from app.schemas.api import ErrorResponse

log = get_logger("app")


def run_migrations() -> None:
    """Execute Alembic migrations programmatically on startup."""
    project_root = Path(__file__).resolve().parent.parent
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
    log.info("Running Alembic migrations to head")
    command.upgrade(alembic_cfg, "head")
    log.info("Alembic migrations applied")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"Starting research object search in {settings.ENV.upper()} mode")
    if settings.is_production:
        log.info("Production mode: Debug disabled, docs disabled, stricter logging")
    else:
        log.info("Development mode: Debug enabled, docs available")

    if settings.RUN_MIGRATIONS:
        try:
            run_migrations()
        except Exception:
            log.exception("Failed to apply migrations on startup")
            raise

    init_people_resolver()
    if settings.PEOPLE_SERVICE_URL:
        log.info(f"Creator names resolved via {settings.PEOPLE_SERVICE_URL}")
    else:
        log.warning("PEOPLE_SERVICE_URL not set: creator names fall back to identifiers")

    yield

    log.info("Shutting down services...")
    shutdown_people_resolver()
    log.info("Application shutdown complete")


app = FastAPI(
    title="Research Object Search",
    description="Read-only search over published research objects",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.debug_enabled,
)


@app.exception_handler(re.error)
async def invalid_creator_pattern(request: Request, exc: re.error) -> JSONResponse:
    log.warning(f"Rejected creator pattern on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content=ErrorResponse(detail=f"Invalid creator pattern: {exc}").model_dump())


@app.exception_handler(DataError)
async def invalid_query_input(request: Request, exc: DataError) -> JSONResponse:
    # PostgreSQL reports malformed title regexes as data errors
    log.warning(f"Rejected search input on {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=400, content=ErrorResponse(detail=f"Invalid search input: {exc.orig}").model_dump())


app.include_router(search.router)
app.include_router(health.router)
