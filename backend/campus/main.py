"""Main FastAPI application."""
import json
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from campus.api.admin import router as admin_router
from campus.api.content import router as content_router
from campus.api.notifications import router as notifications_router
from campus.api.roles import router as roles_router
from campus.domain.common.errors import (
    AuthorizationError,
    ImmutableFieldError,
    NotFoundError,
    ValidationError,
)
from campus.domain.roles.services import RoleRegistry
from campus.infra.db.base import Base, dispose_engine, get_engine, get_sessionmaker
from campus.infra.db.document_store import SqlDocumentStore
from campus.infra.db.models import DocumentModel  # noqa: F401  (registers the table)
from campus.infra.db.repositories.preferences_repo import PreferencesRepositoryImpl
from campus.infra.db.repositories.role_repo import RoleRepositoryImpl
from campus.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def seed_default_roles() -> None:
    """Create missing default roles."""
    async with get_sessionmaker()() as session:
        store = SqlDocumentStore(session)
        registry = RoleRegistry(RoleRepositoryImpl(store), PreferencesRepositoryImpl(store))
        await registry.seed_default_roles()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    try:
        if settings.create_tables_on_startup:
            async with get_engine().begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        if settings.seed_default_roles:
            await seed_default_roles()
    except Exception as e:
        # Don't fail startup - database might not be ready yet
        logger.warning("Could not initialize database during startup: %s", e)

    yield

    # Shutdown
    await dispose_engine()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["*"],
    max_age=3600,
)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        logger.info("[REQUEST] %s %s", request.method, request.url.path)
        logger.debug("   Query params: %s", dict(request.query_params))

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            "[RESPONSE] %s %s - %s (%.3fs)",
            request.method, request.url.path, response.status_code, process_time,
        )
        return response


# Add logging middleware AFTER CORS (CORS must be first)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed logging."""
    logger.error("[VALIDATION ERROR] %s %s", request.method, request.url.path)
    errors = exc.errors()
    logger.error("   Validation errors (%d):", len(errors))
    for i, error in enumerate(errors, 1):
        logger.error("   Error %d: %s", i, json.dumps(error, indent=2, default=str))
    return JSONResponse(
        status_code=422,
        content={"detail": json.loads(json.dumps(errors, default=str))},
    )


# Domain error handlers: map domain exceptions to correct HTTP status
@app.exception_handler(NotFoundError)
async def domain_not_found_handler(request: Request, exc: NotFoundError):
    """Return 404 when a resource is not found."""
    return JSONResponse(
        status_code=404,
        content={"detail": f"{exc.resource} no longer exists, please refresh"},
    )


@app.exception_handler(AuthorizationError)
async def domain_authorization_handler(request: Request, exc: AuthorizationError):
    """Return 403 when the user is not authorized."""
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(ValidationError)
async def domain_validation_handler(request: Request, exc: ValidationError):
    """Return 422 for domain validation errors."""
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(ImmutableFieldError)
async def domain_immutable_handler(request: Request, exc: ImmutableFieldError):
    """Return 409 when a protected field would change."""
    return JSONResponse(status_code=409, content={"detail": exc.message})


# Health check (root and under /v1 so GET /v1/health works when proxied with /v1 prefix)
@app.get("/health")
@app.get(f"{settings.api_v1_prefix}/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/ready")
async def readiness():
    """Readiness endpoint: run all checks and return 200 if ready, 503 otherwise."""
    from campus.readiness import is_ready, run_all_checks_async
    checks = await run_all_checks_async()
    ready, summary = is_ready(checks)
    if ready:
        return {"ready": True, "checks": summary}
    return JSONResponse(status_code=503, content={"ready": False, "checks": summary})


# API v1 routes
app.include_router(roles_router, prefix=settings.api_v1_prefix)
app.include_router(content_router, prefix=settings.api_v1_prefix)
app.include_router(notifications_router, prefix=settings.api_v1_prefix)
app.include_router(admin_router, prefix=settings.api_v1_prefix)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("campus.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
