"""Main FastAPI application."""
import asyncio
import json
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from coaching_config.api.admin import router as admin_router
from coaching_config.api.catalog import router as catalog_router
from coaching_config.api.deps import get_runtime
from coaching_config.api.expectations import router as expectations_router
from coaching_config.api.forms import router as forms_router
from coaching_config.domain.common.errors import (
    AuthorizationError as DomainAuthorizationError,
    ConflictError as DomainConflictError,
    ConflictingExpectationError,
    IdentityNotFoundError,
    LockTimeoutError,
    NotFoundError as DomainNotFoundError,
    ValidationError as DomainValidationError,
)
from coaching_config.runtime import AppRuntime
from coaching_config.settings import get_settings, settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    runtime = AppRuntime.from_settings(get_settings())
    app.state.runtime = runtime
    try:
        await runtime.start()
    except Exception as e:
        # Database might not be ready yet; /ready reports it
        logger.warning("Runtime startup incomplete: %s", e)

    yield

    # Shutdown
    try:
        await runtime.close()
    except asyncio.CancelledError:
        logger.info("Lifespan shutdown cancelled (e.g. Ctrl+C); cleanup attempted.")
        raise


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
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
            "[RESPONSE] %s %s - %d (%.3fs)",
            request.method, request.url.path, response.status_code, process_time,
        )
        return response


# Add logging middleware AFTER CORS (CORS must be first)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors with detailed logging."""
    errors = exc.errors()
    logger.warning("[VALIDATION ERROR] %s %s (%d errors)", request.method, request.url.path, len(errors))
    for i, error in enumerate(errors, 1):
        logger.debug("   Error %d: %s", i, json.dumps(error, default=str))
    return JSONResponse(
        status_code=422,
        content={"detail": errors, "error": "RequestValidation"},
    )


# Domain error handlers: map domain exceptions to correct HTTP status
@app.exception_handler(DomainNotFoundError)
async def domain_not_found_handler(request: Request, exc: DomainNotFoundError):
    """Return 404 when a resource is not found."""
    return JSONResponse(
        status_code=404,
        content={
            "detail": str(exc),
            "error": "NotFound",
            "resource": exc.resource,
            "identifier": exc.identifier,
        },
    )


@app.exception_handler(DomainAuthorizationError)
async def domain_authorization_handler(request: Request, exc: DomainAuthorizationError):
    """Return 403 when the user is not authorized."""
    return JSONResponse(
        status_code=403,
        content={"detail": exc.message, "error": "Authorization"},
    )


@app.exception_handler(IdentityNotFoundError)
async def identity_not_found_handler(request: Request, exc: IdentityNotFoundError):
    """Return 403 when the caller has no employee record to stamp audit fields with."""
    return JSONResponse(
        status_code=403,
        content={"detail": exc.message, "error": "IdentityNotFound", "identity": exc.identity},
    )


@app.exception_handler(DomainValidationError)
async def domain_validation_handler(request: Request, exc: DomainValidationError):
    """Return 422 for domain validation errors."""
    logger.warning("[VALIDATION FAILED] %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "error": "ValidationFailed"},
    )


@app.exception_handler(ConflictingExpectationError)
async def conflicting_expectation_handler(request: Request, exc: ConflictingExpectationError):
    """Return 409 with the id of the expectation that overlaps."""
    return JSONResponse(
        status_code=409,
        content={
            "detail": exc.message,
            "error": "ConflictingExpectation",
            "conflicting_id": exc.conflicting_id,
            "resource_id": exc.resource_id,
        },
    )


@app.exception_handler(DomainConflictError)
async def domain_conflict_handler(request: Request, exc: DomainConflictError):
    """Return 409 for conflict errors."""
    return JSONResponse(
        status_code=409,
        content={"detail": exc.message, "error": "Conflict"},
    )


@app.exception_handler(LockTimeoutError)
async def lock_timeout_handler(request: Request, exc: LockTimeoutError):
    """Return 503 when the store stayed locked past the timeout."""
    return JSONResponse(
        status_code=503,
        content={"detail": exc.message, "error": "LockTimeout", "timeout_seconds": exc.timeout_seconds},
    )


# Health check (root and under /v1)
@app.get("/health")
@app.get(f"{settings.api_v1_prefix}/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/ready")
async def readiness(request: Request):
    """Readiness endpoint: run all checks and return 200 if ready, 503 otherwise."""
    from coaching_config.readiness import is_ready, run_all_checks_async
    checks = await run_all_checks_async(get_runtime(request))
    ready, summary = is_ready(checks)
    if ready:
        return {"ready": True, "checks": summary}
    return JSONResponse(
        status_code=503,
        content={"ready": False, "checks": summary},
    )


# API v1 routes
app.include_router(admin_router, prefix=settings.api_v1_prefix, tags=["admin"])
app.include_router(expectations_router, prefix=settings.api_v1_prefix, tags=["expectations"])
app.include_router(forms_router, prefix=settings.api_v1_prefix, tags=["forms"])
app.include_router(catalog_router, prefix=settings.api_v1_prefix, tags=["catalog"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("coaching_config.main:app", host="0.0.0.0", port=8000, reload=True)
