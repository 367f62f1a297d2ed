# activity_log/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from activity_log.api.middleware import CorrelationIdMiddleware, RequestAuditMiddleware
from activity_log.api.routers import health, user_logs
from activity_log.application.exceptions import ApplicationError
from activity_log.config.logging import configure_logging
from activity_log.config.settings import get_settings
from activity_log.domain.exceptions import DomainError, InvalidInputError, NotFoundError
from activity_log.infrastructure.database.session import init_models

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables_on_startup:
        await init_models()
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> RequestAudit.
app.add_middleware(RequestAuditMiddleware)
app.add_middleware(CorrelationIdMiddleware)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request, exc: RequestValidationError):
    """Malformed query or body values (e.g. page=abc, unparseable startDate) are invalid input."""
    errors = exc.errors()
    if not errors:
        return _error(400, "Invalid request")
    first = errors[0]
    field = ".".join(str(part) for part in first["loc"] if part not in ("query", "body", "path"))
    return _error(400, f"Invalid value for {field or 'request'}: {first['msg']}")


@app.exception_handler(InvalidInputError)
async def invalid_input_error_handler(request, exc: InvalidInputError):
    return _error(400, exc.message)


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request, exc: NotFoundError):
    return _error(404, exc.message)


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return _error(400, exc.message)


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    logger.error("application_error", extra={"error": exc.message, "path": request.url.path})
    return _error(500, "Internal server error")


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.exception("unexpected_error", extra={"path": request.url.path})
    return _error(500, "Internal server error")


# Routers: /health, /user-logs
app.include_router(health.router)
app.include_router(user_logs.router, prefix="/user-logs", tags=["user-logs"])
