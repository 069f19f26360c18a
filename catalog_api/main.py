"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_api.api.v1 import health
from catalog_api.api.v1 import router as v1_router
from catalog_api.core.config import Settings, get_settings
from catalog_api.core.errors import DomainError, ErrorKind
from catalog_api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

# Every ErrorKind must appear here; anything unmapped is a 500.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INACTIVE_ACCOUNT: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}

REQUEST_ID_HEADER = "X-Request-ID"

# Documented error bodies for every versioned route.
ERROR_RESPONSES: dict[int | str, dict] = {
    code: {"model": ErrorResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_409_CONFLICT,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def _error_response(
    status_code: int, body: ErrorResponse, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _register_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
        headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.INVALID_TOKEN else None
        return _error_response(status_code, ErrorResponse(detail=exc.message), headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(detail="Invalid request body", errors=jsonable_encoder(exc.errors()))
        return _error_response(status.HTTP_400_BAD_REQUEST, body)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"method": request.method, "path": request.url.path},
        )
        body = ErrorResponse(detail="An unexpected error occurred")
        if settings.APP_ENV == "dev":
            body.error = f"{type(exc).__name__}: {exc}"
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, body)


def _register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        log_extra: dict[str, str | int | float | None] = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "latency_seconds": round(time.perf_counter() - start, 6),
            "client_ip": request.client.host if request.client else None,
        }
        user_id = getattr(request.state, "user_id", None)
        if user_id is not None:
            log_extra["user_id"] = user_id
        logger.info("Request handled", extra=log_extra)
        return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application from explicit settings (defaults to the cached env settings)."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Catalog API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests to a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization", REQUEST_ID_HEADER],
    )
    _register_request_logging(app)
    _register_error_handlers(app, settings)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX, responses=ERROR_RESPONSES)
    app.include_router(health.root_router, tags=["health"])

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Catalog API"}

    return app


app = create_app()
