"""FastAPI application factory for Widget-Relay."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from widget_relay.common.config import get_settings
from widget_relay.common.exceptions import RelayError, ValidationError
from widget_relay.common.logging import setup_logging
from widget_relay.common.schemas import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(exclude_none=True)),
    )


def _validation_details(exc: RequestValidationError) -> list[dict]:
    # Drop the raw input: it may carry the API key being validated.
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
        return _error_response(
            exc.status_code,
            ErrorResponse(error=exc.message, code=exc.code, details=exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return await relay_error_handler(
            request, ValidationError(details=_validation_details(exc)),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(
            500, ErrorResponse(error="Internal server error", code="INTERNAL_ERROR"),
        )


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from widget_relay.deps import get_db
        db = get_db()
        await db.init()
        await db.create_all()
        yield
        # Shutdown
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    # Mount routers
    from widget_relay.chat_config.router import router as config_router
    from widget_relay.relay.router import router as relay_router
    from widget_relay.public.router import router as public_router
    from widget_relay.admin.router import router as admin_router

    prefix = settings.api_prefix
    app.include_router(config_router, prefix=prefix, tags=["config"])
    app.include_router(relay_router, prefix=prefix, tags=["chat"])
    app.include_router(public_router, prefix=prefix, tags=["public"])
    app.include_router(admin_router, prefix=prefix, tags=["admin"])

    return app
