"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from src.bookshelf.api.http.app_data import ApplicationDependencies
from src.bookshelf.api.http.routers import authors, books, health
from src.bookshelf.api.utils.app_startup import configure_logging
from src.bookshelf.core.services import (
    BookAuthorUpdateService,
    DbManageService,
    DbSessionService,
)
from src.bookshelf.runtime.config.config_data import ConfigData, CORSConfig
from src.bookshelf.runtime.context import get_config


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        return response


class PreflightMiddleware(BaseHTTPMiddleware):
    """Answer every OPTIONS request with an empty 200 carrying the CORS headers."""

    def __init__(self, app, cors: CORSConfig):
        super().__init__(app)
        self.cors = cors

    async def dispatch(self, request: Request, call_next):
        if request.method != "OPTIONS":
            return await call_next(request)

        headers = {
            "Access-Control-Allow-Methods": ", ".join(self.cors.allow_methods),
            "Access-Control-Max-Age": str(self.cors.max_age),
        }

        origin = request.headers.get("origin")
        if "*" in self.cors.origins and not self.cors.allow_credentials:
            headers["Access-Control-Allow-Origin"] = "*"
        elif origin and ("*" in self.cors.origins or origin in self.cors.origins):
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        if self.cors.allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"

        requested_headers = request.headers.get("access-control-request-headers")
        if "*" in self.cors.allow_headers:
            headers["Access-Control-Allow-Headers"] = requested_headers or "*"
        else:
            headers["Access-Control-Allow-Headers"] = ", ".join(self.cors.allow_headers)

        return Response(status_code=200, headers=headers)


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            # Store failures end here as a 500; the process keeps serving
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject undecodable or invalid input with 400 instead of FastAPI's 422."""
    request_id = getattr(request.state, "request_id", "-")
    logger.bind(status_code=400, errors=len(exc.errors())).info(
        "request.validation_error"
    )
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors()), "request_id": request_id},
    )


# --- Lifecycle hooks ---
def startup(app: FastAPI, config: ConfigData) -> None:
    """Acquire the storage handle, create the schema and wire dependencies."""
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config)
    DbManageService(database_service.engine).create_all()

    app.state.app_dependencies = ApplicationDependencies(
        config=config,
        database_service=database_service,
        book_author_update_service=BookAuthorUpdateService(
            database_service,
            verify_book_author=config.catalog.verify_book_author,
        ),
    )


def shutdown(app: FastAPI) -> None:
    """Release the storage handle."""
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application for the given configuration (default: current context)."""
    config = config or get_config()

    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        startup(app, config)
        try:
            yield
        finally:
            shutdown(app)

    app = FastAPI(
        title="Bookshelf API",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )

    if config.app.environment == "production" and config.app.cors.allow_credentials and (
        "*" in config.app.cors.origins
    ):
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    # The last middleware added is the outermost; CORS wraps the logging 500s
    app.add_middleware(SecurityHeadersMiddleware)
    app.middleware("http")(log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
        max_age=config.app.cors.max_age,
    )
    app.add_middleware(PreflightMiddleware, cors=config.app.cors)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # --- Router registration ---
    app.include_router(health.router)
    app.include_router(authors.router, prefix=config.app.api_prefix)
    app.include_router(books.router, prefix=config.app.api_prefix)

    return app


app = create_app()

__all__ = ["app", "create_app", "startup", "shutdown"]


if __name__ == "__main__":
    import uvicorn

    # Access logging is handled by the request middleware
    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,
    )
