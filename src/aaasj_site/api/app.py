"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aaasj_site.api.auth import router as auth_router
from aaasj_site.api.events import router as events_router
from aaasj_site.api.google_photos import router as google_photos_router
from aaasj_site.api.photos import router as photos_router
from aaasj_site.api.scholarship import router as scholarship_router
from aaasj_site.api.security import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    SECURITY_HEADERS,
    client_ip,
    generate_csp_header,
)
from aaasj_site.app_logging import configure_logging
from aaasj_site.config import parse_allowed_origins, validate_environment
from aaasj_site.containers import AppContainer
from aaasj_site.errors import SiteError

RATE_LIMITED_PREFIX = "/api/"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_file)
    logger = logging.getLogger(__name__)
    for problem in validate_environment(container.settings):
        logger.error("Configuration problem: %s", problem)
    allowed_origins = parse_allowed_origins(container.settings.allowed_origins)
    content_security_policy = generate_csp_header()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(events_router)
    app.include_router(photos_router)
    app.include_router(google_photos_router)
    app.include_router(scholarship_router)

    @app.exception_handler(SiteError)
    async def site_error_handler(request: Request, exc: SiteError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code, content={"detail": exc.message}
        )

    @app.middleware("http")
    async def security_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        state_container: AppContainer = request.app.state.container
        if request.url.path.startswith(RATE_LIMITED_PREFIX):
            ip = client_ip(request)
            if state_container.rate_limiter.is_limited(ip):
                logger.warning("Rate limit exceeded for %s", ip)
                response: Response = JSONResponse(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    content={"error": "Too many requests"},
                )
                return _with_security_headers(response, content_security_policy)
        response = await call_next(request)
        return _with_security_headers(response, content_security_policy)

    # Added last so it wraps the security middleware.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=sorted(allowed_origins),
        allow_credentials=True,
        allow_methods=list(CORS_ALLOW_METHODS),
        allow_headers=list(CORS_ALLOW_HEADERS),
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _with_security_headers(
    response: Response, content_security_policy: str
) -> Response:
    response.headers["Access-Control-Allow-Methods"] = ", ".join(CORS_ALLOW_METHODS)
    response.headers["Access-Control-Allow-Headers"] = ", ".join(CORS_ALLOW_HEADERS)
    response.headers.update(SECURITY_HEADERS)
    response.headers["Content-Security-Policy"] = content_security_policy
    return response
