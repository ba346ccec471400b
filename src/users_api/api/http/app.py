"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.users_api import __version__
from src.users_api.api.http.app_data import ApplicationDependencies, build_dependencies
from src.users_api.api.http.routers.health import router as health_router
from src.users_api.api.http.routers.users import router as users_router
from src.users_api.api.utils.app_startup import configure_logging
from src.users_api.runtime.context import get_config

# Initialize logging
configure_logging()


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
        "route_name": getattr(request.scope.get("route"), "name", None),
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
            # Never leak internal state to the client
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


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    # Dependencies may be supplied before startup
    if getattr(app.state, "app_dependencies", None) is None:
        app.state.app_dependencies = build_dependencies()


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        logger.info(
            "Discarding {} in-memory users", app_dependencies.user_repository.count()
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware and routers."""
    config = get_config()
    is_production = config.app.environment == "production"

    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    application = FastAPI(
        title=config.app.title,
        version=__version__,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    application.middleware("http")(log_requests)

    application.include_router(health_router)
    application.include_router(users_router)

    return application


app = create_app()

__all__ = ["app", "create_app", "startup", "shutdown"]


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        app,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
