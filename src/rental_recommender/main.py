"""FastAPI application entry point."""

import structlog
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rental_recommender import __version__
from rental_recommender.api.v1.router import api_router
from rental_recommender.config import Settings, get_settings
from rental_recommender.infrastructure.database.connection import dispose_engine
from rental_recommender.infrastructure.redis import close_redis
from rental_recommender.middleware.request_context import RequestContextMiddleware


def configure_logging(settings: Settings) -> None:
    """Set up structlog: console output in debug, JSON lines otherwise."""
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    settings = get_settings()
    logger.info(
        "Starting Rental Recommender Service",
        app_env=settings.app_env,
        debug=settings.debug,
        recommendation_limit=settings.recommendation_limit,
    )

    yield

    await close_redis()
    await dispose_engine()
    logger.info("Shutting down Rental Recommender Service")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Rental Recommender API",
        description="Personalized rental property recommendations from user activity",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn: auto-reload in debug, worker processes otherwise."""
    import uvicorn

    settings = get_settings()
    options: dict[str, Any] = {"host": settings.api_host, "port": settings.api_port}
    if settings.debug:
        options["reload"] = True
    else:
        options["workers"] = settings.api_workers
    uvicorn.run("rental_recommender.main:app", **options)


if __name__ == "__main__":
    run()
