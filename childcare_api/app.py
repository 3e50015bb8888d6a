from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .exceptions import ServiceError, InternalError
from .models.async_db import init_db, close_db
from .repositories.repository_manager import RepositoryManager
from .routes import all_routers
from .services.registry import ServiceRegistry

# Set up logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"


def problem_response(request: Request, error_type: str, title: str, status: int, detail: str) -> JSONResponse:
    """Render an error as an RFC 7807 problem document."""
    return JSONResponse(
        status_code=status,
        media_type=PROBLEM_JSON,
        content={
            "type": error_type,
            "title": title,
            "status": status,
            "detail": detail,
            "instance": f"{request.method} {request.url.path}",
        },
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return problem_response(request, type(exc).__name__, exc.title, exc.status_code, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return problem_response(request, type(exc).__name__, InternalError.title, 500, str(exc))


def create_app(services: Optional[ServiceRegistry] = None, init_database: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        services: Service registry to serve. Defaults to one backed by the
            database repositories.
        init_database: Check database connectivity at startup and dispose
            the engine at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_database:
            logger.info("Executing startup event: checking database...")
            await init_db(create_tables=config.DB_CREATE_TABLES)
        yield
        if init_database:
            await close_db()

    app = FastAPI(title="Childcare API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if services is None:
        store = RepositoryManager()
        services = ServiceRegistry(store)
    app.state.store = services.store
    app.state.services = services

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", include_in_schema=False)
    async def root():
        return "Childcare API is running"

    for router in all_routers:
        app.include_router(router, prefix=config.API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
