import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from blogapi.config import settings
from blogapi.database import Database
from blogapi.exception_handlers import register_exception_handlers
from blogapi.graphql.schema import create_graphql_router
from blogapi.middleware.logging import HEALTH_PATH, StructuredLoggingMiddleware, setup_structured_logging
from blogapi.repositories.client import DataClient
from blogapi.services.post_service import PostService
from blogapi.utils.metrics import METRICS_PATH, metrics_endpoint, set_app_info
from blogapi.utils.query_counter import QueryCounter

setup_structured_logging(log_level=settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)


def build_database(query_counter: QueryCounter | None = None) -> Database:
    """Create the application database from settings."""
    if query_counter is None and settings.count_queries:
        query_counter = QueryCounter()
    return Database(
        settings.database_url,
        environment=settings.environment,
        query_counter=query_counter,
        query_monitor=settings.query_monitor_enabled,
        slow_query_threshold_ms=settings.slow_query_threshold_ms,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info("Starting up the application...")
    if settings.debug:
        await app.state.database.create_all()
    yield
    logger.info("Shutting down the application...")
    await app.state.database.dispose()


def create_app(database: Database | None = None) -> FastAPI:
    """Create the FastAPI application around ``database`` (built from settings when omitted)."""
    app = FastAPI(
        title=settings.app_name,
        description="Blog content API: posts with their authors and tags over GraphQL",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    database = database or build_database()
    app.state.database = database
    app.state.post_service = PostService(DataClient(database))

    app.add_middleware(StructuredLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(create_graphql_router(), prefix="/graphql", tags=["GraphQL"])
    app.add_route(METRICS_PATH, metrics_endpoint, include_in_schema=False)

    @app.get("/", tags=["Root"])
    async def root():
        return {"message": "Welcome to the Blog API", "graphql": "/graphql"}

    @app.get(HEALTH_PATH, tags=["Root"])
    async def health(request: Request):
        await request.app.state.database.ping()
        return {"status": "ok", "database": "ok"}

    set_app_info(settings.app_version, settings.environment)
    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        # SQL statements go through the structured handlers; the engine itself does not echo
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


def run() -> None:
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()
