from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from shortlink_app.config import settings
from shortlink_app.logging_config import setup_logging
from shortlink_app.database.connection import create_db_engine
from shortlink_app.storage.link_store import LinkStore, SQLAlchemyLinkStore
from shortlink_app.api import health, links, redirect
from shortlink_app.api.errors import register_exception_handlers
from shortlink_app.api.middleware import RequestLoggingMiddleware


def create_app(link_store: Optional[LinkStore] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        link_store: Store to serve from. If omitted, one is created from
            settings.database_url at startup and disposed at shutdown.
    """
    logger = setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.link_store is None
        if owns_store:
            engine = create_db_engine(settings.database_url, timeout=settings.storage_timeout)
            app.state.link_store = SQLAlchemyLinkStore(engine)
        logger.info("🚀 %s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
        try:
            yield
        finally:
            if owns_store:
                app.state.link_store.dispose()
                app.state.link_store = None
            logger.info("🛑 %s stopped", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A URL shortener service built with FastAPI",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.link_store = link_store

    register_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)

    ######## Include routers
    # Fixed paths first: /{code} would otherwise swallow them
    app.include_router(health.router)
    app.include_router(links.router)
    app.include_router(redirect.router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
