"""
FastAPI dependencies for dependency injection.

The link store is created once at startup (see main.create_app) and lives
on app.state; everything else is built per request around it.

Pattern: Dependency Injection
- No module-level database handle
- Tests inject their own store through create_app(link_store=...)
"""

from functools import lru_cache

from fastapi import Depends, Request

from shortlink_app.config import settings
from shortlink_app.services.code_generator import ShortCodeGenerator
from shortlink_app.services.link_service import LinkService
from shortlink_app.storage.link_store import LinkStore


def get_link_store(request: Request) -> LinkStore:
    """The process-wide store attached to the running app."""
    return request.app.state.link_store


@lru_cache()
def get_code_generator() -> ShortCodeGenerator:
    """
    Get code generator instance (singleton).
    
    @lru_cache ensures this is called only once, so the collision counter
    accumulates over the life of the process.
    """
    return ShortCodeGenerator(max_attempts=settings.code_max_attempts)


def get_link_service(
    store: LinkStore = Depends(get_link_store),
    code_generator: ShortCodeGenerator = Depends(get_code_generator)
) -> LinkService:
    """
    Get LinkService with all dependencies injected.
    
    Controllers depend on the service only; the service depends on the
    store and the generator.
    """
    return LinkService(store=store, code_generator=code_generator)
