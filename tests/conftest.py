"""
Test configuration and fixtures for the link shortener.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from shortlink_app.database.connection import create_db_engine
from shortlink_app.services.code_generator import ShortCodeGenerator
from shortlink_app.services.link_service import LinkService
from shortlink_app.storage.link_store import SQLAlchemyLinkStore


@pytest.fixture(scope="function")
def link_store(tmp_path):
    """
    Fresh file-backed SQLite store for each test.
    A file (not :memory:) so worker threads share one database.
    """
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}", timeout=30)
    store = SQLAlchemyLinkStore(engine)
    try:
        yield store
    finally:
        store.dispose()


@pytest.fixture(scope="function")
def link_service(link_store):
    return LinkService(link_store, ShortCodeGenerator())


@pytest.fixture(scope="function")
def client(link_store):
    """
    Create a test client serving from the test store.
    This is the main fixture that API tests will use.
    """
    app = create_app(link_store=link_store)
    with TestClient(app) as test_client:
        yield test_client
