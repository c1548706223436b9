"""
Database engine and session setup.

Nothing here is created at import time: the application builds one engine
at startup and hands it to the link store, which owns it until shutdown.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def create_db_engine(database_url: str, timeout: float = 5.0) -> Engine:
    """
    Create an engine for the given URL.

    Dev: SQLite (zero config), Prod: PostgreSQL or any other SQLAlchemy URL.
    ``timeout`` bounds how long one operation waits on the database:
    the SQLite busy timeout, or the pool checkout timeout elsewhere.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={
                "check_same_thread": False,  # needed for SQLite + FastAPI threadpool
                "timeout": timeout,
            },
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_timeout=timeout,
        pool_recycle=1800,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """
    Session factory for short-lived, per-operation sessions.

    expire_on_commit=False keeps returned rows readable after the session
    closes (they are snapshots, not live objects).
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
