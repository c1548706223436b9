"""
Link storage using Strategy Pattern.

LinkStore is the only component allowed to mutate persisted links.
SQLAlchemyLinkStore backs it with any SQLAlchemy database
(SQLite for development/tests, PostgreSQL in production).
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional

from sqlalchemy import update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortlink_app.database.connection import Base, create_session_factory
from shortlink_app.exceptions import DuplicateCodeError, StorageError
from shortlink_app.models.link import Link

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LinkStore(ABC):
    """
    Abstract base class for link storage.
    
    Contract:
    - insert fails with DuplicateCodeError when the code is taken, and that
      check is enforced by the storage engine, not by a prior lookup
    - increment_click is atomic: N concurrent calls on one code add exactly N
    - reads always reflect committed state (no caching)
    
    Any other persistence failure surfaces as StorageError.
    """
    
    @abstractmethod
    def insert(self, code: str, target_url: str) -> Link:
        """
        Create a link with zero clicks.
        
        Raises:
            DuplicateCodeError: code already exists
        """
        pass
    
    @abstractmethod
    def find_by_code(self, code: str) -> Optional[Link]:
        """Return the link with this code, or None"""
        pass
    
    @abstractmethod
    def exists(self, code: str) -> bool:
        """Check whether a link with this code exists"""
        pass
    
    @abstractmethod
    def list_all(self) -> List[Link]:
        """Return every link, oldest first"""
        pass
    
    @abstractmethod
    def increment_click(self, code: str) -> Optional[Link]:
        """
        Atomically add one click and stamp last_clicked_at.
        
        Returns:
            The updated link, or None (nothing mutated) if the code is unknown
        """
        pass
    
    @abstractmethod
    def delete(self, code: str) -> bool:
        """Remove the link; True if a row was deleted, False if none matched"""
        pass
    
    def dispose(self) -> None:
        """Release any held resources (connections, pools)"""


class SQLAlchemyLinkStore(LinkStore):
    """
    SQLAlchemy implementation of the link store.
    
    - One short-lived session per operation, committed before returning
    - Uniqueness comes from the UNIQUE index on links.code
    - Click counting is a single server-side UPDATE (total_clicks + 1),
      never a read-modify-write in Python
    - Returned Link objects are detached snapshots
    """
    
    def __init__(self, engine: Engine, create_tables: bool = True):
        """
        Initialize the store over an engine it will own.
        
        Args:
            engine: SQLAlchemy engine (see create_db_engine)
            create_tables: Create the links table if it doesn't exist
        """
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        if create_tables:
            Base.metadata.create_all(bind=engine)
        logger.info("✅ Link store initialized (%s)", engine.url.get_backend_name())
    
    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Session scope that turns driver errors into StorageError"""
        session = self.session_factory()
        try:
            yield session
        except IntegrityError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Storage operation failed")
            raise StorageError() from e
        finally:
            session.close()
    
    def insert(self, code: str, target_url: str) -> Link:
        link = Link(
            code=code,
            target_url=target_url,
            total_clicks=0,
            last_clicked_at=None,
            created_at=utcnow(),
        )
        try:
            with self._session() as session:
                session.add(link)
                session.commit()
        except IntegrityError as e:
            # links.code is the only unique column besides the primary key
            logger.info("Insert rejected, code already exists: %s", code)
            raise DuplicateCodeError(code) from e
        
        return link
    
    def find_by_code(self, code: str) -> Optional[Link]:
        with self._session() as session:
            return session.query(Link).filter(Link.code == code).first()
    
    def exists(self, code: str) -> bool:
        with self._session() as session:
            return session.query(Link.id).filter(Link.code == code).first() is not None
    
    def list_all(self) -> List[Link]:
        with self._session() as session:
            return (
                session.query(Link)
                .order_by(Link.created_at.asc(), Link.id.asc())
                .all()
            )
    
    def increment_click(self, code: str) -> Optional[Link]:
        with self._session() as session:
            # The database evaluates total_clicks + 1 under its own row lock
            result = session.execute(
                update(Link)
                .where(Link.code == code)
                .values(
                    total_clicks=Link.total_clicks + 1,
                    last_clicked_at=utcnow(),
                )
                .execution_options(synchronize_session=False)
            )
            
            if result.rowcount == 0:
                session.rollback()
                return None
            
            # Same transaction: sees our own update, nothing later
            link = session.query(Link).filter(Link.code == code).one()
            session.commit()
            return link
    
    def delete(self, code: str) -> bool:
        with self._session() as session:
            deleted = (
                session.query(Link)
                .filter(Link.code == code)
                .delete(synchronize_session=False)
            )
            session.commit()
            return deleted > 0
    
    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Link store disposed")
