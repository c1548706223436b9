"""
Link storage module.

Implements the Strategy Pattern for the persistence layer: services depend
on the LinkStore interface, SQLAlchemyLinkStore is the concrete backend.
"""

from .link_store import LinkStore, SQLAlchemyLinkStore

__all__ = [
    "LinkStore",
    "SQLAlchemyLinkStore",
]
