"""
Database models for the link shortener.

A single table: one row per live short link, keyed by its unique code.
"""

from .link import Link

__all__ = ["Link"]
