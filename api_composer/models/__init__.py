"""
Models package for API Composer.

Exports all SQLAlchemy models for database operations.
"""

from .blob import Blob

__all__ = [
    "Blob",
]
