"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy.
"""

from app.models.base import Base
from app.models.stored_result import StoredResult

__all__ = [
    "Base",
    "StoredResult",
]
