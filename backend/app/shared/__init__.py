"""
Shared utilities (NOT business logic).

Usage:
    from app.shared import BaseRepository
    from app.shared.formatters import format_size
"""
from .formatters import (
    format_size,
    format_bucket_size,
)
from .repository import BaseRepository

__all__ = [
    # formatters
    "format_size",
    "format_bucket_size",
    # repository
    "BaseRepository",
]
