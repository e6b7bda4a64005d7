"""
Stored results repository.

Data access layer for StoredResult datasets.
"""

import json
import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.stored_result import StoredResult
from app.shared.repository import BaseRepository

logger = logging.getLogger(__name__)

# Marker for "argument not given" so None can clear a field
_UNSET: Any = object()


class StoredResultRepository(BaseRepository[StoredResult]):
    """Repository for stored results datasets."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, StoredResult)

    async def save(
        self,
        name: str,
        data: list[dict[str, Any]],
        source_url: Optional[str] = None,
        file_size: Optional[int] = None,
    ) -> StoredResult:
        """
        Store a dataset.

        Args:
            name: Display name of the dataset
            data: Raw results.json records
            source_url: Original datasport URL, if any
            file_size: Size of the uploaded file in bytes. Computed from the
                serialized payload when not given.

        Returns:
            Created StoredResult with generated ID
        """
        size = file_size or len(json.dumps(data, ensure_ascii=False).encode("utf-8"))
        stored = await self.create(
            name=name,
            data=data,
            source_url=source_url,
            size=size,
            record_count=len(data),
            filter_state=None,
        )
        logger.info(f"Stored dataset {stored.id} '{name}' ({len(data)} records, {size} bytes)")
        return stored

    async def list_metadata(self) -> list[dict[str, Any]]:
        """
        List stored datasets without their record payload, newest first.

        Returns:
            Dicts with id, name, upload_date, size, record_count, source_url
        """
        query = select(
            StoredResult.id,
            StoredResult.name,
            StoredResult.upload_date,
            StoredResult.size,
            StoredResult.record_count,
            StoredResult.source_url,
        ).order_by(StoredResult.upload_date.desc(), StoredResult.id.desc())
        result = await self.db.execute(query)
        return [dict(row._mapping) for row in result]

    async def update_metadata(
        self,
        stored: StoredResult,
        name: Optional[str] = _UNSET,
        source_url: Optional[str] = _UNSET,
        filter_state: Optional[dict[str, Any]] = _UNSET,
    ) -> StoredResult:
        """
        Update name, source URL and/or filter state.

        Only fields that are passed are changed; passing None clears
        source_url or filter_state.
        """
        changes: dict[str, Any] = {}
        if name is not _UNSET and name is not None:
            changes["name"] = name
        if source_url is not _UNSET:
            changes["source_url"] = source_url
        if filter_state is not _UNSET:
            changes["filter_state"] = filter_state

        if not changes:
            return stored
        return await self.update(stored, **changes)

    async def clear_all(self) -> int:
        """Delete all stored datasets."""
        deleted = await self.delete_all()
        logger.info(f"Cleared {deleted} stored datasets")
        return deleted

    async def storage_usage(self) -> int:
        """Total size in bytes of all stored datasets."""
        result = await self.db.execute(select(func.coalesce(func.sum(StoredResult.size), 0)))
        return int(result.scalar() or 0)
