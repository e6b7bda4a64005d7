"""
Results Routes

Endpoints for uploading, fetching and managing stored results datasets.
"""

import json
import logging
from pathlib import PurePath
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db.session import get_async_db
from app.features.results import (
    DatasportClient,
    DatasportFetchError,
    DatasportURLError,
    filter_by_distance,
    finisher_summary,
    records_from_vendor,
    runner_options,
    search_runners,
    unique_distances,
)
from app.features.results.datasport import extract_results_id
from app.features.results.repository import StoredResultRepository
from app.features.results.schemas import (
    DistanceOptionSchema,
    FetchRequest,
    RunnerOptionSchema,
    StoredResultDetail,
    StoredResultInfo,
    StoredResultList,
    UpdateRequest,
    UploadResponse,
)
from app.models.stored_result import StoredResult
from app.shared.formatters import format_size

logger = logging.getLogger(__name__)

router = APIRouter()


def get_datasport_client() -> DatasportClient:
    """Dependency for the datasport client."""
    return DatasportClient()


async def load_result(
    result_id: int,
    db: AsyncSession = Depends(get_async_db),
) -> StoredResult:
    """Dependency: stored dataset by ID or 404."""
    stored = await StoredResultRepository(db).get_by_id(result_id)
    if not stored:
        raise HTTPException(status_code=404, detail="Results not found")
    return stored


def _info(stored: StoredResult) -> StoredResultInfo:
    info = StoredResultInfo.model_validate(stored)
    info.size_label = format_size(info.size)
    return info


def _counts(data: list) -> dict:
    """finisher_count / dnf_count for a raw results list."""
    finishers, dnf = finisher_summary(records_from_vendor(data))
    return {"finisher_count": finishers, "dnf_count": dnf}


def _parse_upload(content: bytes) -> list:
    """Decode an uploaded results.json, 400 on anything but a non-empty list."""
    try:
        data = json.loads(content)
    except ValueError:
        raise HTTPException(status_code=400, detail="File is not valid JSON")

    if not isinstance(data, list):
        raise HTTPException(status_code=400, detail="Expected a JSON list of results")
    if not data:
        raise HTTPException(status_code=400, detail="No race results found in file")
    if not all(isinstance(entry, dict) for entry in data):
        raise HTTPException(status_code=400, detail="Every result must be a JSON object")
    return data


@router.post("/upload", response_model=UploadResponse)
async def upload_results(
    file: UploadFile = File(...),
    name: Optional[str] = Form(default=None),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Upload a results.json file.

    The dataset name defaults to the file name without extension.
    """
    content = await file.read()

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="File is empty")

    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large (max {settings.max_upload_mb}MB)"
        )

    data = _parse_upload(content)
    dataset_name = name or PurePath(file.filename or "results.json").stem or "results"

    repo = StoredResultRepository(db)
    stored = await repo.save(dataset_name, data, file_size=len(content))
    await db.commit()

    return UploadResponse(success=True, result=_info(stored), **_counts(data))


@router.post("/fetch", response_model=UploadResponse)
async def fetch_results(
    request: FetchRequest,
    db: AsyncSession = Depends(get_async_db),
    client: DatasportClient = Depends(get_datasport_client),
):
    """Download results.json for a datasport results page and store it."""
    try:
        data = await client.fetch_results(request.url)
    except DatasportURLError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DatasportFetchError as e:
        logger.warning(f"Datasport fetch failed for {request.url}: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    dataset_name = request.name or extract_results_id(request.url) or "datasport results"

    repo = StoredResultRepository(db)
    stored = await repo.save(dataset_name, data, source_url=request.url)
    await db.commit()

    return UploadResponse(success=True, result=_info(stored), **_counts(data))


@router.get("", response_model=StoredResultList)
async def list_results(db: AsyncSession = Depends(get_async_db)):
    """List stored datasets (newest first) with total storage use."""
    repo = StoredResultRepository(db)
    rows = await repo.list_metadata()
    total = await repo.storage_usage()

    items = [StoredResultInfo(**row, size_label=format_size(row["size"])) for row in rows]
    return StoredResultList(items=items, total_size=total, total_size_label=format_size(total))


@router.get("/{result_id}", response_model=StoredResultDetail)
async def get_result(stored: StoredResult = Depends(load_result)):
    """Get a stored dataset with its records and saved filters."""
    return StoredResultDetail(
        **_info(stored).model_dump(),
        data=stored.data,
        filter_state=stored.filter_state,
        **_counts(stored.data),
    )


@router.patch("/{result_id}", response_model=StoredResultInfo)
async def update_result(
    request: UpdateRequest,
    stored: StoredResult = Depends(load_result),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Rename a dataset, change its source URL or save its chart filters.

    Only fields present in the body are changed.
    """
    changes = {}
    if "name" in request.model_fields_set and request.name:
        changes["name"] = request.name
    if "source_url" in request.model_fields_set:
        changes["source_url"] = request.source_url
    if "filter_state" in request.model_fields_set:
        changes["filter_state"] = (
            request.filter_state.model_dump() if request.filter_state else None
        )

    repo = StoredResultRepository(db)
    stored = await repo.update_metadata(stored, **changes)
    await db.commit()

    return _info(stored)


@router.delete("/{result_id}")
async def delete_result(
    stored: StoredResult = Depends(load_result),
    db: AsyncSession = Depends(get_async_db),
):
    """Delete a stored dataset."""
    repo = StoredResultRepository(db)
    await repo.delete(stored)
    await db.commit()
    logger.info(f"Deleted stored dataset {stored.id}")
    return {"success": True}


@router.delete("")
async def clear_results(db: AsyncSession = Depends(get_async_db)):
    """Delete all stored datasets."""
    repo = StoredResultRepository(db)
    deleted = await repo.clear_all()
    await db.commit()
    return {"success": True, "deleted": deleted}


@router.get("/{result_id}/distances", response_model=List[DistanceOptionSchema])
async def list_distances(stored: StoredResult = Depends(load_result)):
    """Distinct race distances in a dataset, shortest first."""
    records = records_from_vendor(stored.data)
    return [
        DistanceOptionSchema(value=o.value, label=o.label)
        for o in unique_distances(records)
    ]


@router.get("/{result_id}/runners", response_model=List[RunnerOptionSchema])
async def list_runners(
    q: Optional[str] = None,
    distance: Optional[str] = None,
    stored: StoredResult = Depends(load_result),
):
    """
    Runners that can be highlighted, sorted by name.

    With `q`, only matches on name, bib or category label (max 50).
    """
    records = filter_by_distance(records_from_vendor(stored.data), distance)
    options = runner_options(records)
    if q:
        options = search_runners(options, q)

    return [
        RunnerOptionSchema(
            index=o.index,
            name=o.name,
            bib=o.bib,
            category=o.category,
            display_name=o.display_name,
        )
        for o in options
    ]

