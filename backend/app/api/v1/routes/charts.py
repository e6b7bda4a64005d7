"""
Chart Routes

SVG charts for stored results datasets.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from app.config import settings
from app.features.charts import ChartService, ChartType, EmptyDatasetError
from app.features.results import filter_by_distance, records_from_vendor
from app.api.v1.routes.results import load_result
from app.models.stored_result import StoredResult

logger = logging.getLogger(__name__)

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"


def _parse_runner_indices(runners: Optional[str]) -> List[int]:
    """Parse "3,17,42" into record indices, 400 on anything else."""
    if not runners:
        return []
    try:
        return [int(part) for part in runners.split(",") if part.strip()]
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="runners must be a comma-separated list of record indices"
        )


@router.get("/{result_id}/charts/{chart_type}")
async def render_chart(
    chart_type: ChartType,
    distance: Optional[str] = None,
    bucket_size: Optional[int] = Query(default=None, gt=0, le=3600),
    runners: Optional[str] = None,
    stored: StoredResult = Depends(load_result),
):
    """
    Render one chart of a stored dataset as SVG.

    - **distance**: only records of this distance value (see /distances)
    - **bucket_size**: histogram bucket width in seconds
    - **runners**: comma-separated record indices to highlight (max 10)
    """
    indices = _parse_runner_indices(runners)
    records = filter_by_distance(records_from_vendor(stored.data), distance)

    service = ChartService(
        bucket_size_seconds=settings.default_bucket_size_seconds,
        start_bucket_count=settings.start_bucket_count,
    )
    try:
        svg = service.render(chart_type, records, bucket_size, indices)
    except EmptyDatasetError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.debug(f"Rendered {chart_type.value} for dataset {stored.id} ({len(svg)} bytes)")
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)
