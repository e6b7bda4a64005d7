"""
Results Schemas

Pydantic models for stored dataset requests and responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FilterState(BaseModel):
    """Chart filters remembered per dataset."""
    distance: Optional[str] = None
    bucket_size: Optional[int] = Field(default=None, gt=0)
    runners: List[int] = Field(default_factory=list)


# === Request Models ===

class FetchRequest(BaseModel):
    """Fetch results.json from a datasport results page."""
    url: str
    name: Optional[str] = None


class UpdateRequest(BaseModel):
    """Partial metadata update; omitted fields stay unchanged."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    source_url: Optional[str] = None
    filter_state: Optional[FilterState] = None


# === Response Models ===

class StoredResultInfo(BaseModel):
    """Dataset metadata without the records."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    upload_date: Optional[datetime] = None
    size: int
    size_label: str = ""
    record_count: int
    source_url: Optional[str] = None


class StoredResultDetail(StoredResultInfo):
    """Dataset metadata with records and saved filters."""
    data: List[dict]
    filter_state: Optional[FilterState] = None
    finisher_count: int = 0
    dnf_count: int = 0  # entries without a net time


class StoredResultList(BaseModel):
    """All stored datasets, newest first, plus total storage use."""
    items: List[StoredResultInfo]
    total_size: int
    total_size_label: str


class UploadResponse(BaseModel):
    """Response after storing a dataset."""
    success: bool
    result: StoredResultInfo
    finisher_count: int = 0
    dnf_count: int = 0


class DistanceOptionSchema(BaseModel):
    value: str
    label: str


class RunnerOptionSchema(BaseModel):
    index: int
    name: str
    bib: str
    category: str
    display_name: str
