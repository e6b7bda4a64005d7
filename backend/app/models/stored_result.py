"""
Stored Result Model

Uploaded or fetched results.json datasets with their filter state.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, JSON

from app.models.base import Base


class StoredResult(Base):
    """
    A stored results dataset.

    `data` holds the raw vendor records exactly as uploaded, so record
    indices used for runner highlighting stay stable across reloads.
    """

    __tablename__ = "stored_results"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), nullable=False, index=True)
    data = Column(JSON, nullable=False)
    source_url = Column(String(500), nullable=True)

    # Metadata for list view
    size = Column(Integer, nullable=False, default=0)  # bytes
    record_count = Column(Integer, nullable=False, default=0)

    # {"distance": "21097.00", "bucket_size": 60, "runners": [12, 40]}
    filter_state = Column(JSON, nullable=True)

    upload_date = Column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<StoredResult {self.id} ({self.name}, {self.record_count} records)>"
