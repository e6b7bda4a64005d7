"""
Feature modules for Race Charts.

Each feature is a self-contained module with:
- models.py - Dataclasses for the feature's domain objects
- schemas.py - Pydantic schemas (optional)
- service.py - Business logic (optional)
- repository.py - Data access (optional)
"""
