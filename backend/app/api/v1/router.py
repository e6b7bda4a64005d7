"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import results, charts

api_router = APIRouter()

api_router.include_router(results.router, prefix="/results", tags=["Results"])
api_router.include_router(charts.router, prefix="/results", tags=["Charts"])
