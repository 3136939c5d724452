"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import catalog, sessions, statistics, training_logs

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    training_logs.router, prefix="/training/logs", tags=["Training logs"]
)
api_router.include_router(
    sessions.router, prefix="/training", tags=["Sparring sessions"]
)
api_router.include_router(
    statistics.router, prefix="/statistics", tags=["Statistics"]
)
api_router.include_router(
    catalog.router, prefix="/catalog", tags=["Catalog"]
)
