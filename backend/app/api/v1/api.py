from fastapi import APIRouter

from backend.app.api.v1.endpoints import dashboard, reports

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(dashboard.router, prefix="/businesses", tags=["dashboard"])
api_router.include_router(reports.router, prefix="/businesses", tags=["reports"])
