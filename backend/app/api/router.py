from fastapi import APIRouter
from app.api.routers import auth, admin, projects, records, reports

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(records.router, tags=["records"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
