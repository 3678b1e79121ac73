from fastapi import APIRouter

from app.api.v1.health import router as health_router

from app.api.v1.projects import router as projects_router
from app.api.v1.assets import router as assets_router
from app.api.v1.investments import router as investments_router
from app.api.v1.matching import router as matching_router
from app.api.v1.dashboard import router as dashboard_router

from app.api.v1.admin.projects import router as admin_projects_router
from app.api.v1.admin.assets import router as admin_assets_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])

# ------------------------------------------------------------------
# PROJECT OWNERS
# ------------------------------------------------------------------
v1_router.include_router(projects_router, tags=["projects"])

# ------------------------------------------------------------------
# MARKET
# ------------------------------------------------------------------
v1_router.include_router(assets_router, tags=["assets"])
v1_router.include_router(investments_router, tags=["investments"])
v1_router.include_router(matching_router, tags=["matching"])
v1_router.include_router(dashboard_router, tags=["dashboard"])

# ------------------------------------------------------------------
# ADMIN (central kitchen)
# ------------------------------------------------------------------
v1_router.include_router(admin_projects_router, tags=["admin"])
v1_router.include_router(admin_assets_router, tags=["admin"])
