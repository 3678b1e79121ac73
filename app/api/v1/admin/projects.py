from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.v1.serializers import project_resp
from app.core.auth_deps import get_current_principal
from app.core.deps import audit_context
from app.core.errors import MarketplaceError, http_error
from app.db.session import get_db
from app.schemas.projects import ProjectListResponse, ProjectResponse, ReviewRequest
from app.services.projects_service import ProjectsService

router = APIRouter(prefix="/admin/projects", tags=["admin"])


@router.get("/pending", response_model=ProjectListResponse)
async def list_pending_projects(
    db: Session = Depends(get_db),
    principal=Depends(get_current_principal),
):
    rows = ProjectsService().list_pending(db)
    return {"projects": [project_resp(p) for p in rows], "total": len(rows)}


@router.post("/{projectId}/review", response_model=ProjectResponse)
async def review_project(
    request: Request,
    projectId: str,
    body: ReviewRequest,
    db: Session = Depends(get_db),
    principal=Depends(get_current_principal),
):
    try:
        p = ProjectsService().review(
            db,
            project_id=projectId,
            decision=body.action,
            notes=body.notes,
            ctx=audit_context(request, principal),
        )
    except MarketplaceError as e:
        raise http_error(e)
    return project_resp(p)


@router.post("/{projectId}/revoke", response_model=ProjectResponse)
async def revoke_project(
    request: Request,
    projectId: str,
    db: Session = Depends(get_db),
    principal=Depends(get_current_principal),
):
    try:
        p = ProjectsService().revoke(
            db, project_id=projectId, ctx=audit_context(request, principal)
        )
    except MarketplaceError as e:
        raise http_error(e)
    return project_resp(p)
