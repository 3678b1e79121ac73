# app/api/v1/projects.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.v1.serializers import project_resp
from app.core.auth_deps import get_current_principal
from app.core.deps import audit_context
from app.core.errors import MarketplaceError, http_error
from app.db.session import get_db
from app.policies.rbac import Principal
from app.schemas.projects import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdateRequest,
)
from app.services.projects_service import ProjectsService

router = APIRouter(prefix="/projects")


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    request: Request,
    body: ProjectCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        p = ProjectsService().create(
            db,
            owner_id=principal.participant_id,
            owner_name=body.owner_name or principal.display_name,
            fields=body.to_fields(),
            ctx=audit_context(request, principal),
        )
    except MarketplaceError as e:
        raise http_error(e)
    return project_resp(p)


@router.get("/my", response_model=ProjectListResponse)
async def list_my_projects(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows = ProjectsService().list_for_owner(db, principal.participant_id)
    return {"projects": [project_resp(p) for p in rows], "total": len(rows)}


@router.get("/{projectId}", response_model=ProjectResponse)
async def get_project(
    projectId: str,
    db: Session = Depends(get_db),
):
    try:
        p = ProjectsService().get(db, projectId)
    except MarketplaceError as e:
        raise http_error(e)
    return project_resp(p)


@router.put("/{projectId}", response_model=ProjectResponse)
async def update_project(
    request: Request,
    projectId: str,
    body: ProjectUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        p = ProjectsService().update(
            db,
            project_id=projectId,
            owner_id=principal.participant_id,
            fields=body.to_fields(),
            ctx=audit_context(request, principal),
        )
    except MarketplaceError as e:
        raise http_error(e)
    return project_resp(p)


@router.post("/{projectId}/submit", response_model=ProjectResponse)
async def submit_project(
    request: Request,
    projectId: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        p = ProjectsService().submit(
            db, project_id=projectId, ctx=audit_context(request, principal)
        )
    except MarketplaceError as e:
        raise http_error(e)
    return project_resp(p)


@router.post("/{projectId}/withdraw", response_model=ProjectResponse)
async def withdraw_project(
    request: Request,
    projectId: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        p = ProjectsService().withdraw(
            db, project_id=projectId, ctx=audit_context(request, principal)
        )
    except MarketplaceError as e:
        raise http_error(e)
    return project_resp(p)


@router.delete("/{projectId}")
async def delete_project(
    request: Request,
    projectId: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        ProjectsService().delete(
            db,
            project_id=projectId,
            owner_id=principal.participant_id,
            ctx=audit_context(request, principal),
        )
    except MarketplaceError as e:
        raise http_error(e)
    return {"projectId": projectId, "message": "Project deleted."}
