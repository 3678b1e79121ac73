from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.v1.serializers import asset_resp, audit_resp
from app.core.auth_deps import get_current_principal
from app.core.deps import audit_context
from app.core.errors import MarketplaceError, http_error
from app.db.session import get_db
from app.schemas.assets import AssetCreateRequest, AssetResponse
from app.schemas.audit import AuditListResponse, OverviewResponse
from app.services.assets_service import AssetListingService
from app.services.audit_service import AuditService
from app.services.overview_service import OverviewService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/assets", response_model=AssetResponse, status_code=201)
async def create_asset(
    request: Request,
    body: AssetCreateRequest,
    db: Session = Depends(get_db),
    principal=Depends(get_current_principal),
):
    try:
        listing = AssetListingService().create_listing(
            db, fields=body.to_fields(), ctx=audit_context(request, principal)
        )
    except MarketplaceError as e:
        raise http_error(e)
    return asset_resp(listing)


@router.get("/overview", response_model=OverviewResponse)
async def overview(
    db: Session = Depends(get_db),
    principal=Depends(get_current_principal),
):
    data = OverviewService().overview(db)
    pipeline = data["pipeline"]
    return {
        "totalRaised": data["total_raised"],
        "assetPipeline": data["asset_pipeline"],
        "pendingApproval": data["pending_approval"],
        "pipeline": {
            "pending": pipeline["pending"],
            "underReview": pipeline["under_review"],
            "listed": pipeline["listed"],
            "funding": pipeline["funding"],
            "completed": pipeline["completed"],
        },
        "distribution": data["distribution"],
    }


@router.get("/audit", response_model=AuditListResponse)
async def audit_trail(
    projectId: Optional[str] = Query(default=None),
    assetId: Optional[str] = Query(default=None),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
    principal=Depends(get_current_principal),
):
    rows = AuditService().list(db, project_id=projectId, asset_id=assetId, limit=limit)
    return {"entries": [audit_resp(r) for r in rows]}
