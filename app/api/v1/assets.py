# app/api/v1/assets.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.v1.serializers import asset_resp
from app.core.auth_deps import get_current_principal
from app.core.deps import audit_context
from app.core.errors import MarketplaceError, http_error
from app.db.session import get_db
from app.policies.rbac import Principal
from app.schemas.assets import AssetListResponse, AssetResponse, UnlistResponse
from app.services.assets_service import AssetListingService
from app.services.unlist_service import UnlistService

router = APIRouter(prefix="/assets")


@router.get("", response_model=AssetListResponse)
async def list_assets(
    type: Optional[List[str]] = Query(default=None),
    riskLevel: Optional[List[str]] = Query(default=None),
    status: Optional[str] = Query(default=None),
    region: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    rows = AssetListingService().list(
        db, types=type, risk_levels=riskLevel, status=status, region=region
    )
    items = [asset_resp(a) for a in rows]
    return {
        "assets": items,
        "pagination": {"total": len(items), "page": 1, "limit": max(len(items), 1), "totalPages": 1},
    }


@router.get("/{assetId}", response_model=AssetResponse)
async def get_asset(
    assetId: str,
    db: Session = Depends(get_db),
):
    try:
        listing = AssetListingService().get(db, assetId)
    except MarketplaceError as e:
        raise http_error(e)
    return asset_resp(listing)


@router.post("/{assetId}/unlist", response_model=UnlistResponse)
async def unlist_asset(
    request: Request,
    assetId: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        result = UnlistService().unlist(
            db, asset_id=assetId, ctx=audit_context(request, principal)
        )
    except MarketplaceError as e:
        raise http_error(e)

    message = (
        "Asset unlisted; a pending project was created for it."
        if result.synthesized
        else "Asset unlisted; its project is pending review again."
    )
    return {
        "assetId": result.asset_id,
        "projectId": result.project_id,
        "synthesized": result.synthesized,
        "message": message,
    }
