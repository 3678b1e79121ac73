# app/api/v1/dashboard.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.serializers import asset_resp
from app.db.session import get_db
from app.schemas.assets import FeaturedAssetsResponse
from app.services.overview_service import OverviewService

router = APIRouter(prefix="/dashboard")


@router.get("/featured", response_model=FeaturedAssetsResponse)
async def featured_assets(
    limit: int = Query(default=4, ge=1, le=20),
    db: Session = Depends(get_db),
):
    rows = OverviewService().featured(db, limit=limit)
    return {"assets": [asset_resp(a) for a in rows]}
