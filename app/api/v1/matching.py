# app/api/v1/matching.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.serializers import asset_resp
from app.core.errors import MarketplaceError, http_error
from app.db.session import get_db
from app.schemas.investments import (
    CalculateRequest,
    CalculateResponse,
    CompareRequest,
    CompareResponse,
    RecommendationListResponse,
)
from app.services.matching_service import MatchingService

router = APIRouter(prefix="/matching")


@router.get("/recommendations", response_model=RecommendationListResponse)
async def recommendations(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    recs = MatchingService().recommendations(db, limit=limit)
    return {
        "recommendations": [
            {
                "asset": asset_resp(r.asset),
                "matchScore": r.match_score,
                "matchReasons": r.match_reasons,
                "recommendation": r.recommendation,
            }
            for r in recs
        ]
    }


@router.post("/compare", response_model=CompareResponse)
async def compare(
    body: CompareRequest,
    db: Session = Depends(get_db),
):
    try:
        rows = MatchingService().compare(db, body.asset_ids)
    except MarketplaceError as e:
        raise http_error(e)
    return {"assets": [asset_resp(a) for a in rows]}


@router.post("/calculate", response_model=CalculateResponse)
async def calculate(body: CalculateRequest):
    try:
        out = MatchingService.calculate(
            amount=body.amount, expected_return=body.expected_return, period=body.period
        )
    except MarketplaceError as e:
        raise http_error(e)
    return {
        "principal": out["principal"],
        "estimatedReturn": out["estimated_return"],
        "totalValue": out["total_value"],
        "roi": out["roi"],
    }
