# app/api/v1/investments.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.v1.serializers import investment_resp
from app.core.auth_deps import get_current_principal
from app.core.deps import audit_context
from app.core.errors import MarketplaceError, http_error
from app.db.session import get_db
from app.policies.rbac import Principal
from app.schemas.investments import (
    InvestmentCreateRequest,
    InvestmentListResponse,
    InvestmentResponse,
    PortfolioStatsResponse,
)
from app.services.assets_service import AssetListingService
from app.services.investments_service import InvestmentsService

router = APIRouter(prefix="/investments")


@router.post("", response_model=InvestmentResponse, status_code=201)
async def create_investment(
    request: Request,
    body: InvestmentCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        inv = InvestmentsService().create(
            db,
            investor_id=principal.participant_id,
            asset_id=body.asset_id,
            amount=body.amount,
            ctx=audit_context(request, principal),
        )
    except MarketplaceError as e:
        raise http_error(e)
    return investment_resp(inv, AssetListingService().find(db, inv.asset_id))


@router.get("/my", response_model=InvestmentListResponse)
async def list_my_investments(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    assets = AssetListingService()
    rows = InvestmentsService().list_for_investor(db, principal.participant_id)
    return {
        "investments": [investment_resp(inv, assets.find(db, inv.asset_id)) for inv in rows],
        "userId": principal.participant_id,
    }


@router.get("/portfolio/stats", response_model=PortfolioStatsResponse)
async def portfolio_stats(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    stats = InvestmentsService().portfolio_stats(db, principal.participant_id)
    return {
        "totalValue": stats["total_value"],
        "totalInvested": stats["total_invested"],
        "totalReturn": stats["total_return"],
        "distribution": stats["distribution"],
        "count": stats["count"],
        "userId": principal.participant_id,
    }


@router.get("/{investmentId}", response_model=InvestmentResponse)
async def get_investment(
    investmentId: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        inv = InvestmentsService().get(db, investmentId)
    except MarketplaceError as e:
        raise http_error(e)
    return investment_resp(inv, AssetListingService().find(db, inv.asset_id))
