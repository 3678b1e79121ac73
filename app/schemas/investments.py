from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.schemas.assets import AssetResponse
from app.schemas.projects import CamelModel


class InvestmentCreateRequest(CamelModel):
    asset_id: str = Field(..., min_length=1, max_length=160)
    amount: float = Field(..., gt=0)


class InvestmentResponse(BaseModel):
    id: str
    userId: str
    assetId: str
    amount: float
    managementFee: float
    transactionFee: float
    netAmount: float
    currentValue: float
    returnRate: float
    status: str
    pNoteNumber: str
    createdAt: str
    updatedAt: str
    # None once the listing has been taken off the market
    asset: Optional[Dict[str, Any]] = None


class InvestmentListResponse(BaseModel):
    investments: List[InvestmentResponse]
    userId: Optional[str] = None


class PortfolioStatsResponse(BaseModel):
    totalValue: float
    totalInvested: float
    totalReturn: float
    distribution: Dict[str, float]
    count: int
    userId: Optional[str] = None


# -----------------------
# Matching
# -----------------------


class RecommendationResponse(BaseModel):
    asset: AssetResponse
    matchScore: int
    matchReasons: List[str]
    recommendation: str


class RecommendationListResponse(BaseModel):
    recommendations: List[RecommendationResponse]


class CompareRequest(CamelModel):
    asset_ids: List[str] = Field(default_factory=list)


class CompareResponse(BaseModel):
    assets: List[AssetResponse]


class CalculateRequest(CamelModel):
    amount: float = Field(..., gt=0)
    expected_return: float = Field(..., ge=0)  # percent per year
    period: int = Field(..., gt=0)  # months


class CalculateResponse(BaseModel):
    principal: float
    estimatedReturn: float
    totalValue: float
    roi: float
