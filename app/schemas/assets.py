from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.enums import ProjectStatus, RiskLevel
from app.schemas.projects import CamelModel, ExpectedReturn, _flatten


class AssetCreateRequest(CamelModel):
    """Admin-created listing with no originating submission."""

    id: Optional[str] = Field(default=None, min_length=1, max_length=160)

    title: str = Field(..., min_length=1, max_length=256)
    description: str = ""
    type: str = Field(..., min_length=1, max_length=64)
    original_category: Optional[str] = Field(default=None, max_length=64)

    target_amount: float = Field(..., gt=0)
    raised_amount: float = Field(default=0.0, ge=0)
    min_investment: float = Field(..., gt=0)
    max_investment: float = Field(..., gt=0)
    expected_return: ExpectedReturn
    revenue_structure: Dict[str, float] = Field(default_factory=dict)
    due_diligence: Dict[str, bool] = Field(default_factory=dict)

    risk_level: RiskLevel = RiskLevel.MEDIUM
    region: Optional[str] = None
    city: Optional[str] = None
    status: ProjectStatus = ProjectStatus.FUNDING
    investment_period: int = Field(default=12, gt=0)
    funding_deadline: Optional[date] = None

    def to_fields(self) -> Dict[str, Any]:
        data = _flatten(self.model_dump())
        data["status"] = self.status.value
        return data


class AssetResponse(BaseModel):
    id: str
    projectId: Optional[str] = None

    title: str
    description: str
    type: str
    originalCategory: Optional[str] = None

    targetAmount: float
    raisedAmount: float
    minInvestment: float
    maxInvestment: float

    expectedReturn: ExpectedReturn
    # flattened copies the marketplace views read directly
    expectedReturnMin: float
    expectedReturnMax: float
    expectedReturnType: str

    revenueStructure: Dict[str, float]
    dueDiligence: Dict[str, Any]

    riskLevel: str
    riskScore: int
    region: Optional[str] = None
    city: Optional[str] = None

    status: str
    fundingDeadline: Optional[str] = None
    investmentPeriod: int

    createdAt: str
    updatedAt: str


class Pagination(BaseModel):
    total: int
    page: int = 1
    limit: int
    totalPages: int = 1


class AssetListResponse(BaseModel):
    assets: List[AssetResponse]
    pagination: Pagination


class UnlistResponse(BaseModel):
    assetId: str
    projectId: str
    synthesized: bool
    message: str


class FeaturedAssetsResponse(BaseModel):
    assets: List[AssetResponse]
