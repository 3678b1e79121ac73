#app/schemas/projects.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.enums import ReviewDecision, RiskLevel


class CamelModel(BaseModel):
    """Accepts the frontend's camelCase keys (and snake_case for scripts)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ExpectedReturn(BaseModel):
    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    type: str = Field(default="IRR", min_length=1, max_length=64)

    @model_validator(mode="after")
    def _ordered(self):
        if self.max < self.min:
            raise ValueError("expectedReturn.max must be >= expectedReturn.min")
        return self


def _flatten(data: Dict[str, Any]) -> Dict[str, Any]:
    """Request payload -> ProjectsService field names."""
    er = data.pop("expected_return", None)
    if er is not None:
        data["expected_return_min"] = er["min"]
        data["expected_return_max"] = er["max"]
        # partial updates drop unset nested keys
        if "type" in er:
            data["expected_return_type"] = er["type"]
    if isinstance(data.get("risk_level"), RiskLevel):
        data["risk_level"] = data["risk_level"].value
    return data


# -----------------------
# Request models
# -----------------------


class ProjectCreateRequest(CamelModel):
    id: Optional[str] = Field(default=None, min_length=1, max_length=128)
    owner_name: Optional[str] = Field(default=None, max_length=256)

    title: str = Field(..., min_length=1, max_length=256)
    description: str = ""
    type: str = Field(..., min_length=1, max_length=64)
    original_category: Optional[str] = Field(default=None, max_length=64)

    target_amount: float = Field(..., gt=0)
    min_investment: float = Field(..., gt=0)
    max_investment: float = Field(..., gt=0)
    expected_return: ExpectedReturn

    # label -> percent; free-form, not required to sum to 100
    revenue_structure: Dict[str, float] = Field(default_factory=dict)

    risk_level: RiskLevel
    region: Optional[str] = None
    city: Optional[str] = None
    investment_period: int = Field(..., gt=0)  # months
    funding_deadline: Optional[date] = None

    @model_validator(mode="after")
    def _investment_bounds(self):
        if self.max_investment < self.min_investment:
            raise ValueError("maxInvestment must be >= minInvestment")
        return self

    def to_fields(self) -> Dict[str, Any]:
        return _flatten(self.model_dump(exclude={"owner_name"}))


class ProjectUpdateRequest(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=256)
    description: Optional[str] = None
    type: Optional[str] = Field(default=None, min_length=1, max_length=64)
    original_category: Optional[str] = Field(default=None, max_length=64)

    target_amount: Optional[float] = Field(default=None, gt=0)
    min_investment: Optional[float] = Field(default=None, gt=0)
    max_investment: Optional[float] = Field(default=None, gt=0)
    expected_return: Optional[ExpectedReturn] = None
    revenue_structure: Optional[Dict[str, float]] = None

    risk_level: Optional[RiskLevel] = None
    region: Optional[str] = None
    city: Optional[str] = None
    investment_period: Optional[int] = Field(default=None, gt=0)
    funding_deadline: Optional[date] = None

    @field_validator(
        "title",
        "description",
        "type",
        "target_amount",
        "min_investment",
        "max_investment",
        "expected_return",
        "revenue_structure",
        "risk_level",
        "investment_period",
    )
    @classmethod
    def _not_null(cls, v, info):
        # omit a field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    def to_fields(self) -> Dict[str, Any]:
        return _flatten(self.model_dump(exclude_unset=True))


class ReviewRequest(CamelModel):
    action: ReviewDecision
    notes: Optional[str] = Field(default=None, max_length=4000)


# -----------------------
# Response models
# -----------------------


class ProjectResponse(BaseModel):
    id: str
    ownerId: str
    ownerName: Optional[str] = None

    title: str
    description: str
    type: str
    originalCategory: Optional[str] = None

    targetAmount: float
    minInvestment: float
    maxInvestment: float
    expectedReturn: ExpectedReturn
    revenueStructure: Dict[str, float]

    riskLevel: str
    region: Optional[str] = None
    city: Optional[str] = None
    investmentPeriod: int
    fundingDeadline: Optional[str] = None

    status: str
    createdAt: str
    updatedAt: str
    submittedAt: Optional[str] = None
    reviewedAt: Optional[str] = None
    reviewNotes: Optional[str] = None


class ProjectListResponse(BaseModel):
    projects: List[ProjectResponse]
    total: int
