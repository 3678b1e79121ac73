# app/services/matching_service.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.asset_listing import AssetListing
from app.models.enums import ProjectStatus, RiskLevel
from app.services.assets_service import AssetListingService

BASE_SCORE = 70
PROGRESS_WEIGHT = 15
MAX_SCORE = 98
RISK_BONUS = {
    RiskLevel.LOW.value: 10,
    RiskLevel.MEDIUM.value: 5,
    RiskLevel.HIGH.value: 0,
}


@dataclass
class Recommendation:
    asset: AssetListing
    match_score: int
    match_reasons: List[str] = field(default_factory=list)
    recommendation: str = "watch"


def _progress(listing: AssetListing) -> float:
    if not listing.target_amount:
        return 0.0
    return (listing.raised_amount or 0.0) / listing.target_amount


def score_listing(listing: AssetListing) -> int:
    raw = BASE_SCORE + _progress(listing) * PROGRESS_WEIGHT + RISK_BONUS.get(listing.risk_level, 0)
    return min(MAX_SCORE, round(raw))


def match_reasons(listing: AssetListing) -> List[str]:
    reasons: List[str] = []
    if listing.risk_level == RiskLevel.LOW.value:
        reasons.append("Low risk profile")
    if listing.expected_return_min >= 10:
        reasons.append("Double-digit minimum expected return")
    if _progress(listing) > 0.5:
        reasons.append("More than half of the target already raised")
    if sum(1 for done in (listing.due_diligence or {}).values() if done) >= 3:
        reasons.append("Due diligence largely complete")
    reasons.append("Currently open for investment")
    return reasons


def tier(score: int) -> str:
    if score >= 80:
        return "strong"
    if score >= 70:
        return "consider"
    return "watch"


class MatchingService:
    """Deterministic investor-side scoring over listings that are raising funds."""

    def __init__(self, assets: Optional[AssetListingService] = None):
        self.assets = assets or AssetListingService()

    def recommendations(self, db: Session, *, limit: int = 10) -> List[Recommendation]:
        funding = self.assets.list(db, status=ProjectStatus.FUNDING.value)
        recs = []
        for listing in funding:
            score = score_listing(listing)
            recs.append(
                Recommendation(
                    asset=listing,
                    match_score=score,
                    match_reasons=match_reasons(listing),
                    recommendation=tier(score),
                )
            )
        # stable: equal scores keep market order
        recs.sort(key=lambda r: r.match_score, reverse=True)
        return recs[:limit]

    def compare(self, db: Session, asset_ids: Sequence[str]) -> List[AssetListing]:
        if not asset_ids:
            raise ValidationError("assetIds must be a non-empty list.")
        found = [self.assets.find(db, asset_id) for asset_id in asset_ids]
        return [listing for listing in found if listing is not None]

    @staticmethod
    def calculate(*, amount: float, expected_return: float, period: int) -> Dict[str, Any]:
        """Simple (non-compounding) return projection over `period` months."""
        if amount <= 0:
            raise ValidationError("amount must be positive.")
        estimated_return = amount * (expected_return / 100) * (period / 12)
        return {
            "principal": amount,
            "estimated_return": estimated_return,
            "total_value": amount + estimated_return,
            "roi": estimated_return / amount * 100,
        }
