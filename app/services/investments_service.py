# app/services/investments_service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.errors import NotFoundError, ValidationError
from app.core.lifecycle_guard import lifecycle_transaction
from app.models.enums import InvestmentStatus
from app.models.investment import Investment
from app.services.assets_service import AssetListingService
from app.services.audit_service import AuditAction, AuditContext, AuditService

logger = logging.getLogger(__name__)


def _now():
    return datetime.now(timezone.utc)


def compute_fees(amount: float, *, management_rate: float, transaction_rate: float) -> Dict[str, float]:
    management_fee = amount * management_rate
    transaction_fee = amount * transaction_rate
    return {
        "management_fee": management_fee,
        "transaction_fee": transaction_fee,
        "net_amount": amount - management_fee - transaction_fee,
    }


class InvestmentsService:
    def __init__(
        self,
        assets: Optional[AssetListingService] = None,
        audit: Optional[AuditService] = None,
    ):
        self.audit = audit or AuditService()
        self.assets = assets or AssetListingService(audit=self.audit)

    def get(self, db: Session, investment_id: str) -> Investment:
        inv = db.get(Investment, investment_id)
        if not inv:
            raise NotFoundError(f"Investment {investment_id} not found.", investment_id=investment_id)
        return inv

    def list_for_investor(self, db: Session, investor_id: Optional[str]) -> List[Investment]:
        stmt = select(Investment)
        if investor_id:
            stmt = stmt.where(Investment.investor_id == investor_id)
        stmt = stmt.order_by(Investment.created_at)
        return list(db.execute(stmt).scalars().all())

    def create(
        self,
        db: Session,
        *,
        investor_id: str,
        asset_id: str,
        amount: float,
        ctx: Optional[AuditContext] = None,
    ) -> Investment:
        """
        Rules:
        - Listing must exist (NotFoundError otherwise)
        - min_investment <= amount <= max_investment
        - Fees are taken from the amount; the listing's raised amount grows by the gross amount
        """
        settings = get_settings()
        with lifecycle_transaction(db):
            listing = self.assets.get(db, asset_id)

            if amount < listing.min_investment:
                raise ValidationError(
                    f"Amount {amount} is below the minimum investment {listing.min_investment}.",
                    reason="AMOUNT_TOO_LOW",
                    asset_id=asset_id,
                )
            if amount > listing.max_investment:
                raise ValidationError(
                    f"Amount {amount} exceeds the maximum investment {listing.max_investment}.",
                    reason="AMOUNT_TOO_HIGH",
                    asset_id=asset_id,
                )

            fees = compute_fees(
                amount,
                management_rate=settings.management_fee_rate,
                transaction_rate=settings.transaction_fee_rate,
            )
            now = _now()
            inv = Investment(
                id=f"inv-{uuid.uuid4().hex[:12]}",
                investor_id=investor_id,
                asset_id=listing.id,
                asset_type=listing.type,
                amount=amount,
                current_value=amount,
                return_rate=0.0,
                status=InvestmentStatus.CONFIRMED.value,
                p_note_number=f"PN-{uuid.uuid4().hex[:12].upper()}",
                created_at=now,
                updated_at=now,
                **fees,
            )
            db.add(inv)

            listing.raised_amount = (listing.raised_amount or 0.0) + amount
            listing.updated_at = now
            db.flush()

            self.audit.write(
                db,
                action=AuditAction.INVESTMENT_CREATED,
                ctx=ctx,
                project_id=listing.project_id,
                asset_id=listing.id,
                details={"investmentId": inv.id, "amount": amount},
            )

        logger.info(
            "investment confirmed",
            extra={"investment_id": inv.id, "asset_id": asset_id, "investor_id": investor_id},
        )
        return inv

    def portfolio_stats(self, db: Session, investor_id: Optional[str]) -> Dict[str, Any]:
        investments = self.list_for_investor(db, investor_id)

        total_value = sum(inv.current_value for inv in investments)
        total_invested = sum(inv.amount for inv in investments)
        total_return = (
            (total_value - total_invested) / total_invested * 100 if total_invested > 0 else 0.0
        )

        by_type: Dict[str, float] = {}
        for inv in investments:
            by_type[inv.asset_type] = by_type.get(inv.asset_type, 0.0) + inv.current_value

        distribution = {
            asset_type: round(value / total_value * 100, 2) if total_value > 0 else 0.0
            for asset_type, value in by_type.items()
        }

        return {
            "total_value": total_value,
            "total_invested": total_invested,
            "total_return": total_return,
            "distribution": distribution,
            "count": len(investments),
        }
