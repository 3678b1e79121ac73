# app/services/assets_service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StateError
from app.core.lifecycle_guard import lifecycle_transaction
from app.db.sequence import next_seq
from app.models.asset_listing import AssetListing
from app.models.enums import ProjectStatus, RiskLevel
from app.models.project import Project
from app.services.audit_service import AuditAction, AuditContext, AuditService

logger = logging.getLogger(__name__)

# Legacy naming convention: listings synthesized by approval are
# "asset-from-<projectId>". The back-reference column is authoritative.
ASSET_ID_PREFIX = "asset-from-"

RISK_SCORES = {
    RiskLevel.LOW.value: 30,
    RiskLevel.MEDIUM.value: 50,
    RiskLevel.HIGH.value: 70,
}

DEFAULT_DUE_DILIGENCE = {
    "financialAudit": True,
    "legalCompliance": True,
    "operationsReview": True,
    "marketAnalysis": True,
}

# "LISTED" in a marketplace filter means anything currently on the market
MARKET_STATUSES = frozenset(
    {ProjectStatus.LISTED.value, ProjectStatus.FUNDING.value, ProjectStatus.FUNDED.value}
)

# Descriptive fields copied between a project and its listing
DESCRIPTIVE_FIELDS = (
    "title",
    "description",
    "type",
    "original_category",
    "target_amount",
    "min_investment",
    "max_investment",
    "expected_return_min",
    "expected_return_max",
    "expected_return_type",
    "revenue_structure",
    "risk_level",
    "region",
    "city",
    "investment_period",
    "funding_deadline",
)


def _now():
    return datetime.now(timezone.utc)


def asset_id_for_project(project_id: str) -> str:
    return f"{ASSET_ID_PREFIX}{project_id}"


def project_id_from_asset_id(asset_id: str) -> Optional[str]:
    """Fallback for listings that predate the back-reference column."""
    if asset_id.startswith(ASSET_ID_PREFIX) and len(asset_id) > len(ASSET_ID_PREFIX):
        return asset_id[len(ASSET_ID_PREFIX):]
    return None


def risk_score_for(risk_level: str) -> int:
    return RISK_SCORES.get(risk_level, RISK_SCORES[RiskLevel.MEDIUM.value])


class AssetListingService:
    """
    The market-visible listings.
    Listings appear on approval and disappear on unlist/revoke; nothing
    else creates them except the admin entry point `create_listing`.
    """

    def __init__(self, audit: Optional[AuditService] = None):
        self.audit = audit or AuditService()

    # ---------------------------
    # READS
    # ---------------------------

    def find(self, db: Session, asset_id: str) -> Optional[AssetListing]:
        return db.get(AssetListing, asset_id)

    def get(self, db: Session, asset_id: str) -> AssetListing:
        listing = self.find(db, asset_id)
        if not listing:
            raise NotFoundError(f"Asset {asset_id} not found.", asset_id=asset_id)
        return listing

    def find_for_project(self, db: Session, project_id: str) -> Optional[AssetListing]:
        listing = (
            db.execute(
                select(AssetListing)
                .where(AssetListing.project_id == project_id)
                .order_by(AssetListing.seq)
            )
            .scalars()
            .first()
        )
        if listing:
            return listing
        return self.find(db, asset_id_for_project(project_id))

    def list(
        self,
        db: Session,
        *,
        types: Optional[Iterable[str]] = None,
        risk_levels: Optional[Iterable[str]] = None,
        status: Optional[str] = None,
        region: Optional[str] = None,
    ) -> List[AssetListing]:
        stmt = select(AssetListing)

        types = [t for t in (types or []) if t]
        if types:
            stmt = stmt.where(AssetListing.type.in_(types))

        risk_levels = [r for r in (risk_levels or []) if r]
        if risk_levels:
            stmt = stmt.where(AssetListing.risk_level.in_(risk_levels))

        if status:
            if status == ProjectStatus.LISTED.value:
                stmt = stmt.where(AssetListing.status.in_(sorted(MARKET_STATUSES)))
            else:
                stmt = stmt.where(AssetListing.status == status)

        if region:
            stmt = stmt.where(AssetListing.region == region)

        stmt = stmt.order_by(AssetListing.seq)
        return list(db.execute(stmt).scalars().all())

    # ---------------------------
    # MUTATIONS
    # ---------------------------

    def add_from_project(
        self,
        db: Session,
        project: Project,
        *,
        ctx: Optional[AuditContext] = None,
    ) -> AssetListing:
        """
        Synthesize the market listing for an approved project.
        At most one listing per project: a second call is a StateError.
        """
        asset_id = asset_id_for_project(project.id)
        with lifecycle_transaction(db):
            existing = self.find(db, asset_id) or self.find_for_project(db, project.id)
            if existing:
                raise StateError(
                    f"Project {project.id} already has listing {existing.id}.",
                    current_status=existing.status,
                    project_id=project.id,
                    asset_id=existing.id,
                )

            now = _now()
            listing = AssetListing(
                id=asset_id,
                project_id=project.id,
                raised_amount=0.0,
                risk_score=risk_score_for(project.risk_level),
                status=ProjectStatus.FUNDING.value,
                due_diligence=dict(DEFAULT_DUE_DILIGENCE),
                created_at=project.created_at or now,
                updated_at=now,
                seq=next_seq(db, AssetListing),
                **{f: getattr(project, f) for f in DESCRIPTIVE_FIELDS},
            )
            listing.revenue_structure = dict(project.revenue_structure or {})
            db.add(listing)
            db.flush()

            self.audit.write(
                db,
                action=AuditAction.ASSET_LISTED,
                ctx=ctx,
                project_id=project.id,
                asset_id=listing.id,
                details={"source": "approval"},
            )

        logger.info(
            "asset listed from project",
            extra={"asset_id": listing.id, "project_id": project.id},
        )
        return listing

    def create_listing(
        self,
        db: Session,
        *,
        fields: Dict[str, Any],
        ctx: Optional[AuditContext] = None,
    ) -> AssetListing:
        """
        Admin entry point for a listing with no originating submission.
        Such listings carry no back-reference; unlisting one synthesizes
        a project for it.
        """
        asset_id = fields.get("id") or f"asset-{uuid.uuid4().hex[:12]}"
        with lifecycle_transaction(db):
            if self.find(db, asset_id):
                raise StateError(f"Asset {asset_id} already exists.", asset_id=asset_id)

            now = _now()
            risk_level = fields.get("risk_level") or RiskLevel.MEDIUM.value
            listing = AssetListing(
                id=asset_id,
                project_id=None,
                raised_amount=float(fields.get("raised_amount") or 0.0),
                risk_score=fields.get("risk_score") or risk_score_for(risk_level),
                status=fields.get("status") or ProjectStatus.FUNDING.value,
                due_diligence=dict(fields.get("due_diligence") or {}),
                created_at=fields.get("created_at") or now,
                updated_at=now,
                seq=next_seq(db, AssetListing),
                **{f: fields.get(f) for f in DESCRIPTIVE_FIELDS if f in fields},
            )
            listing.risk_level = risk_level
            listing.description = fields.get("description") or ""
            listing.expected_return_type = fields.get("expected_return_type") or "IRR"
            listing.revenue_structure = dict(fields.get("revenue_structure") or {})
            listing.investment_period = fields.get("investment_period") or 12
            db.add(listing)
            db.flush()

            self.audit.write(
                db,
                action=AuditAction.ASSET_LISTED,
                ctx=ctx,
                asset_id=listing.id,
                details={"source": "admin"},
            )

        logger.info("asset listed by admin", extra={"asset_id": listing.id})
        return listing

    def remove(self, db: Session, asset_id: str) -> bool:
        """
        Remove a listing if present. "Already gone" is a normal outcome:
        returns False, never raises.
        """
        with lifecycle_transaction(db):
            listing = self.find(db, asset_id)
            if not listing:
                return False
            db.delete(listing)
            db.flush()
        return True
