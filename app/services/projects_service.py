# app/services/projects_service.py
from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.errors import NotFoundError, StateError, ValidationError
from app.core.lifecycle_guard import lifecycle_transaction
from app.db.sequence import next_seq
from app.models.asset_listing import AssetListing
from app.models.enums import (
    REVIEWABLE_STATUSES,
    REVOCABLE_STATUSES,
    ProjectStatus,
    ReviewDecision,
)
from app.models.project import Project
from app.policies.projects_policy import require_project_owner
from app.services.assets_service import AssetListingService
from app.services.audit_service import AuditAction, AuditContext, AuditService

logger = logging.getLogger(__name__)


# Owner-editable descriptive fields. Identity, ownership, status and
# timestamps only change through the lifecycle operations below.
EDITABLE_FIELDS = {
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
}

# Defaults used when a project is synthesized from a sparse listing
SYNTHESIZED_DEFAULTS = {
    "expected_return_min": 8.0,
    "expected_return_max": 15.0,
    "expected_return_type": "IRR",
    "risk_level": "MEDIUM",
    "investment_period": 12,
    "region": "National",
    "city": "Shanghai",
}
SYNTHESIZED_DEADLINE_DAYS = 90

REQUIRED_FIELDS = (
    "title",
    "type",
    "target_amount",
    "min_investment",
    "max_investment",
    "expected_return_min",
    "expected_return_max",
    "risk_level",
    "investment_period",
)


def _now():
    return datetime.now(timezone.utc)


def _editable(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}


def _check_bounds(p: Project) -> None:
    """Checked on the merged record: a partial edit may move only one bound."""
    if p.max_investment < p.min_investment:
        raise ValidationError(
            f"maxInvestment ({p.max_investment}) must be >= minInvestment ({p.min_investment}).",
            reason="INVALID_INVESTMENT_BOUNDS",
            project_id=p.id,
        )
    if p.expected_return_max < p.expected_return_min:
        raise ValidationError(
            f"expectedReturn.max ({p.expected_return_max}) must be >= expectedReturn.min ({p.expected_return_min}).",
            reason="INVALID_RETURN_RANGE",
            project_id=p.id,
        )


class ProjectsService:
    """
    Project Store: owns the submissions and their state machine.

        DRAFT --submit--> PENDING
        PENDING/UNDER_REVIEW --review--> APPROVED | REJECTED
        PENDING/UNDER_REVIEW --withdraw--> DRAFT
        APPROVED/REJECTED --revoke--> PENDING
    """

    def __init__(
        self,
        assets: Optional[AssetListingService] = None,
        audit: Optional[AuditService] = None,
    ):
        self.audit = audit or AuditService()
        self.assets = assets or AssetListingService(audit=self.audit)

    # ---------------------------
    # READS
    # ---------------------------

    def find(self, db: Session, project_id: str) -> Optional[Project]:
        return db.get(Project, project_id)

    def get(self, db: Session, project_id: str) -> Project:
        p = self.find(db, project_id)
        if not p:
            raise NotFoundError(f"Project {project_id} not found.", project_id=project_id)
        return p

    def list_pending(self, db: Session) -> List[Project]:
        """
        Admin review queue. Already-decided projects stay visible so that
        a decision can be revoked from the same console.
        """
        statuses = sorted(REVIEWABLE_STATUSES | REVOCABLE_STATUSES)
        return list(
            db.execute(
                select(Project).where(Project.status.in_(statuses)).order_by(Project.seq)
            )
            .scalars()
            .all()
        )

    def list_for_owner(self, db: Session, owner_id: str) -> List[Project]:
        return list(
            db.execute(
                select(Project).where(Project.owner_id == owner_id).order_by(Project.seq)
            )
            .scalars()
            .all()
        )

    # ---------------------------
    # OWNER MUTATIONS
    # ---------------------------

    def create(
        self,
        db: Session,
        *,
        owner_id: str,
        fields: Dict[str, Any],
        owner_name: Optional[str] = None,
        ctx: Optional[AuditContext] = None,
    ) -> Project:
        missing = [f for f in REQUIRED_FIELDS if fields.get(f) in (None, "")]
        if missing:
            raise ValidationError(
                f"Missing required project fields: {', '.join(missing)}", missing=missing
            )
        project_id = fields.get("id") or f"project-{uuid.uuid4().hex[:12]}"

        with lifecycle_transaction(db):
            if self.find(db, project_id):
                raise StateError(
                    f"Project {project_id} already exists.", project_id=project_id
                )

            now = _now()
            p = Project(
                id=project_id,
                owner_id=owner_id,
                owner_name=owner_name,
                status=ProjectStatus.DRAFT.value,
                created_at=now,
                updated_at=now,
                seq=next_seq(db, Project),
                **_editable(fields),
            )
            if p.revenue_structure is None:
                p.revenue_structure = {}
            if p.description is None:
                p.description = ""
            db.add(p)
            db.flush()

            self.audit.write(
                db, action=AuditAction.PROJECT_CREATED, ctx=ctx, project_id=p.id
            )

        logger.info("project created", extra={"project_id": p.id, "owner_id": owner_id})
        return p

    def update(
        self,
        db: Session,
        *,
        project_id: str,
        owner_id: str,
        fields: Dict[str, Any],
        ctx: Optional[AuditContext] = None,
    ) -> Project:
        with lifecycle_transaction(db):
            p = self.get(db, project_id)
            require_project_owner(p, owner_id, "update")

            # Submitted or decided projects are frozen; withdraw first.
            if p.status != ProjectStatus.DRAFT.value:
                raise StateError(
                    f"Only DRAFT projects can be edited; project {p.id} is {p.status}.",
                    current_status=p.status,
                    project_id=p.id,
                )

            changes = _editable(fields)
            cleared = [f for f in REQUIRED_FIELDS if f in changes and changes[f] in (None, "")]
            if cleared:
                raise ValidationError(
                    f"Required project fields cannot be cleared: {', '.join(cleared)}",
                    missing=cleared,
                )
            for key, value in changes.items():
                setattr(p, key, value)
            _check_bounds(p)
            p.updated_at = _now()
            db.flush()

            self.audit.write(
                db,
                action=AuditAction.PROJECT_UPDATED,
                ctx=ctx,
                project_id=p.id,
                details={"fields": sorted(changes)},
            )
        return p

    def submit(
        self, db: Session, *, project_id: str, ctx: Optional[AuditContext] = None
    ) -> Project:
        with lifecycle_transaction(db):
            p = self.get(db, project_id)
            if p.status != ProjectStatus.DRAFT.value:
                raise StateError(
                    f"Project {p.id} already submitted (status {p.status}).",
                    current_status=p.status,
                    project_id=p.id,
                )

            now = _now()
            p.status = ProjectStatus.PENDING.value
            p.submitted_at = now
            p.updated_at = now
            db.flush()

            self.audit.write(
                db, action=AuditAction.PROJECT_SUBMITTED, ctx=ctx, project_id=p.id
            )

        logger.info("project submitted", extra={"project_id": p.id})
        return p

    def withdraw(
        self, db: Session, *, project_id: str, ctx: Optional[AuditContext] = None
    ) -> Project:
        with lifecycle_transaction(db):
            p = self.get(db, project_id)
            if p.status not in REVIEWABLE_STATUSES:
                raise StateError(
                    f"Only pending or under-review projects can be withdrawn; project {p.id} is {p.status}.",
                    current_status=p.status,
                    project_id=p.id,
                )

            p.status = ProjectStatus.DRAFT.value
            p.submitted_at = None
            p.updated_at = _now()
            db.flush()

            self.audit.write(
                db, action=AuditAction.PROJECT_WITHDRAWN, ctx=ctx, project_id=p.id
            )

        logger.info("project withdrawn to draft", extra={"project_id": p.id})
        return p

    def delete(
        self,
        db: Session,
        *,
        project_id: str,
        owner_id: str,
        ctx: Optional[AuditContext] = None,
    ) -> None:
        with lifecycle_transaction(db):
            p = self.get(db, project_id)
            require_project_owner(p, owner_id, "delete")
            if p.status != ProjectStatus.DRAFT.value:
                raise StateError(
                    f"Cannot delete submitted project {p.id} (status {p.status}).",
                    current_status=p.status,
                    project_id=p.id,
                )
            db.delete(p)
            db.flush()

            self.audit.write(
                db, action=AuditAction.PROJECT_DELETED, ctx=ctx, project_id=project_id
            )

        logger.info("project deleted", extra={"project_id": project_id})

    # ---------------------------
    # ADMIN MUTATIONS
    # ---------------------------

    def review(
        self,
        db: Session,
        *,
        project_id: str,
        decision: ReviewDecision,
        notes: Optional[str] = None,
        ctx: Optional[AuditContext] = None,
    ) -> Project:
        """
        Rules:
        - Only PENDING / UNDER_REVIEW projects can be reviewed
        - APPROVE creates the market listing in the same transaction
        """
        decision = ReviewDecision(decision)
        with lifecycle_transaction(db):
            p = self.get(db, project_id)
            if p.status not in REVIEWABLE_STATUSES:
                raise StateError(
                    f"Project {p.id} is not under review (status {p.status}).",
                    current_status=p.status,
                    project_id=p.id,
                )

            now = _now()
            approved = decision == ReviewDecision.APPROVE
            p.status = (
                ProjectStatus.APPROVED.value if approved else ProjectStatus.REJECTED.value
            )
            p.reviewed_at = now
            p.review_notes = notes
            p.updated_at = now
            db.flush()

            self.audit.write(
                db,
                action=AuditAction.PROJECT_APPROVED if approved else AuditAction.PROJECT_REJECTED,
                ctx=ctx,
                project_id=p.id,
                details={"notes": notes},
            )

            if approved:
                self.assets.add_from_project(db, p, ctx=ctx)

        logger.info(
            "project reviewed",
            extra={"project_id": p.id, "decision": decision.value, "status": p.status},
        )
        return p

    def revoke(
        self, db: Session, *, project_id: str, ctx: Optional[AuditContext] = None
    ) -> Project:
        """
        Undo a review decision. Revoking an approval also takes the
        listing off the market.
        """
        with lifecycle_transaction(db):
            p = self.get(db, project_id)
            if p.status not in REVOCABLE_STATUSES:
                raise StateError(
                    f"Only approved or rejected projects can be revoked; project {p.id} is {p.status}.",
                    current_status=p.status,
                    project_id=p.id,
                )

            original_status = p.status
            removed_asset_id: Optional[str] = None

            if original_status == ProjectStatus.APPROVED.value:
                listing = self.assets.find_for_project(db, p.id)
                if listing and self.assets.remove(db, listing.id):
                    removed_asset_id = listing.id
                else:
                    # already unlisted; nothing to take down
                    logger.warning(
                        "revoke: no listing found for approved project",
                        extra={"project_id": p.id},
                    )

            self._reset_review(p)
            db.flush()

            self.audit.write(
                db,
                action=AuditAction.PROJECT_REVOKED,
                ctx=ctx,
                project_id=p.id,
                asset_id=removed_asset_id,
                details={"from": original_status, "to": p.status},
            )

        logger.info(
            "project review revoked",
            extra={
                "project_id": p.id,
                "from_status": original_status,
                "removed_asset_id": removed_asset_id,
            },
        )
        return p

    # ---------------------------
    # BRIDGE HELPERS (used by unlist)
    # ---------------------------

    def revert_to_pending(
        self, db: Session, project: Project, *, ctx: Optional[AuditContext] = None
    ) -> Project:
        """Force PENDING regardless of the current status."""
        with lifecycle_transaction(db):
            previous = project.status
            self._reset_review(project)
            db.flush()

            self.audit.write(
                db,
                action=AuditAction.PROJECT_REVERTED,
                ctx=ctx,
                project_id=project.id,
                details={"from": previous},
            )

        logger.info(
            "project reverted to pending",
            extra={"project_id": project.id, "from_status": previous},
        )
        return project

    def create_from_asset(
        self,
        db: Session,
        listing: AssetListing,
        *,
        project_id: str,
        ctx: Optional[AuditContext] = None,
    ) -> Project:
        """
        Synthesize a PENDING submission for a listing that never had one,
        owned by the platform administrator.
        """
        settings = get_settings()
        with lifecycle_transaction(db):
            now = _now()
            fields = {f: getattr(listing, f) for f in EDITABLE_FIELDS}
            for key, default in SYNTHESIZED_DEFAULTS.items():
                if fields.get(key) in (None, ""):
                    fields[key] = default
            if not fields.get("funding_deadline"):
                fields["funding_deadline"] = date.today() + timedelta(days=SYNTHESIZED_DEADLINE_DAYS)
            fields["revenue_structure"] = dict(fields.get("revenue_structure") or {})

            p = Project(
                id=project_id,
                owner_id=settings.admin_owner_id,
                owner_name=settings.admin_owner_name,
                status=ProjectStatus.PENDING.value,
                submitted_at=now,
                created_at=listing.created_at or now,
                updated_at=now,
                seq=next_seq(db, Project),
                **fields,
            )
            db.add(p)
            db.flush()

            self.audit.write(
                db,
                action=AuditAction.PROJECT_SYNTHESIZED,
                ctx=ctx,
                project_id=p.id,
                asset_id=listing.id,
            )

        logger.info(
            "project synthesized from listing",
            extra={"project_id": p.id, "asset_id": listing.id},
        )
        return p

    @staticmethod
    def _reset_review(p: Project) -> None:
        p.status = ProjectStatus.PENDING.value
        p.reviewed_at = None
        p.review_notes = None
        p.updated_at = _now()
