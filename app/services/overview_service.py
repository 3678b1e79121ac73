from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.asset_listing import AssetListing
from app.models.enums import ProjectStatus
from app.models.project import Project


class OverviewService:
    """Read-only figures for the admin console."""

    def _project_count(self, db: Session, status: str) -> int:
        return db.execute(
            select(func.count()).select_from(Project).where(Project.status == status)
        ).scalar_one()

    def _listing_count(self, db: Session, *statuses: str) -> int:
        return db.execute(
            select(func.count())
            .select_from(AssetListing)
            .where(AssetListing.status.in_(statuses))
        ).scalar_one()

    def overview(self, db: Session) -> Dict[str, Any]:
        total_raised = db.execute(
            select(func.coalesce(func.sum(AssetListing.raised_amount), 0.0))
        ).scalar_one()
        listing_total = db.execute(
            select(func.count()).select_from(AssetListing)
        ).scalar_one()

        pipeline = {
            "pending": self._project_count(db, ProjectStatus.PENDING.value),
            "under_review": self._project_count(db, ProjectStatus.UNDER_REVIEW.value),
            "listed": self._listing_count(
                db, ProjectStatus.LISTED.value, ProjectStatus.FUNDING.value
            ),
            "funding": self._listing_count(db, ProjectStatus.FUNDING.value),
            "completed": self._listing_count(db, ProjectStatus.FUNDED.value),
        }

        type_counts = db.execute(
            select(AssetListing.type, func.count()).group_by(AssetListing.type)
        ).all()
        distribution = {
            asset_type: round(count / listing_total * 100) if listing_total else 0
            for asset_type, count in type_counts
        }

        return {
            "total_raised": float(total_raised),
            "asset_pipeline": listing_total,
            "pending_approval": pipeline["pending"] + pipeline["under_review"],
            "pipeline": pipeline,
            "distribution": distribution,
        }

    def featured(self, db: Session, *, limit: int = 4) -> List[AssetListing]:
        """Listings furthest along in funding, for the investor dashboard."""
        listings = db.execute(select(AssetListing).order_by(AssetListing.seq)).scalars().all()

        def progress(listing: AssetListing) -> float:
            if not listing.target_amount:
                return 0.0
            return (listing.raised_amount or 0.0) / listing.target_amount

        # stable: equal progress keeps market order
        return sorted(listings, key=progress, reverse=True)[:limit]
