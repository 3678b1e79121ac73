from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.sequence import next_seq
from app.models.audit_log import AuditLog


class AuditAction:
    # Submission lifecycle
    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_UPDATED = "PROJECT_UPDATED"
    PROJECT_SUBMITTED = "PROJECT_SUBMITTED"
    PROJECT_WITHDRAWN = "PROJECT_WITHDRAWN"
    PROJECT_DELETED = "PROJECT_DELETED"

    # Review
    PROJECT_APPROVED = "PROJECT_APPROVED"
    PROJECT_REJECTED = "PROJECT_REJECTED"
    PROJECT_REVOKED = "PROJECT_REVOKED"

    # Market
    ASSET_LISTED = "ASSET_LISTED"
    ASSET_UNLISTED = "ASSET_UNLISTED"
    PROJECT_REVERTED = "PROJECT_REVERTED"
    PROJECT_SYNTHESIZED = "PROJECT_SYNTHESIZED"

    # Investments
    INVESTMENT_CREATED = "INVESTMENT_CREATED"


@dataclass(frozen=True)
class AuditContext:
    """Who is acting, and under which request-id."""

    actor_participant_id: Optional[str] = None
    request_id: Optional[str] = None


class AuditService:
    def write(
        self,
        db: Session,
        *,
        action: str,
        ctx: Optional[AuditContext] = None,
        project_id: Optional[str] = None,
        asset_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> AuditLog:
        """
        Stage an audit row. The caller's transaction commits it together
        with the change it describes.
        """
        ctx = ctx or AuditContext()
        row = AuditLog(
            action=action,
            project_id=project_id,
            asset_id=asset_id,
            actor_participant_id=ctx.actor_participant_id,
            request_id=ctx.request_id,
            details_json=details or {},
            created_at=datetime.now(timezone.utc),
            seq=next_seq(db, AuditLog),
        )
        db.add(row)
        db.flush()
        return row

    def list(
        self,
        db: Session,
        *,
        project_id: Optional[str] = None,
        asset_id: Optional[str] = None,
        limit: int = 200,
    ) -> List[AuditLog]:
        stmt = select(AuditLog)
        if project_id:
            stmt = stmt.where(AuditLog.project_id == project_id)
        if asset_id:
            stmt = stmt.where(AuditLog.asset_id == asset_id)
        stmt = stmt.order_by(AuditLog.seq).limit(limit)
        return list(db.execute(stmt).scalars().all())
