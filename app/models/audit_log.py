from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import UTCDateTime


class AuditLog(Base):
    """
    Lifecycle audit trail.
    - Append-only (never UPDATE)
    - Written in the same transaction as the change it records
    """
    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    action: Mapped[str] = mapped_column(String(64), nullable=False)  # e.g., PROJECT_APPROVED

    project_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    asset_id: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)

    actor_participant_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    request_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    details_json: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    seq: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        Index("ix_audit_project", "project_id"),
        Index("ix_audit_asset", "asset_id"),
        Index("ix_audit_action", "action"),
    )
