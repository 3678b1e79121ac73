# /app/models/project.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Date, Float, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import UTCDateTime


class Project(Base):
    """
    A funding proposal submitted by a project owner.
    Status transitions are owned by ProjectsService; nothing else writes `status`.
    """

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)

    owner_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    owner_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)

    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    original_category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    target_amount: Mapped[float] = mapped_column(Float, nullable=False)
    min_investment: Mapped[float] = mapped_column(Float, nullable=False)
    max_investment: Mapped[float] = mapped_column(Float, nullable=False)

    expected_return_min: Mapped[float] = mapped_column(Float, nullable=False)
    expected_return_max: Mapped[float] = mapped_column(Float, nullable=False)
    expected_return_type: Mapped[str] = mapped_column(String(64), nullable=False, server_default=text("'IRR'"))

    # label -> percent share; free-form, shares are not required to sum to 100
    revenue_structure: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    risk_level: Mapped[str] = mapped_column(String(16), nullable=False)
    region: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    investment_period: Mapped[int] = mapped_column(Integer, nullable=False)  # months
    funding_deadline: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    status: Mapped[str] = mapped_column(String(32), nullable=False, server_default=text("'DRAFT'"))

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    submitted_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    review_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # insertion order for list views
    seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_projects_owner_status", "owner_id", "status"),
        Index("ix_projects_status", "status"),
    )
