from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Date, Float, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import UTCDateTime


class AssetListing(Base):
    """
    Public market-facing record of an approved project.

    - project_id is the back-reference to the originating submission;
      NULL only for listings an admin created directly.
    - No foreign key: a listing may outlive (or predate) its project row.
    """

    __tablename__ = "asset_listings"

    id: Mapped[str] = mapped_column(String(160), primary_key=True)
    project_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True, index=True)

    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    original_category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    target_amount: Mapped[float] = mapped_column(Float, nullable=False)
    raised_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    min_investment: Mapped[float] = mapped_column(Float, nullable=False)
    max_investment: Mapped[float] = mapped_column(Float, nullable=False)

    expected_return_min: Mapped[float] = mapped_column(Float, nullable=False)
    expected_return_max: Mapped[float] = mapped_column(Float, nullable=False)
    expected_return_type: Mapped[str] = mapped_column(String(64), nullable=False, server_default=text("'IRR'"))

    revenue_structure: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    due_diligence: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    risk_level: Mapped[str] = mapped_column(String(16), nullable=False)
    risk_score: Mapped[int] = mapped_column(Integer, nullable=False)
    region: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    status: Mapped[str] = mapped_column(String(32), nullable=False, server_default=text("'FUNDING'"))
    funding_deadline: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    investment_period: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (Index("ix_asset_listings_status_type", "status", "type"),)
