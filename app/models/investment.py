from __future__ import annotations

from datetime import datetime

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import UTCDateTime


class Investment(Base):
    __tablename__ = "investments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    investor_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    # plain reference: unlisting a listing leaves its investments in place
    asset_id: Mapped[str] = mapped_column(String(160), nullable=False, index=True)
    asset_type: Mapped[str] = mapped_column(String(64), nullable=False)

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    management_fee: Mapped[float] = mapped_column(Float, nullable=False)
    transaction_fee: Mapped[float] = mapped_column(Float, nullable=False)
    net_amount: Mapped[float] = mapped_column(Float, nullable=False)
    current_value: Mapped[float] = mapped_column(Float, nullable=False)
    return_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    status: Mapped[str] = mapped_column(String(32), nullable=False)
    p_note_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
