# backend/salesboard/models/store_goal.py
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from salesboard.db.base import Base


class StoreGoal(Base):
    """
    Store-wide goal for a month, set by a manager. Last write wins.
    """

    __tablename__ = "store_goals"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    month: Mapped[str] = mapped_column(String(7), nullable=False, unique=True, index=True)
    goal: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    set_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
