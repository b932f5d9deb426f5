# backend/salesboard/models/sales_month.py
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from salesboard.core.sales_totals import MonthlyData
from salesboard.db.base import Base

if TYPE_CHECKING:
    from salesboard.models.daily_sale import DailySale


class SalesMonth(Base):
    """
    One seller's bucket for one month ("YYYY-MM").

    Created lazily the first time the seller touches the month. The goal here
    is the seller's own view of the store goal; the manager-set store-wide goal
    lives in StoreGoal.
    """

    __tablename__ = "sales_months"
    __table_args__ = (
        UniqueConstraint("user_id", "month", name="uq_sales_months_user_month"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    month: Mapped[str] = mapped_column(String(7), nullable=False, index=True)

    store_goal: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0.00"), server_default="0.00"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    daily_sales: Mapped[list["DailySale"]] = relationship(
        back_populates="sales_month",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="DailySale.sale_date",
    )

    def to_monthly_data(self) -> MonthlyData:
        return MonthlyData(
            store_goal=self.store_goal,
            daily_sales=tuple(s.to_record() for s in self.daily_sales),
        )
