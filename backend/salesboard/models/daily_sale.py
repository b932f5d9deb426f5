# backend/salesboard/models/daily_sale.py
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from salesboard.core.sales_totals import DailySaleRecord
from salesboard.db.base import Base

if TYPE_CHECKING:
    from salesboard.models.sales_month import SalesMonth


class DailySale(Base):
    """
    One daily entry in a seller's month: the seller's own sales and the
    store's sales for that date. Both amounts are strictly positive.
    """

    __tablename__ = "daily_sales"
    __table_args__ = (
        Index("ix_daily_sales_month_date", "sales_month_id", "sale_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sales_month_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("sales_months.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    sale_date: Mapped[date] = mapped_column(Date, nullable=False)

    individual_sale: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    store_sale: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    sales_month: Mapped["SalesMonth"] = relationship(back_populates="daily_sales")

    def to_record(self) -> DailySaleRecord:
        return DailySaleRecord(
            id=self.id,
            date=self.sale_date,
            individual_sale=self.individual_sale,
            store_sale=self.store_sale,
        )
