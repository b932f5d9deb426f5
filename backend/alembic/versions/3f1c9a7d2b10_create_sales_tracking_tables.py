"""create users, sales months, daily sales and store goals

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1c9a7d2b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # -----------------------------------------------------
    # 1) users (magic-code login)
    # -----------------------------------------------------
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("magic_code", sa.String(length=64), nullable=True),
        sa.Column("magic_code_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # -----------------------------------------------------
    # 2) sales_months: one bucket per (seller, month)
    # -----------------------------------------------------
    op.create_table(
        "sales_months",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("store_goal", sa.Numeric(14, 2), server_default="0.00", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.UniqueConstraint("user_id", "month", name="uq_sales_months_user_month"),
    )
    op.create_index("ix_sales_months_user_id", "sales_months", ["user_id"])
    op.create_index("ix_sales_months_month", "sales_months", ["month"])

    # -----------------------------------------------------
    # 3) daily_sales
    # -----------------------------------------------------
    op.create_table(
        "daily_sales",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "sales_month_id",
            sa.Uuid(),
            sa.ForeignKey("sales_months.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("sale_date", sa.Date(), nullable=False),
        sa.Column("individual_sale", sa.Numeric(14, 2), nullable=False),
        sa.Column("store_sale", sa.Numeric(14, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_daily_sales_sales_month_id", "daily_sales", ["sales_month_id"])
    op.create_index("ix_daily_sales_month_date", "daily_sales", ["sales_month_id", "sale_date"])

    # -----------------------------------------------------
    # 4) store_goals: manager-set goal per month
    # -----------------------------------------------------
    op.create_table(
        "store_goals",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("goal", sa.Numeric(14, 2), nullable=False),
        sa.Column(
            "set_by_user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_store_goals_month", "store_goals", ["month"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_store_goals_month", table_name="store_goals")
    op.drop_table("store_goals")

    op.drop_index("ix_daily_sales_month_date", table_name="daily_sales")
    op.drop_index("ix_daily_sales_sales_month_id", table_name="daily_sales")
    op.drop_table("daily_sales")

    op.drop_index("ix_sales_months_month", table_name="sales_months")
    op.drop_index("ix_sales_months_user_id", table_name="sales_months")
    op.drop_table("sales_months")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
