# Import models here so Alembic can discover metadata.
from salesboard.models.user import User  # noqa: F401

from salesboard.models.sales_month import SalesMonth  # noqa: F401
from salesboard.models.daily_sale import DailySale  # noqa: F401
from salesboard.models.store_goal import StoreGoal  # noqa: F401
