from __future__ import annotations

from datetime import date


def get_today() -> date:
    """
    "Today" for projections. Overridden in tests.
    """
    return date.today()
