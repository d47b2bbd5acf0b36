import os
from datetime import datetime

import pytz
from sqlalchemy import Column, DateTime

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Jakarta")


def now_in_app_timezone() -> datetime:
    return datetime.now(pytz.timezone(APP_TIMEZONE))


class TimestampMixin:
    """Mixin that provides created/updated timestamps.

    Ledger rows are hard-deleted (journal lines are replaced wholesale on every
    update), so there are no soft-delete columns here.
    """
    # DateTime(timezone=True) ensures the timezone info is persisted in the database.
    created_at = Column(DateTime(timezone=True), default=now_in_app_timezone, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=now_in_app_timezone)
