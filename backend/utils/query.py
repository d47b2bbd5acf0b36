import os
from datetime import date
from typing import Optional, Tuple

from dateutil import parser as date_parser

from utils.errors import LedgerValidationError

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))


def resolve_page(page: Optional[int], limit: Optional[int]) -> Tuple[int, int, int]:
    """Clamp page/limit query values and return (page, limit, offset)."""
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
    limit = min(limit, MAX_PAGE_SIZE)
    return page, limit, (page - 1) * limit


def parse_query_date(value: Optional[str], field_name: str) -> Optional[date]:
    """Parse a date query parameter leniently ("2025-06-19", "19 Jun 2025", ISO datetimes)."""
    if value is None or value.strip() == "":
        return None
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError):
        raise LedgerValidationError(f"Invalid {field_name} '{value}'. Expected a date such as 2025-06-19.")
