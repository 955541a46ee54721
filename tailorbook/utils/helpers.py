import re
import uuid
from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision,
    e.g. 2025-06-01T09:30:00.000Z (the layout the browser build stored)
    """
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_record_id() -> str:
    """Generate a random UUID4 record id"""
    return str(uuid.uuid4())


def parse_due_date(value: str) -> Optional[date]:
    """Parse a YYYY-MM-DD string, returning None if it is not a calendar date"""
    if not value or not re.match(r"^\d{4}-\d{2}-\d{2}$", value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def format_phone_number(phone: str) -> str:
    """
    Format phone number to digits only (for tel: links)
    Removes +, -, spaces, parentheses
    """
    return re.sub(r"[^\d]", "", phone)
