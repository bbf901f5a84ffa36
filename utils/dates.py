import calendar
from datetime import date, datetime


def iso_day(text: str) -> date:
    """``YYYY-MM-DD``, optionally followed by a ``T`` or space and a time part."""
    text = text.strip()
    if len(text) > 10 and text[10] in ("T", " "):
        text = text[:10]
    return date.fromisoformat(text)


def parse_date(value):
    """Parse YYYY-MM-DD (or a full ISO timestamp) to a date. None/"" -> None."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return iso_day(str(value))


def add_one_month(day: date) -> date:
    # Jan 31 -> Feb 28/29
    year = day.year + (1 if day.month == 12 else 0)
    month = 1 if day.month == 12 else day.month + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))
