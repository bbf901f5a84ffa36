from datetime import date, datetime, time

from utils.dates import iso_day

# weekday() -> (open, close); both boundaries bookable. Sunday closed.
OPEN_HOURS = {
    0: (time(9, 0), time(21, 0)),
    1: (time(9, 0), time(21, 0)),
    2: (time(9, 0), time(21, 0)),
    3: (time(9, 0), time(21, 0)),
    4: (time(9, 0), time(21, 0)),
    5: (time(9, 0), time(16, 0)),
}


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return iso_day(str(value))


def _as_time(value) -> time:
    # minute resolution; seconds are ignored
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3) or (len(parts) == 3 and not parts[2].replace(".", "", 1).isdigit()):
        raise ValueError(f"Invalid time {value!r}. Use HH:MM")
    return time(int(parts[0]), int(parts[1]))


def is_valid_slot_time(slot_date, slot_time) -> bool:
    """Return True when the slot falls inside the gym's open hours for that weekday.

    ``slot_date`` is a date or ``YYYY-MM-DD`` string, ``slot_time`` a time or
    ``HH:MM[:SS]`` string. Raises ValueError on malformed input.
    """
    day = _as_date(slot_date)
    at = _as_time(slot_time)

    window = OPEN_HOURS.get(day.weekday())
    if window is None:
        return False

    opens, closes = window
    return opens <= at <= closes
