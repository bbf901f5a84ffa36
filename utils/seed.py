from datetime import time, timedelta

from models import db
from models.booking_slot import BookingSlot
from models.workout_schedule import WorkoutSchedule
from utils.slot_hours import OPEN_HOURS

def get_or_create_schedule() -> WorkoutSchedule:
    schedule = WorkoutSchedule.query.order_by(WorkoutSchedule.id.asc()).first()
    if schedule is None:
        schedule = WorkoutSchedule(version=1)
        db.session.add(schedule)
        db.session.commit()
    return schedule

def seed_slots(start, days: int, capacity: int) -> int:
    """Create hourly slots within opening hours for ``days`` days from ``start``. Returns rows created."""
    created = 0
    for offset in range(days):
        day = start + timedelta(days=offset)
        window = OPEN_HOURS.get(day.weekday())
        if window is None:
            continue

        opens, closes = window
        existing = {
            s.time for s in BookingSlot.query.filter_by(date=day).all()
        }
        for hour in range(opens.hour, closes.hour + 1):
            at = time(hour, 0)
            if at in existing:
                continue
            db.session.add(BookingSlot(date=day, time=at, capacity=capacity, booked=0, is_available=True))
            created += 1

    db.session.commit()
    return created
