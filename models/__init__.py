from .db import db
from .user import User
from .audit_log import AuditLog
from .booking_slot import BookingSlot
from .user_booking import UserBooking
from .workout_schedule import WorkoutSchedule
