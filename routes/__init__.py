from .health import health_bp
from .booking_slots import booking_slots_bp
from .user_bookings import user_bookings_bp
from .users import users_bp
from .admin import admin_bp
from .workouts import workouts_bp
