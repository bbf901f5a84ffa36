from models.db import db

class BookingSlot(db.Model):
    __tablename__ = "booking_slots"

    id = db.Column(db.Integer, primary_key=True)

    date = db.Column(db.Date, nullable=False, index=True)
    time = db.Column(db.Time, nullable=False)

    capacity = db.Column(db.Integer, nullable=False)
    booked = db.Column(db.Integer, nullable=False, default=0)
    # kept equal to booked < capacity by reservations; admins may also close a slot
    is_available = db.Column(db.Boolean, nullable=False, default=True)

    bookings = db.relationship("UserBooking", back_populates="slot", passive_deletes=True)

    __table_args__ = (
        db.UniqueConstraint("date", "time", name="uq_booking_slot_datetime"),
        db.CheckConstraint("capacity > 0", name="ck_booking_slot_capacity_positive"),
        db.CheckConstraint("booked >= 0 AND booked <= capacity", name="ck_booking_slot_booked_range"),
    )

    @property
    def spots_left(self) -> int:
        return max(self.capacity - self.booked, 0)

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M:%S"),
            "capacity": self.capacity,
            "booked": self.booked,
            "is_available": self.is_available,
            "spots_left": self.spots_left,
        }
