from datetime import datetime
from models.db import db

class UserBooking(db.Model):
    __tablename__ = "user_bookings"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    booking_slot_id = db.Column(db.Integer, db.ForeignKey("booking_slots.id"), nullable=False, index=True)

    booked_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", back_populates="bookings")
    slot = db.relationship("BookingSlot", back_populates="bookings")

    __table_args__ = (
        # One booking per user per slot
        db.UniqueConstraint("user_id", "booking_slot_id", name="uq_user_booking_slot"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "booking_slot_id": self.booking_slot_id,
            "booked_at": self.booked_at.isoformat(),
        }
