from flask import Blueprint, current_app, g, jsonify, request
from models import db
from models.booking_slot import BookingSlot
from models.user_booking import UserBooking
from security.rbac import can_act_for
from utils.audit import log_event
from utils.auth_context import login_required
from utils.errors import BookingError
from utils.reservations import cancel_booking, reserve_slot
from utils.request_body import json_object

user_bookings_bp = Blueprint("user_bookings", __name__, url_prefix="/user_bookings")

def _as_int(value):
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


# ---------- USERS: reserve a spot ----------
@user_bookings_bp.post("")
@login_required
def create_user_booking():
    data = json_object()
    user_id = _as_int(data.get("userId"))
    slot_id = _as_int(data.get("bookingSlotId"))
    if not user_id or not slot_id:
        return jsonify(error="User ID and Booking Slot ID are required"), 400

    if not can_act_for(user_id):
        return jsonify(error="Forbidden"), 403

    try:
        booking = reserve_slot(user_id, slot_id)
    except BookingError as exc:
        log_event(
            "BOOKING_REJECTED",
            user_id=g.user.id,
            entity="booking_slot",
            entity_id=slot_id,
            metadata={"for_user_id": user_id, "reason": exc.message},
        )
        return jsonify(error=exc.message), exc.status_code

    log_event("BOOKING_CREATE", user_id=g.user.id, entity="booking", entity_id=booking.id,
              metadata={"slot_id": slot_id, "for_user_id": user_id})
    return jsonify(data=booking.to_dict()), 201


# ---------- USERS: booking history ----------
@user_bookings_bp.get("")
@login_required
def list_user_bookings():
    user_id = request.args.get("userId", type=int)
    if not user_id:
        return jsonify(error="User ID is required"), 400
    if not can_act_for(user_id):
        return jsonify(error="Forbidden"), 403

    default_limit = current_app.config.get("USER_BOOKINGS_DEFAULT_LIMIT", 50)
    limit = request.args.get("limit", type=int) or default_limit
    limit = max(1, min(limit, current_app.config.get("ADMIN_LIST_LIMIT", 200)))

    q = (
        db.session.query(UserBooking, BookingSlot)
        .join(BookingSlot, UserBooking.booking_slot_id == BookingSlot.id)
        .filter(UserBooking.user_id == user_id)
    )

    slot_id = request.args.get("bookingSlotId", type=int)
    if slot_id:
        q = q.filter(UserBooking.booking_slot_id == slot_id)

    rows = q.order_by(BookingSlot.date.desc(), BookingSlot.time.desc()).limit(limit).all()
    return jsonify(data=[
        {
            "id": b.id,
            "booking_slot_id": b.booking_slot_id,
            "booked_at": b.booked_at.isoformat(),
            "date": s.date.isoformat(),
            "time": s.time.strftime("%H:%M:%S"),
            "capacity": s.capacity,
            "booked": s.booked,
            "is_available": s.is_available,
        }
        for b, s in rows
    ]), 200


# ---------- USERS: cancel (own bookings; admins any) ----------
@user_bookings_bp.delete("/<int:booking_id>")
@login_required
def delete_user_booking(booking_id: int):
    booking = db.session.get(UserBooking, booking_id)
    if not booking or not can_act_for(booking.user_id):
        return jsonify(error="Booking not found or already cancelled"), 404
    owner_id = booking.user_id

    try:
        slot = cancel_booking(booking_id)
    except BookingError as exc:
        return jsonify(error=exc.message), exc.status_code

    log_event("BOOKING_CANCEL", user_id=g.user.id, entity="booking", entity_id=booking_id,
              metadata={"slot_id": slot.id, "for_user_id": owner_id})
    return jsonify(message="Booking cancelled successfully", data=slot.to_dict()), 200
