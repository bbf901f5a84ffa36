from datetime import datetime
from zoneinfo import ZoneInfo

from flask import Blueprint, current_app, g, jsonify, request
from models import db
from models.booking_slot import BookingSlot
from security.rbac import require_admin
from utils.audit import log_event
from utils.dates import parse_date
from utils.slot_hours import is_valid_slot_time
from utils.request_body import json_object

booking_slots_bp = Blueprint("booking_slots", __name__, url_prefix="/booking_slots")

def _flag(name: str, default: bool) -> bool:
    raw = request.args.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes")

def _gym_now() -> datetime:
    tz = ZoneInfo(current_app.config.get("GYM_TIMEZONE", "Europe/Athens"))
    return datetime.now(tz).replace(tzinfo=None)


# ---------- USERS: browse slots (polled by clients) ----------
@booking_slots_bp.get("")
def list_slots():
    q = BookingSlot.query

    date_str = request.args.get("date")
    if date_str:
        try:
            day = parse_date(date_str)
        except ValueError:
            return jsonify(error="Invalid date. Use YYYY-MM-DD"), 400
        q = q.filter(BookingSlot.date == day)

    slots = q.order_by(BookingSlot.date.asc(), BookingSlot.time.asc()).all()

    if _flag("valid_only", True):
        slots = [s for s in slots if is_valid_slot_time(s.date, s.time)]

    if _flag("upcoming", False):
        now = _gym_now()
        slots = [s for s in slots if datetime.combine(s.date, s.time) > now]

    return jsonify(data=[s.to_dict() for s in slots]), 200


@booking_slots_bp.get("/<int:slot_id>")
def get_slot(slot_id: int):
    slot = db.session.get(BookingSlot, slot_id)
    if not slot:
        return jsonify(error="Booking slot not found"), 404
    return jsonify(data=slot.to_dict()), 200


# ---------- ADMIN: adjust capacity / close a slot ----------
@booking_slots_bp.patch("/<int:slot_id>")
@require_admin
def update_slot(slot_id: int):
    data = json_object()

    if "booked" in data:
        return jsonify(error="booked is managed by reservations and cannot be edited"), 400

    unknown = set(data) - {"capacity", "is_available"}
    if unknown:
        return jsonify(error="Unknown field(s)", fields=sorted(unknown)), 400
    if not data:
        return jsonify(error="capacity or is_available required"), 400

    capacity = data.get("capacity")
    if "capacity" in data and (isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0):
        return jsonify(error="capacity must be a positive integer"), 400

    requested = data.get("is_available")
    if "is_available" in data and not isinstance(requested, bool):
        return jsonify(error="is_available must be a boolean"), 400

    # row lock so a concurrent reservation cannot slip past the capacity check
    slot = (
        BookingSlot.query
        .filter_by(id=slot_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if not slot:
        db.session.rollback()
        return jsonify(error="Booking slot not found"), 404

    if requested is None:
        # closed only because it was full -> reopen when there is room; a manual close sticks
        requested = slot.is_available or slot.booked >= slot.capacity

    if capacity is not None:
        if capacity < slot.booked:
            db.session.rollback()
            return jsonify(error=f"capacity cannot be below current bookings ({slot.booked})"), 400
        slot.capacity = capacity

    slot.is_available = requested and slot.booked < slot.capacity
    db.session.commit()

    log_event("SLOT_UPDATE", user_id=g.user.id, entity="booking_slot", entity_id=slot.id, metadata=data)
    return jsonify(data=slot.to_dict()), 200
