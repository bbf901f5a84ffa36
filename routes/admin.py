from flask import Blueprint, current_app, jsonify, request
from models import db
from models.audit_log import AuditLog
from models.booking_slot import BookingSlot
from models.user import User
from models.user_booking import UserBooking
from security.rbac import require_admin
from utils.dates import parse_date

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

def _booking_view_query():
    # bookings joined with their slot and user
    return (
        db.session.query(
            UserBooking.id.label("booking_id"),
            BookingSlot.id.label("slot_id"),
            BookingSlot.date,
            BookingSlot.time,
            BookingSlot.capacity,
            BookingSlot.booked,
            User.id.label("user_id"),
            User.name,
            User.email,
            UserBooking.booked_at,
        )
        .join(BookingSlot, UserBooking.booking_slot_id == BookingSlot.id)
        .join(User, UserBooking.user_id == User.id)
    )


@admin_bp.get("/bookings")
@require_admin
def admin_bookings():
    slot_id = request.args.get("slotId")
    date_str = request.args.get("date")

    q = _booking_view_query()
    if slot_id:
        if not slot_id.strip().isdigit():
            return jsonify(error="Invalid slot ID"), 400
        q = q.filter(BookingSlot.id == int(slot_id)).order_by(UserBooking.booked_at.asc())
    elif date_str:
        try:
            day = parse_date(date_str)
        except ValueError:
            return jsonify(error="Invalid date. Use YYYY-MM-DD"), 400
        q = q.filter(BookingSlot.date == day).order_by(BookingSlot.time.asc(), UserBooking.booked_at.asc())
    else:
        return jsonify(error="Either date or slotId is required"), 400

    return jsonify(data=[
        {
            "booking_id": r.booking_id,
            "slot_id": r.slot_id,
            "date": r.date.isoformat(),
            "time": r.time.strftime("%H:%M:%S"),
            "capacity": r.capacity,
            "booked": r.booked,
            "user_id": r.user_id,
            "name": r.name,
            "email": r.email,
            "booked_at": r.booked_at.isoformat(),
        }
        for r in q.all()
    ]), 200


@admin_bp.get("/slot-bookings")
@require_admin
def admin_slot_bookings():
    raw = request.args.get("slotId")
    if not raw:
        return jsonify(error="Slot ID is required"), 400
    if not raw.strip().isdigit():
        return jsonify(error="Invalid slot ID"), 400

    rows = (
        db.session.query(UserBooking, User)
        .join(User, UserBooking.user_id == User.id)
        .filter(UserBooking.booking_slot_id == int(raw))
        .order_by(UserBooking.booked_at.asc())
        .all()
    )
    return jsonify(data={
        "bookings": [
            {
                "id": b.id,
                "user_id": b.user_id,
                "booking_slot_id": b.booking_slot_id,
                "booked_at": b.booked_at.isoformat(),
                "name": u.name,
                "email": u.email,
            }
            for b, u in rows
        ]
    }), 200


@admin_bp.get("/audit-logs")
@require_admin
def list_audit_logs():
    limit = request.args.get("limit", type=int) or current_app.config.get("ADMIN_LIST_LIMIT", 200)
    limit = max(1, min(limit, 500))

    action = request.args.get("action")
    user_id = request.args.get("user_id", type=int)

    q = AuditLog.query
    if action:
        q = q.filter(AuditLog.action == action)
    if user_id is not None:
        q = q.filter(AuditLog.user_id == user_id)

    rows = q.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
    return jsonify(data=[r.to_dict() for r in rows]), 200
