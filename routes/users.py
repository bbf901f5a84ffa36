from flask import Blueprint, current_app, g, jsonify
from sqlalchemy.exc import IntegrityError

from models import db
from models.user import User
from security.rbac import can_act_for, require_admin
from utils.audit import log_event
from utils.auth_context import login_required, resolve_user
from utils.dates import add_one_month, parse_date
from utils.request_body import json_object

users_bp = Blueprint("users", __name__, url_prefix="/users")

SELF_EDITABLE_FIELDS = {"name"}
ADMIN_EDITABLE_FIELDS = SELF_EDITABLE_FIELDS | {"is_admin", "is_approved", "subscription_start", "subscription_end"}
BOOLEAN_FIELDS = {"is_admin", "is_approved"}
DATE_FIELDS = {"subscription_start", "subscription_end"}


# ---------- IDENTITY BRIDGE: create user at sign-up ----------
@users_bp.post("")
def create_user():
    data = json_object()
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    clerk_id = (data.get("clerkId") or "").strip()

    if not name or not email or not clerk_id:
        return jsonify(error="Missing required fields"), 400

    # only an existing admin can hand out the admin flag
    wants_admin = bool(data.get("isAdmin"))
    if wants_admin and not (getattr(g, "user", None) and g.user.is_admin):
        return jsonify(error="Forbidden"), 403

    user = User(name=name, email=email, clerk_id=clerk_id, is_admin=wants_admin)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify(error="User with that email or clerk id already exists"), 409

    log_event("USER_CREATE", user_id=user.id, entity="user", entity_id=user.id)
    return jsonify(data=user.to_dict()), 201


# ---------- ADMIN: list users ----------
@users_bp.get("")
@require_admin
def list_users():
    users = User.query.order_by(User.name.asc()).limit(current_app.config.get("ADMIN_LIST_LIMIT", 200)).all()
    return jsonify(data=[u.to_dict() for u in users]), 200


@users_bp.get("/<identifier>")
@login_required
def get_user(identifier: str):
    user = resolve_user(identifier)
    if not user or not can_act_for(user.id):
        return jsonify(error="User not found"), 404
    return jsonify(data=user.to_dict()), 200


@users_bp.patch("/<identifier>")
@login_required
def update_user(identifier: str):
    user = resolve_user(identifier)
    if not user or not can_act_for(user.id):
        return jsonify(error="User not found"), 404

    updates = json_object()
    if not updates:
        return jsonify(error="No fields to update"), 400

    allowed = ADMIN_EDITABLE_FIELDS if g.user.is_admin else SELF_EDITABLE_FIELDS
    rejected = set(updates) - allowed
    if rejected:
        return jsonify(error="Field(s) not editable", fields=sorted(rejected)), 400

    if user.id == g.user.id and updates.get("is_admin") is False:
        return jsonify(error="Cannot remove your own admin flag"), 403

    changes = {}
    for field, value in updates.items():
        if field in BOOLEAN_FIELDS:
            if not isinstance(value, bool):
                return jsonify(error=f"{field} must be a boolean"), 400
            changes[field] = value
        elif field in DATE_FIELDS:
            try:
                changes[field] = parse_date(value)
            except ValueError:
                return jsonify(error=f"Invalid {field}. Use YYYY-MM-DD"), 400
        else:
            value = (value or "").strip() if isinstance(value, str) else None
            if not value:
                return jsonify(error=f"{field} must be a non-empty string"), 400
            changes[field] = value

    # a new start date without an end date runs for one month
    if changes.get("subscription_start") and "subscription_end" not in changes:
        changes["subscription_end"] = add_one_month(changes["subscription_start"])

    start = changes.get("subscription_start", user.subscription_start)
    end = changes.get("subscription_end", user.subscription_end)
    if start and end and end < start:
        return jsonify(error="subscription_end must not be before subscription_start"), 400

    for field, value in changes.items():
        setattr(user, field, value)
    db.session.commit()

    log_event("USER_UPDATE", user_id=g.user.id, entity="user", entity_id=user.id, metadata=changes)
    return jsonify(data=user.to_dict()), 200


# ---------- ADMIN: renew subscription for another month ----------
@users_bp.post("/<int:user_id>/renew")
@require_admin
def renew_subscription(user_id: int):
    user = db.session.get(User, user_id)
    if not user:
        return jsonify(error="User not found"), 404
    if not user.subscription_start:
        return jsonify(error="Cannot renew subscription: subscription start date is not set"), 400

    user.subscription_end = add_one_month(user.subscription_start)
    db.session.commit()

    log_event("USER_SUBSCRIPTION_RENEW", user_id=g.user.id, entity="user", entity_id=user.id,
              metadata={"subscription_end": user.subscription_end})
    return jsonify(data=user.to_dict()), 200
