from functools import wraps
from flask import g, jsonify

def is_admin() -> bool:
    user = getattr(g, "user", None)
    return bool(user and user.is_admin)

def can_act_for(user_id) -> bool:
    """Admins act for anyone; everyone else only for themselves."""
    user = getattr(g, "user", None)
    if user is None:
        return False
    return user.is_admin or user.id == user_id

def require_admin(fn):
    """
    Usage: @require_admin
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = getattr(g, "user", None)
        if user is None:
            return jsonify(error="Authentication required"), 401
        if not user.is_admin:
            return jsonify(error="Forbidden"), 403
        return fn(*args, **kwargs)
    return wrapper
