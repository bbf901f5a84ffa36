from functools import wraps
from flask import current_app, g, jsonify, request
from models.user import User

def resolve_user(identifier):
    """Find a user by identity-provider id, falling back to the numeric primary key."""
    if identifier is None:
        return None
    identifier = str(identifier).strip()
    if not identifier:
        return None

    user = User.query.filter_by(clerk_id=identifier).first()
    if user is None and identifier.isdigit():
        user = User.query.get(int(identifier))
    return user

def load_current_user():
    header = current_app.config.get("AUTH_HEADER_NAME", "X-Clerk-User-Id")
    g.user = resolve_user(request.headers.get(header))

def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if getattr(g, "user", None) is None:
            return jsonify(error="Authentication required"), 401
        return fn(*args, **kwargs)
    return wrapper
