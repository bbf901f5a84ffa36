from datetime import date, time

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.booking_slot import BookingSlot
from models.user import User


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client_obj:
        yield client_obj


@pytest.fixture
def users(app):
    """Two approved members and an admin; returns {key: (id, clerk_id)}."""
    rows = {
        "member": User(name="Maria Member", email="member@gym.test", clerk_id="user_member", is_approved=True),
        "other": User(name="Oscar Other", email="other@gym.test", clerk_id="user_other", is_approved=True),
        "admin": User(name="Ada Admin", email="admin@gym.test", clerk_id="user_admin", is_admin=True, is_approved=True),
    }
    with app.app_context():
        db.session.add_all(rows.values())
        db.session.commit()
        return {key: (u.id, u.clerk_id) for key, u in rows.items()}


@pytest.fixture
def make_slot(app):
    def _make(day=date(2024, 1, 8), at=time(10, 0), capacity=2, is_available=True):
        with app.app_context():
            slot = BookingSlot(date=day, time=at, capacity=capacity, booked=0, is_available=is_available)
            db.session.add(slot)
            db.session.commit()
            return slot.id
    return _make


def auth(users, key):
    return {"X-Clerk-User-Id": users[key][1]}


def slot_state(app, slot_id):
    with app.app_context():
        slot = db.session.get(BookingSlot, slot_id)
        return slot.booked, slot.is_available
