"""
Reservation and cancellation against booking_slots / user_bookings.

Capacity is enforced by the database: a spot is claimed with a single
conditional UPDATE guarded by ``booked < capacity``, and the claim, the
duplicate check and the insert share one transaction. Any rejection rolls
the transaction back, so a rejected request leaves no trace.
"""
import logging
from datetime import datetime

from flask import current_app
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from models import db
from models.booking_slot import BookingSlot
from models.user import User
from models.user_booking import UserBooking
from utils.errors import (
    AlreadyBooked,
    BookingError,
    BookingNotFound,
    SlotUnavailable,
    UserNotApproved,
    UserNotFound,
)
from utils.retry import with_db_retry
from utils.slot_hours import is_valid_slot_time

logger = logging.getLogger(__name__)


def _claim_spot(slot_id: int) -> bool:
    result = db.session.execute(
        update(BookingSlot)
        .where(
            BookingSlot.id == slot_id,
            BookingSlot.is_available.is_(True),
            BookingSlot.booked < BookingSlot.capacity,
        )
        .values(
            booked=BookingSlot.booked + 1,
            is_available=(BookingSlot.booked + 1 < BookingSlot.capacity),
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def _release_spot(slot_id: int) -> None:
    db.session.execute(
        update(BookingSlot)
        .where(BookingSlot.id == slot_id, BookingSlot.booked > 0)
        .values(booked=BookingSlot.booked - 1, is_available=True)
        .execution_options(synchronize_session=False)
    )


@with_db_retry
def reserve_slot(user_id: int, slot_id: int) -> UserBooking:
    """Book one spot on ``slot_id`` for ``user_id``.

    Raises SlotUnavailable, AlreadyBooked, UserNotFound or UserNotApproved
    without mutating anything.
    """
    try:
        user = db.session.get(User, user_id)
        if user is None:
            raise UserNotFound()
        if not user.is_approved:
            raise UserNotApproved()

        if current_app.config.get("ENFORCE_SLOT_HOURS_ON_BOOKING"):
            slot = db.session.get(BookingSlot, slot_id)
            if slot is None or not is_valid_slot_time(slot.date, slot.time):
                raise SlotUnavailable()

        if not _claim_spot(slot_id):
            raise SlotUnavailable()

        existing = db.session.execute(
            select(UserBooking.id).where(
                UserBooking.user_id == user_id,
                UserBooking.booking_slot_id == slot_id,
            )
        ).first()
        if existing is not None:
            raise AlreadyBooked()

        booking = UserBooking(user_id=user_id, booking_slot_id=slot_id, booked_at=datetime.utcnow())
        db.session.add(booking)
        db.session.flush()
    except IntegrityError:
        # uq_user_booking_slot: a concurrent request from the same user won
        db.session.rollback()
        raise AlreadyBooked()
    except BookingError as exc:
        db.session.rollback()
        logger.info("Reservation rejected user=%s slot=%s: %s", user_id, slot_id, exc.message)
        raise

    db.session.commit()
    logger.info("Reserved slot=%s for user=%s booking=%s", slot_id, user_id, booking.id)
    return booking


@with_db_retry
def cancel_booking(booking_id: int) -> BookingSlot:
    """Delete a booking and give its spot back. Returns the updated slot.

    Raises BookingNotFound when the booking does not exist (or another cancel got there first).
    """
    slot_id = db.session.execute(
        select(UserBooking.booking_slot_id).where(UserBooking.id == booking_id)
    ).scalar_one_or_none()
    if slot_id is None:
        db.session.rollback()
        raise BookingNotFound()

    deleted = db.session.execute(
        delete(UserBooking)
        .where(UserBooking.id == booking_id)
        .execution_options(synchronize_session=False)
    )
    if deleted.rowcount != 1:
        db.session.rollback()
        raise BookingNotFound()

    _release_spot(slot_id)
    db.session.commit()

    logger.info("Cancelled booking=%s slot=%s", booking_id, slot_id)
    return db.session.get(BookingSlot, slot_id)
