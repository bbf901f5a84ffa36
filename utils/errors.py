class BookingError(Exception):
    """Logical rejection from the reservation/cancellation handlers. Never retried."""

    status_code = 400
    message = "Booking request rejected"

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)


class SlotUnavailable(BookingError):
    message = "Booking slot is not available"


class AlreadyBooked(BookingError):
    message = "You have already booked this slot"


class BookingNotFound(BookingError):
    status_code = 404
    message = "Booking not found or already cancelled"


class UserNotFound(BookingError):
    status_code = 404
    message = "User not found"


class UserNotApproved(BookingError):
    status_code = 403
    message = "Your account is pending approval"
