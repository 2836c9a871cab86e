# PHM/backend/phm/services/booking_states.py

from phm.models.models import BookingStatus
from phm.errors import InvalidTransition

INITIAL_STATUS = BookingStatus.PENDING

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}


def is_terminal(status: BookingStatus) -> bool:
    return not ALLOWED_TRANSITIONS[status]


def transition(current: BookingStatus, target: BookingStatus) -> BookingStatus:
    """Return target if the move is allowed, raise InvalidTransition otherwise"""
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransition(current, target)
    return target
