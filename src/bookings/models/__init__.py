from .booking import Booking
from .guest_lock import GuestLock
from .unit_lock import UnitLock

__all__ = [
    "Booking",
    "GuestLock",
    "UnitLock",
]
