"""Date-range overlap and room availability.

Every function here is pure: callers pass the room catalog and the booking set
they read from the store, nothing is cached and nothing is mutated. Ranges are
half-open (check-in inclusive, check-out exclusive) and compared at day
granularity, so a room checked out on day D can be checked into on day D.
"""
from datetime import date
from typing import Iterable, List, Optional, Set

from common.models.bookings import Booking
from common.models.rooms import Room, sort_room_numbers
from common.utils.custom_exceptions import InvalidDates
from common.utils.datetime_normaliser import DateLike, to_date


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start < b_end and b_start < a_end


def validate_range(check_in: DateLike, check_out: DateLike):
    start, end = to_date(check_in), to_date(check_out)
    if start >= end:
        raise InvalidDates("check-out must be after check-in")
    return start, end


def booked_room_numbers(
    bookings: Iterable[Booking],
    check_in: date,
    check_out: date,
    exclude_booking_id: Optional[str] = None,
) -> Set[str]:
    booked: Set[str] = set()
    for booking in bookings:
        if exclude_booking_id and booking.booking_id == exclude_booking_id:
            continue
        if ranges_overlap(
            check_in, check_out, to_date(booking.check_in), to_date(booking.check_out)
        ):
            booked.update(booking.rooms)
    return booked


def find_available_rooms(
    all_rooms: Iterable[Room],
    bookings: Iterable[Booking],
    check_in: DateLike,
    check_out: DateLike,
    exclude_booking_id: Optional[str] = None,
) -> List[Room]:
    """Rooms of the catalog not held by an overlapping booking.

    ``exclude_booking_id`` is the booking being edited, so it does not block
    its own rooms. Catalog order is preserved.
    """
    start, end = validate_range(check_in, check_out)
    booked = booked_room_numbers(bookings, start, end, exclude_booking_id)
    return [room for room in all_rooms if room.number not in booked]


def find_conflicts(
    bookings: Iterable[Booking],
    rooms: Iterable[str],
    check_in: DateLike,
    check_out: DateLike,
    exclude_booking_id: Optional[str] = None,
) -> List[str]:
    start, end = validate_range(check_in, check_out)
    booked = booked_room_numbers(bookings, start, end, exclude_booking_id)
    return sort_room_numbers(set(rooms) & booked)


def is_room_occupied_on(
    room_number: str, day: DateLike, bookings: Iterable[Booking]
) -> Optional[Booking]:
    target = to_date(day)
    for booking in bookings:
        if room_number not in booking.rooms:
            continue
        if to_date(booking.check_in) <= target < to_date(booking.check_out):
            return booking
    return None
