from datetime import date
from typing import Iterable, Optional

from common.models.bookings import Booking
from common.utils.datetime_normaliser import count_nights


def compute_total_price(nights: int, room_count: int, rate: float) -> float:
    if nights < 1:
        raise ValueError("nights must be at least 1")
    if room_count < 1:
        raise ValueError("room_count must be at least 1")
    return nights * room_count * rate


def compute_unit_price_for_receipt(total_price: float, room_count: int, nights: int) -> float:
    return total_price / max(room_count, 1) / max(nights, 1)


def price_for_stay(check_in: date, check_out: date, room_count: int, rate: float) -> float:
    return compute_total_price(count_nights(check_in, check_out), room_count, rate)


def stay_changed(
    existing: Booking, rooms: Iterable[str], check_in: date, check_out: date
) -> bool:
    return (
        set(existing.rooms) != set(rooms)
        or existing.check_in != check_in
        or existing.check_out != check_out
    )


def resolve_total_price(
    rooms: Iterable[str],
    check_in: date,
    check_out: date,
    rate: float,
    requested_total: Optional[float] = None,
    existing: Optional[Booking] = None,
) -> float:
    """Total price to persist for a create or an edit.

    A changed room set or date range recomputes from ``rate`` unless the same
    request carries a new operator total. An edit that leaves the stay alone
    keeps whatever total is stored, so a manual override survives status-only
    changes.
    """
    rooms = list(rooms)
    computed = price_for_stay(check_in, check_out, len(rooms), rate)

    if existing is None:
        return computed if requested_total is None else requested_total

    if stay_changed(existing, rooms, check_in, check_out):
        if requested_total is None or requested_total == existing.total_price:
            return computed
        return requested_total

    return existing.total_price if requested_total is None else requested_total
