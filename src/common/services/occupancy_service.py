from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Iterable, List

from common.models.bookings import Booking
from common.models.cleaning import Occupancy
from common.models.rooms import Room
from common.utils.datetime_normaliser import DateLike, to_date


@dataclass
class DayOverview:
    day: date
    check_ins: List[Booking] = field(default_factory=list)
    check_outs: List[Booking] = field(default_factory=list)
    in_house: List[Booking] = field(default_factory=list)


def classify_occupancy(
    room_number: str, day: DateLike, bookings: Iterable[Booking]
) -> FrozenSet[Occupancy]:
    target = to_date(day)
    states = set()
    for booking in bookings:
        if room_number not in booking.rooms:
            continue
        check_in, check_out = to_date(booking.check_in), to_date(booking.check_out)
        if check_in == target:
            states.add(Occupancy.CHECK_IN)
        if check_out == target:
            states.add(Occupancy.CHECK_OUT)
        if check_in <= target < check_out:
            states.add(Occupancy.IN_HOUSE)
    if not states:
        return frozenset({Occupancy.VACANT})
    return frozenset(states)


def occupancy_board(
    rooms: Iterable[Room], day: DateLike, bookings: Iterable[Booking]
) -> Dict[str, FrozenSet[Occupancy]]:
    bookings = list(bookings)
    return {room.number: classify_occupancy(room.number, day, bookings) for room in rooms}


def day_overview(day: DateLike, bookings: Iterable[Booking]) -> DayOverview:
    target = to_date(day)
    overview = DayOverview(day=target)
    for booking in bookings:
        check_in, check_out = to_date(booking.check_in), to_date(booking.check_out)
        if check_in == target:
            overview.check_ins.append(booking)
        if check_out == target:
            overview.check_outs.append(booking)
        if check_in <= target < check_out:
            overview.in_house.append(booking)
    return overview
