import calendar
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from common.models.bookings import Booking
from common.models.rooms import Room
from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.occupancy_service import DayOverview, day_overview
from common.utils.constants import OCCUPANCY_MONTHS, POPULAR_ROOMS_LIMIT
from common.utils.datetime_normaliser import hotel_today, iter_nights


@dataclass
class MonthOccupancy:
    month: str
    room_nights: int


@dataclass
class CalendarDay:
    day: date
    booked: int
    vacant: int

    @property
    def is_full(self) -> bool:
        return self.vacant <= 0


def _shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def _month_label(year: int, month: int) -> str:
    return f"{calendar.month_abbr[month]} {year}"


def monthly_occupancy(
    bookings: Iterable[Booking], today: date, months: int = OCCUPANCY_MONTHS
) -> List[MonthOccupancy]:
    """Room-nights per month for the trailing ``months`` months, oldest first.

    A stay counts entirely toward the month it checks in.
    """
    window = [_shift_month(today.year, today.month, -i) for i in range(months - 1, -1, -1)]
    totals: Dict[Tuple[int, int], int] = {key: 0 for key in window}
    for booking in bookings:
        key = (booking.check_in.year, booking.check_in.month)
        if key in totals:
            totals[key] += (booking.check_out - booking.check_in).days * len(booking.rooms)
    return [MonthOccupancy(_month_label(y, m), totals[(y, m)]) for y, m in window]


def room_popularity(
    rooms: Iterable[Room], bookings: Iterable[Booking], limit: int = POPULAR_ROOMS_LIMIT
) -> List[Tuple[str, int]]:
    counts = {room.number: 0 for room in rooms}
    for booking in bookings:
        for number in booking.rooms:
            if number in counts:
                counts[number] += 1
    # sorted() is stable, so ties keep catalog order
    return sorted(counts.items(), key=lambda item: -item[1])[:limit]


def booked_counts(bookings: Iterable[Booking], start: date, end: date) -> Dict[date, int]:
    counts: Counter = Counter()
    for booking in bookings:
        for night in iter_nights(booking.check_in, booking.check_out):
            if start <= night < end:
                counts[night] += len(booking.rooms)
    return dict(counts)


def month_calendar(
    rooms: Iterable[Room], bookings: Iterable[Booking], year: int, month: int
) -> List[CalendarDay]:
    total = len(list(rooms))
    days_in_month = calendar.monthrange(year, month)[1]
    first = date(year, month, 1)
    next_year, next_month = _shift_month(year, month, 1)
    counts = booked_counts(bookings, first, date(next_year, next_month, 1))

    days = []
    for day_no in range(1, days_in_month + 1):
        day = date(year, month, day_no)
        booked = counts.get(day, 0)
        days.append(CalendarDay(day=day, booked=booked, vacant=total - booked))
    return days


class ReportService:
    def __init__(self, booking_repo: BookingRepository, room_repo: RoomRepository):
        self.booking_repo = booking_repo
        self.room_repo = room_repo

    def dashboard(self, today: Optional[date] = None) -> dict:
        today = today or hotel_today()
        bookings = self.booking_repo.list_bookings()
        rooms = self.room_repo.list_rooms()
        return {
            "monthly_occupancy": monthly_occupancy(bookings, today),
            "room_popularity": room_popularity(rooms, bookings),
        }

    def calendar(self, year: int, month: int, day: Optional[date] = None) -> Tuple[List[CalendarDay], DayOverview]:
        day = day or hotel_today()
        bookings = self.booking_repo.list_bookings()
        rooms = self.room_repo.list_rooms()
        return month_calendar(rooms, bookings, year, month), day_overview(day, bookings)
