import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, FrozenSet, Iterable, List, Optional

from common.models.bookings import Booking
from common.models.cleaning import CleaningState, CleaningStatus, CleaningToggle, Occupancy
from common.models.rooms import Room
from common.repository.booking_repo import BookingRepository
from common.repository.cleaning_repo import CleaningRepository
from common.repository.room_repo import RoomRepository
from common.services.availability_service import is_room_occupied_on
from common.services.occupancy_service import occupancy_board
from common.utils.custom_exceptions import NotFoundException
from common.utils.datetime_normaliser import hotel_today

logger = logging.getLogger(__name__)


@dataclass
class RoomCleaningView:
    room_number: str
    status: CleaningState
    occupancy: FrozenSet[Occupancy]


def plan_daily_reset(
    rooms: Iterable[Room],
    statuses: Dict[str, CleaningState],
    bookings: Iterable[Booking],
    today: date,
) -> List[str]:
    """Rooms occupied today that are not yet flagged for cleaning."""
    bookings = list(bookings)
    return [
        room.number
        for room in rooms
        if is_room_occupied_on(room.number, today, bookings) is not None
        and statuses.get(room.number, CleaningState.CLEAN) != CleaningState.NEEDS_CLEANING
    ]


class CleaningService:
    def __init__(
        self,
        cleaning_repo: CleaningRepository,
        room_repo: RoomRepository,
        booking_repo: BookingRepository,
    ):
        self.cleaning_repo = cleaning_repo
        self.room_repo = room_repo
        self.booking_repo = booking_repo

    def list_statuses(self) -> List[CleaningStatus]:
        stored = self._stored_statuses()
        return [
            CleaningStatus(room.number, stored.get(room.number, CleaningState.CLEAN))
            for room in self.room_repo.list_rooms()
        ]

    def cleaning_board(self, day: Optional[date] = None) -> List[RoomCleaningView]:
        day = day or hotel_today()
        rooms = self.room_repo.list_rooms()
        stored = self._stored_statuses()
        occupancy = occupancy_board(rooms, day, self.booking_repo.list_bookings())
        return [
            RoomCleaningView(
                room_number=room.number,
                status=stored.get(room.number, CleaningState.CLEAN),
                occupancy=occupancy[room.number],
            )
            for room in rooms
        ]

    def set_status(self, room_number: str, status: CleaningState) -> CleaningStatus:
        self._require_room(room_number)
        return self.cleaning_repo.set_status(room_number, status)

    def request_toggle(self, room_number: str) -> CleaningToggle:
        self._require_room(room_number)
        stored = self.cleaning_repo.get_status(room_number)
        current = stored.status if stored else CleaningState.CLEAN
        return CleaningToggle(room_number=room_number, current=current, proposed=current.toggled())

    def confirm_toggle(self, toggle: CleaningToggle) -> CleaningStatus:
        status = self.cleaning_repo.set_status(
            toggle.room_number, toggle.proposed, expected=toggle.current
        )
        logger.info(
            f"Room {toggle.room_number} cleaning status {toggle.current.value} -> {toggle.proposed.value}"
        )
        return status

    def run_daily_reset(self, today: Optional[date] = None) -> int:
        today = today or hotel_today()
        rooms = self.room_repo.list_rooms()
        bookings = self.booking_repo.list_bookings()

        changed = 0
        for room_number in plan_daily_reset(rooms, self._stored_statuses(), bookings, today):
            if self.cleaning_repo.mark_needs_cleaning(room_number):
                changed += 1
        logger.info(f"Daily cleaning reset for {today.isoformat()}: {changed} room(s) flagged")
        return changed

    def _stored_statuses(self) -> Dict[str, CleaningState]:
        return {s.room_number: s.status for s in self.cleaning_repo.list_statuses()}

    def _require_room(self, room_number: str):
        if self.room_repo.get_room(room_number) is None:
            raise NotFoundException("room", room_number, 404)
