from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from common.models.bookings import Booking
from common.models.rooms import Room, RoomView, BedType, RoomSortKey, sort_rooms
from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.availability_service import find_available_rooms, is_room_occupied_on
from common.utils.datetime_normaliser import DateLike, to_date


@dataclass
class RoomDayStatus:
    room: Room
    booking: Optional[Booking] = None

    @property
    def is_booked(self) -> bool:
        return self.booking is not None


class RoomService:
    def __init__(self, room_repo: RoomRepository, booking_repo: Optional[BookingRepository] = None):
        self.room_repo = room_repo
        self.booking_repo = booking_repo

    def add_room(self, room_id: int, number: str, floor: int, view: RoomView, bed_type: BedType) -> Room:
        room = Room(room_id=room_id, number=number, floor=floor, view=view, bed_type=bed_type)
        self.room_repo.add_room(room=room)
        return room

    def list_rooms(self) -> List[Room]:
        return self.room_repo.list_rooms()

    def get_available_rooms(
        self,
        check_in: DateLike,
        check_out: DateLike,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Room]:
        return find_available_rooms(
            self.room_repo.list_rooms(),
            self.booking_repo.list_bookings(),
            check_in,
            check_out,
            exclude_booking_id=exclude_booking_id,
        )

    def status_board(
        self, day: DateLike, sort_key: RoomSortKey = RoomSortKey.ROOM_NO
    ) -> List[RoomDayStatus]:
        target: date = to_date(day)
        bookings = self.booking_repo.list_bookings()
        return [
            RoomDayStatus(room=room, booking=is_room_occupied_on(room.number, target, bookings))
            for room in sort_rooms(self.room_repo.list_rooms(), sort_key)
        ]
