from enum import Enum
from dataclasses import dataclass, field
from typing import Iterable, List


class RoomView(str, Enum):
    RIVER_VIEW = "River view"
    STANDARD_VIEW = "Standard view"
    COTTAGE = "Cottage"


class BedType(str, Enum):
    DOUBLE = "Double bed"
    TWIN = "Twin bed"


class RoomSortKey(str, Enum):
    ROOM_NO = "room_no"
    ROOM_TYPE = "room_type"
    BED_TYPE = "bed_type"


@dataclass(frozen=True)
class Room:
    room_id: int
    number: str
    floor: int
    view: RoomView
    bed_type: BedType
    version: int = field(default=0, compare=False)

    @property
    def type_name(self) -> str:
        return f"{self.view.value} - {self.bed_type.value}"


def room_number_key(number: str):
    # numeric room numbers compare as integers so "2" sorts before "10"
    try:
        return (0, int(number), number)
    except (TypeError, ValueError):
        return (1, 0, str(number))


def sort_room_numbers(numbers: Iterable[str]) -> List[str]:
    return sorted(numbers, key=room_number_key)


def sort_rooms(rooms: Iterable[Room], key: RoomSortKey = RoomSortKey.ROOM_NO) -> List[Room]:
    if key == RoomSortKey.ROOM_TYPE:
        return sorted(rooms, key=lambda r: (r.view.value, room_number_key(r.number)))
    if key == RoomSortKey.BED_TYPE:
        return sorted(rooms, key=lambda r: (r.bed_type.value, room_number_key(r.number)))
    return sorted(rooms, key=lambda r: room_number_key(r.number))


def catalog_order(rooms: Iterable[Room]) -> List[Room]:
    return sorted(rooms, key=lambda r: (r.room_id, room_number_key(r.number)))
