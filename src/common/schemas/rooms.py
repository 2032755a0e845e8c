from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from common.models.rooms import Room, RoomView, BedType


class RoomRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    room_id: int = Field(ge=1)
    number: str = Field(min_length=1)
    floor: int
    view: RoomView
    bed_type: BedType

    @field_validator("number", mode="before")
    @classmethod
    def strip_number(cls, v):
        if isinstance(v, (int, str)):
            return str(v).strip()
        return v


def room_to_dict(room: Room) -> dict:
    return {
        "room_id": room.room_id,
        "number": room.number,
        "floor": room.floor,
        "view": room.view.value,
        "bed_type": room.bed_type.value,
    }
