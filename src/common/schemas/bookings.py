from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from common.models.bookings import Booking, BookingStatus
from common.models.rooms import sort_room_numbers
from common.utils.constants import MAX_STAY
from common.utils.datetime_normaliser import to_date


class BookingRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    guest_id: Optional[str] = None
    customer_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    tax_id: Optional[str] = None

    check_in: date
    check_out: date
    rooms: List[str] = Field(min_length=1)
    status: BookingStatus = BookingStatus.UNPAID
    deposit_amount: Optional[float] = Field(default=None, ge=0)
    total_price: Optional[float] = Field(default=None, ge=0)

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        if v is None or v == "":
            raise ValueError("date is required")
        return to_date(v)

    @field_validator("customer_name", "phone", "address", "tax_id", "email", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("rooms")
    @classmethod
    def normalise_rooms(cls, v: List[str]):
        rooms = {str(r).strip() for r in v if str(r).strip()}
        if not rooms:
            raise ValueError("select at least one room")
        return sort_room_numbers(rooms)

    @model_validator(mode="after")
    def validate_booking(self):
        if not self.guest_id and (not self.customer_name or not self.phone):
            raise ValueError("customer_name and phone are required")

        if self.check_out <= self.check_in:
            raise ValueError("check-out must be after check-in")
        if (self.check_out - self.check_in).days > MAX_STAY:
            raise ValueError(f"Maximum stay is {MAX_STAY} days")

        if self.status != BookingStatus.DEPOSIT:
            self.deposit_amount = None

        return self


class BookingSearch(BaseModel):
    q: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1, le=100)


def booking_to_dict(b: Booking) -> dict:
    return {
        "booking_id": b.booking_id,
        "guest_id": b.guest.guest_id,
        "customer_name": b.guest.name,
        "phone": b.guest.phone,
        "email": b.guest.email,
        "address": b.guest.address,
        "tax_id": b.guest.tax_id,
        "check_in": b.check_in.isoformat(),
        "check_out": b.check_out.isoformat(),
        "rooms": list(b.rooms),
        "nights": b.nights,
        "status": b.status.value,
        "deposit_amount": b.deposit_amount,
        "total_price": b.total_price,
        "created_at": b.created_at.isoformat(),
    }
