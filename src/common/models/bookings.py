from enum import Enum
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional

from common.utils.datetime_normaliser import count_nights


class BookingStatus(str, Enum):
    UNPAID = "Unpaid"
    DEPOSIT = "Deposit"
    PAID = "Paid"


@dataclass
class Guest:
    guest_id: str
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    tax_id: Optional[str] = None
    booking_count: int = 0


@dataclass
class Booking:
    booking_id: str
    guest: Guest
    check_in: date
    check_out: date
    rooms: List[str]
    status: BookingStatus = BookingStatus.UNPAID
    deposit_amount: Optional[float] = None
    total_price: float = 0.0

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def nights(self) -> int:
        return count_nights(self.check_in, self.check_out)

    @property
    def price_per_night(self) -> float:
        return self.total_price / max(len(self.rooms), 1) / max(self.nights, 1)
