from enum import Enum
from dataclasses import dataclass, field
from datetime import date
from typing import List

from common.models.bookings import Guest


class PaymentMethod(str, Enum):
    CASH = "Cash"
    TRANSFER = "Transfer"


@dataclass
class ReceiptLine:
    description: str
    check_in: date
    check_out: date
    room_count: int
    nights: int
    unit_price: float
    line_total: float


@dataclass
class Receipt:
    receipt_no: str
    guest: Guest
    issued_on: date
    payment_method: PaymentMethod
    payment_date: date
    lines: List[ReceiptLine] = field(default_factory=list)
    total_amount: float = 0.0
