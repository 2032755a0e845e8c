from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from common.models.receipt import PaymentMethod, Receipt
from common.utils.datetime_normaliser import to_date


class ReceiptRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    booking_ids: List[str] = Field(min_length=1)
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_date: Optional[date] = None

    @field_validator("payment_date", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        if v is None or v == "":
            return None
        return to_date(v)

    @field_validator("booking_ids")
    @classmethod
    def unique_ids(cls, v: List[str]):
        seen = []
        for booking_id in v:
            if booking_id not in seen:
                seen.append(booking_id)
        return seen


def receipt_to_dict(receipt: Receipt) -> dict:
    return {
        "receipt_no": receipt.receipt_no,
        "customer_name": receipt.guest.name,
        "phone": receipt.guest.phone,
        "address": receipt.guest.address,
        "tax_id": receipt.guest.tax_id,
        "issued_on": receipt.issued_on.isoformat(),
        "payment_method": receipt.payment_method.value,
        "payment_date": receipt.payment_date.isoformat(),
        "lines": [
            {
                "description": line.description,
                "check_in": line.check_in.isoformat(),
                "check_out": line.check_out.isoformat(),
                "room_count": line.room_count,
                "nights": line.nights,
                "unit_price": line.unit_price,
                "line_total": line.line_total,
            }
            for line in receipt.lines
        ],
        "total_amount": receipt.total_amount,
    }
