from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from common.models.bookings import Booking
from common.models.receipt import PaymentMethod, Receipt, ReceiptLine
from common.models.rooms import Room
from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.pricing_service import compute_unit_price_for_receipt
from common.utils.constants import CURRENCY, DEFAULT_NIGHTLY_RATE, HOTEL_NAME
from common.utils.custom_exceptions import NotFoundException
from common.utils.datetime_normaliser import hotel_today


def build_receipt_lines(
    bookings: Iterable[Booking],
    rooms_by_number: Dict[str, Room],
    default_rate: float = DEFAULT_NIGHTLY_RATE,
) -> List[ReceiptLine]:
    """Group booked rooms into receipt lines.

    Rooms sharing a room type and the same stay collapse into one line. The
    unit price is back-derived from each booking's stored total, so manual
    overrides show up as they were charged.
    """
    grouped: Dict[Tuple[str, date, date], ReceiptLine] = {}

    for booking in bookings:
        nights = booking.nights
        room_count = len(booking.rooms)
        total = booking.total_price or default_rate * room_count
        unit_price = compute_unit_price_for_receipt(total, room_count, nights)

        for number in booking.rooms:
            room = rooms_by_number.get(number)
            if room is None:
                continue

            key = (room.type_name, booking.check_in, booking.check_out)
            line = grouped.get(key)
            if line is not None:
                line.room_count += 1
                line.line_total += unit_price * nights
            else:
                grouped[key] = ReceiptLine(
                    description=room.type_name,
                    check_in=booking.check_in,
                    check_out=booking.check_out,
                    room_count=1,
                    nights=nights,
                    unit_price=unit_price,
                    line_total=unit_price * nights,
                )

    return list(grouped.values())


def render_receipt(receipt: Receipt) -> str:
    guest = receipt.guest
    lines = [
        HOTEL_NAME,
        "RECEIPT",
        "",
        f"Receipt No: {receipt.receipt_no}",
        f"Date: {receipt.issued_on.isoformat()}",
        f"Customer: {guest.name}",
        f"Address: {guest.address or '-'}",
        f"Phone: {guest.phone}",
        f"Tax ID: {guest.tax_id or '-'}",
        "",
        f"{'Item':<32}{'Rooms':>6}{'Nights':>8}{'Unit price':>14}{'Total':>14}",
    ]
    for line in receipt.lines:
        lines.append(
            f"{line.description:<32}{line.room_count:>6}{line.nights:>8}"
            f"{line.unit_price:>14.2f}{line.line_total:>14.2f}"
        )
        lines.append(
            f"  Check-in: {line.check_in.isoformat()} - Check-out: {line.check_out.isoformat()}"
        )
    lines += [
        "",
        f"Total ({CURRENCY}): {receipt.total_amount:.2f}",
        f"{receipt.payment_method.value}: {receipt.total_amount:.2f} {CURRENCY}, "
        f"paid {receipt.payment_date.isoformat()}",
    ]
    return "\n".join(lines)


class ReceiptService:
    def __init__(
        self,
        booking_repo: BookingRepository,
        room_repo: RoomRepository,
        default_rate: float = DEFAULT_NIGHTLY_RATE,
    ):
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.default_rate = default_rate

    def generate_receipt(
        self,
        booking_ids: List[str],
        payment_method: PaymentMethod = PaymentMethod.CASH,
        payment_date: Optional[date] = None,
        issued_on: Optional[date] = None,
    ) -> Receipt:
        bookings = []
        for booking_id in booking_ids:
            booking = self.booking_repo.get_booking(booking_id)
            if booking is None:
                raise NotFoundException("booking", booking_id, 404)
            bookings.append(booking)
        bookings.sort(key=lambda b: b.created_at)

        rooms_by_number = {room.number: room for room in self.room_repo.list_rooms()}
        lines = build_receipt_lines(bookings, rooms_by_number, self.default_rate)
        issued_on = issued_on or hotel_today()

        main = bookings[0]
        return Receipt(
            receipt_no=main.booking_id,
            guest=main.guest,
            issued_on=issued_on,
            payment_method=payment_method,
            payment_date=payment_date or issued_on,
            lines=lines,
            total_amount=sum(line.line_total for line in lines),
        )
