import logging
from uuid import uuid4
from typing import List, Optional

from common.models.bookings import Booking, Guest
from common.models.rooms import sort_room_numbers
from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.schemas.bookings import BookingRequest
from common.services.availability_service import find_conflicts
from common.services.pricing_service import resolve_total_price
from common.utils.constants import DEFAULT_NIGHTLY_RATE, RECENT_BOOKINGS_LIMIT
from common.utils.custom_exceptions import (
    BookingValidationError,
    NotFoundException,
    RoomConflict,
)

logger = logging.getLogger(__name__)


def plan_guest_release(guest: Guest) -> bool:
    """True when removing one booking leaves the guest unreferenced."""
    return guest.booking_count - 1 <= 0


class BookingService:
    def __init__(
        self,
        booking_repo: BookingRepository,
        room_repo: RoomRepository,
        default_rate: float = DEFAULT_NIGHTLY_RATE,
    ):
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.default_rate = default_rate

    def list_bookings(self) -> List[Booking]:
        bookings = self.booking_repo.list_bookings()
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def search_bookings(
        self, term: Optional[str] = None, limit: Optional[int] = None
    ) -> List[Booking]:
        bookings = self.list_bookings()
        term = (term or "").strip()
        if not term:
            return bookings[: limit or RECENT_BOOKINGS_LIMIT]
        needle = term.lower()
        matches = [
            b
            for b in bookings
            if needle in b.guest.name.lower()
            or term in b.guest.phone
            or term in b.check_in.isoformat()
            or needle in b.booking_id.lower()
        ]
        return matches[:limit]

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.booking_repo.get_booking(booking_id)
        if booking is None:
            raise NotFoundException("booking", booking_id, 404)
        return booking

    def create_booking(self, req: BookingRequest) -> Booking:
        rooms = self._claimable_rooms(req)

        if req.guest_id:
            guest = self.booking_repo.get_guest(req.guest_id)
            if guest is None:
                raise NotFoundException("guest", req.guest_id, 404)
            new_guest = False
        else:
            guest = Guest(
                guest_id=str(uuid4()),
                name=req.customer_name,
                phone=req.phone,
                email=req.email,
                address=req.address,
                tax_id=req.tax_id,
                booking_count=1,
            )
            new_guest = True

        # catalog versions are read before the booking set so a booking
        # committed in between invalidates the claims below
        bookings = self.booking_repo.list_bookings()
        self._ensure_free(bookings, req)

        booking = Booking(
            booking_id=str(uuid4()),
            guest=guest,
            check_in=req.check_in,
            check_out=req.check_out,
            rooms=list(req.rooms),
            status=req.status,
            deposit_amount=req.deposit_amount,
            total_price=resolve_total_price(
                req.rooms, req.check_in, req.check_out, self.default_rate, req.total_price
            ),
        )
        self.booking_repo.add_booking(
            booking,
            room_claims=[self.room_repo.claim_item(rooms[n]) for n in booking.rooms],
            new_guest=new_guest,
        )
        logger.info(f"Created booking {booking.booking_id} for rooms {booking.rooms}")
        return booking

    def update_booking(self, booking_id: str, req: BookingRequest) -> Booking:
        existing = self.get_booking(booking_id)
        if req.guest_id and req.guest_id != existing.guest.guest_id:
            raise BookingValidationError("the guest of a booking cannot be changed")

        rooms = self._claimable_rooms(req)
        bookings = self.booking_repo.list_bookings()
        self._ensure_free(bookings, req, exclude_booking_id=booking_id)

        guest = Guest(
            guest_id=existing.guest.guest_id,
            name=req.customer_name or existing.guest.name,
            phone=req.phone or existing.guest.phone,
            email=req.email,
            address=req.address,
            tax_id=req.tax_id,
            booking_count=existing.guest.booking_count,
        )
        booking = Booking(
            booking_id=booking_id,
            guest=guest,
            check_in=req.check_in,
            check_out=req.check_out,
            rooms=list(req.rooms),
            status=req.status,
            deposit_amount=req.deposit_amount,
            total_price=resolve_total_price(
                req.rooms,
                req.check_in,
                req.check_out,
                self.default_rate,
                req.total_price,
                existing=existing,
            ),
            created_at=existing.created_at,
        )
        self.booking_repo.replace_booking(
            booking,
            room_claims=[self.room_repo.claim_item(rooms[n]) for n in booking.rooms],
        )
        logger.info(f"Updated booking {booking_id}")
        return booking

    def delete_booking(self, booking_id: str):
        booking = self.get_booking(booking_id)
        delete_guest = plan_guest_release(booking.guest)
        self.booking_repo.delete_booking(booking, delete_guest=delete_guest)
        logger.info(
            f"Deleted booking {booking_id}"
            + (f" and guest {booking.guest.guest_id}" if delete_guest else "")
        )

    def _claimable_rooms(self, req: BookingRequest) -> dict:
        catalog = {room.number: room for room in self.room_repo.list_rooms(consistent=True)}
        unknown = [n for n in req.rooms if n not in catalog]
        if unknown:
            raise BookingValidationError(
                f"Unknown room(s): {', '.join(sort_room_numbers(unknown))}"
            )
        return {n: catalog[n] for n in req.rooms}

    def _ensure_free(
        self,
        bookings: List[Booking],
        req: BookingRequest,
        exclude_booking_id: Optional[str] = None,
    ):
        conflicts = find_conflicts(
            bookings, req.rooms, req.check_in, req.check_out, exclude_booking_id
        )
        if conflicts:
            raise RoomConflict(conflicts)
