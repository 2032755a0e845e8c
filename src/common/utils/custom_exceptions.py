from typing import Iterable


class IncorrectCredentials(Exception):
    pass


class UserAlreadyExists(Exception):
    pass


class NotFoundException(Exception):
    def __init__(self, resource: str, identifier: str, status_code: int = 404):
        self.resource = resource
        self.identifier = identifier
        self.status_code = status_code

    def __str__(self):
        return f"{self.resource} '{self.identifier}' not found"


class BookingValidationError(Exception):
    pass


class InvalidDates(BookingValidationError):
    pass


class RoomConflict(Exception):
    def __init__(self, room_numbers: Iterable[str], message: str = None):
        self.room_numbers = list(room_numbers)
        self.message = message or "Room(s) already booked for the selected dates"
        super().__init__(self.message)

    def __str__(self):
        if not self.room_numbers:
            return self.message
        return f"{self.message}: {', '.join(self.room_numbers)}"


class RoomAlreadyExists(Exception):
    pass


class CleaningStatusChanged(Exception):
    pass


class BookingWriteConflict(Exception):
    def __init__(self, booking_id: str, message: str = None):
        self.booking_id = booking_id
        self.message = message or f"Booking {booking_id} was changed by another request, please retry"
        super().__init__(self.message)
