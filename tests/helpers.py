from datetime import date, datetime, timezone

from common.models.bookings import Booking, BookingStatus, Guest
from common.models.rooms import BedType, Room, RoomView


def make_room(number, room_id=None, view=RoomView.RIVER_VIEW, bed_type=BedType.DOUBLE, version=0):
    return Room(
        room_id=room_id if room_id is not None else int(number),
        number=str(number),
        floor=int(str(number)[0]),
        view=view,
        bed_type=bed_type,
        version=version,
    )


def make_guest(guest_id="g1", name="Somchai", phone="0812345678", booking_count=1):
    return Guest(guest_id=guest_id, name=name, phone=phone, booking_count=booking_count)


def make_booking(
    booking_id,
    rooms,
    check_in,
    check_out,
    guest=None,
    total_price=0.0,
    status=BookingStatus.UNPAID,
    created_at=None,
):
    return Booking(
        booking_id=booking_id,
        guest=guest or make_guest(),
        check_in=check_in if isinstance(check_in, date) else date.fromisoformat(check_in),
        check_out=check_out if isinstance(check_out, date) else date.fromisoformat(check_out),
        rooms=list(rooms),
        status=status,
        total_price=total_price,
        created_at=created_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def load_handler(module_name, env=None):
    """Import a handler module against a mocked DynamoDB resource.

    Returns the reloaded module and the started patchers, to be stopped in
    tearDownClass.
    """
    import importlib
    import os
    from unittest.mock import MagicMock, patch

    env_patch = patch.dict(os.environ, {"TABLE_NAME": "test-table", **(env or {})}, clear=False)
    env_patch.start()
    resource_patch = patch("boto3.resource")
    mock_resource = resource_patch.start()
    mock_resource.return_value.Table.return_value = MagicMock()

    module = importlib.import_module(module_name)
    return importlib.reload(module), [resource_patch, env_patch]


def body_of(resp):
    import json

    return json.loads(resp["body"])
