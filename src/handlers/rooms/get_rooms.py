import os
import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.room_service import RoomService
from common.models.rooms import RoomSortKey
from common.schemas.bookings import booking_to_dict
from common.schemas.rooms import room_to_dict
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.datetime_normaliser import to_date

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

room_repo = RoomRepository(table)
booking_repo = BookingRepository(table)
room_service = RoomService(room_repo=room_repo, booking_repo=booking_repo)


def get_rooms(event, context):
    try:
        params = event.get("queryStringParameters") or {}
        day_raw = params.get("date")

        if not day_raw:
            rooms = room_service.list_rooms()
            return send_custom_response(
                200,
                "successfully retrieved",
                {"count": len(rooms), "rooms": [room_to_dict(r) for r in rooms]},
            )

        try:
            day = to_date(day_raw)
        except ValueError as e:
            return send_custom_response(400, str(e))

        try:
            sort_key = RoomSortKey(params.get("sort", RoomSortKey.ROOM_NO.value))
        except ValueError:
            allowed = ", ".join(k.value for k in RoomSortKey)
            return send_custom_response(400, f"Invalid sort. Allowed: {allowed}")

        board = room_service.status_board(day, sort_key)
        result = []
        for entry in board:
            result.append({
                **room_to_dict(entry.room),
                "booked": entry.is_booked,
                "booking": booking_to_dict(entry.booking) if entry.booking else None,
            })

        return send_custom_response(
            200,
            "successfully retrieved",
            {
                "date": day.isoformat(),
                "sort": sort_key.value,
                "booked": sum(1 for entry in board if entry.is_booked),
                "rooms": result,
            },
        )

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
