import os
import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.room_service import RoomService
from common.schemas.rooms import room_to_dict
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_exceptions import InvalidDates
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


def get_available_rooms(event, context):
    try:
        params = event.get("queryStringParameters") or {}

        check_in_raw = params.get("checkIn") or params.get("check_in")
        check_out_raw = params.get("checkOut") or params.get("check_out")
        exclude = params.get("excludeBookingId") or params.get("exclude_booking_id")

        if not check_in_raw or not check_out_raw:
            return send_custom_response(400, "check_in and check_out are required")

        try:
            check_in = to_date(check_in_raw)
            check_out = to_date(check_out_raw)
        except ValueError as e:
            return send_custom_response(400, str(e))

        rooms = room_service.get_available_rooms(
            check_in, check_out, exclude_booking_id=exclude
        )

        return send_custom_response(
            200,
            "successfully retrieved",
            {
                "check_in": check_in.isoformat(),
                "check_out": check_out.isoformat(),
                "count": len(rooms),
                "available_rooms": [room_to_dict(r) for r in rooms],
            },
        )

    except InvalidDates as err:
        return send_custom_response(400, str(err))

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
