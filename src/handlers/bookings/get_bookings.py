import os
import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.booking_service import BookingService
from common.schemas.bookings import BookingSearch, booking_to_dict
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import NotFoundException
from pydantic import ValidationError

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

booking_repo = BookingRepository(table)
room_repo = RoomRepository(table)

booking_service = BookingService(booking_repo=booking_repo, room_repo=room_repo)


def get_bookings(event, context):
    try:
        path_params = event.get("pathParameters") or {}
        booking_id = path_params.get("booking_id")
        if booking_id:
            booking = booking_service.get_booking(booking_id)
            return send_custom_response(
                200, "Booking retrieved successfully", booking_to_dict(booking)
            )

        params = event.get("queryStringParameters") or {}
        if "q" in params or "limit" in params:
            try:
                search = BookingSearch.model_validate(params)
            except ValidationError as e:
                formatted = "; ".join(f"{err['msg']}" for err in e.errors())
                return send_custom_response(400, formatted)
            bookings = booking_service.search_bookings(search.q, search.limit)
        else:
            bookings = booking_service.list_bookings()

        result = [booking_to_dict(b) for b in bookings]

        return send_custom_response(
            200,
            "Bookings retrieved successfully",
            {
                "count": len(result),
                "bookings": result
            }
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
