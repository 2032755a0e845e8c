import os
import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.cleaning_repo import CleaningRepository
from common.repository.room_repo import RoomRepository
from common.services.cleaning_service import CleaningService
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.datetime_normaliser import to_date

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

cleaning_service = CleaningService(
    cleaning_repo=CleaningRepository(table),
    room_repo=RoomRepository(table),
    booking_repo=BookingRepository(table),
)


def get_cleaning_statuses(event, context):
    try:
        params = event.get("queryStringParameters") or {}
        day = None
        if params.get("date"):
            try:
                day = to_date(params["date"])
            except ValueError as e:
                return send_custom_response(400, str(e))

        board = cleaning_service.cleaning_board(day)
        result = [
            {
                "room_number": view.room_number,
                "status": view.status.value,
                "occupancy": sorted(o.value for o in view.occupancy),
            }
            for view in board
        ]

        return send_custom_response(
            200,
            "successfully retrieved",
            {"count": len(result), "rooms": result},
        )

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
