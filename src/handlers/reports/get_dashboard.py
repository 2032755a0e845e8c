import os
import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.report_service import ReportService
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.datetime_normaliser import to_date

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

report_service = ReportService(
    booking_repo=BookingRepository(table),
    room_repo=RoomRepository(table),
)


def get_dashboard(event, context):
    try:
        params = event.get("queryStringParameters") or {}
        today = None
        if params.get("date"):
            try:
                today = to_date(params["date"])
            except ValueError as e:
                return send_custom_response(400, str(e))

        report = report_service.dashboard(today)

        return send_custom_response(
            200,
            "successfully retrieved",
            {
                "monthly_occupancy": [
                    {"month": m.month, "room_nights": m.room_nights}
                    for m in report["monthly_occupancy"]
                ],
                "room_popularity": [
                    {"room_number": number, "bookings": count}
                    for number, count in report["room_popularity"]
                ],
            },
        )

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
