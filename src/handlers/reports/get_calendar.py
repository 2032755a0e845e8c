import os
import logging
from datetime import MAXYEAR, MINYEAR
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.report_service import ReportService
from common.schemas.bookings import booking_to_dict
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.datetime_normaliser import hotel_today, to_date

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

report_service = ReportService(
    booking_repo=BookingRepository(table),
    room_repo=RoomRepository(table),
)


def get_calendar(event, context):
    try:
        params = event.get("queryStringParameters") or {}
        try:
            day = to_date(params["date"]) if params.get("date") else hotel_today()
            year = int(params.get("year", day.year))
            month = int(params.get("month", day.month))
        except ValueError as e:
            return send_custom_response(400, str(e))

        if not 1 <= month <= 12:
            return send_custom_response(400, "month must be between 1 and 12")

        if not MINYEAR <= year < MAXYEAR:
            return send_custom_response(400, f"year must be between {MINYEAR} and {MAXYEAR - 1}")

        days, overview = report_service.calendar(year, month, day)

        return send_custom_response(
            200,
            "successfully retrieved",
            {
                "year": year,
                "month": month,
                "days": [
                    {
                        "date": d.day.isoformat(),
                        "booked": d.booked,
                        "vacant": d.vacant,
                        "full": d.is_full,
                    }
                    for d in days
                ],
                "overview": {
                    "date": overview.day.isoformat(),
                    "check_ins": [booking_to_dict(b) for b in overview.check_ins],
                    "check_outs": [booking_to_dict(b) for b in overview.check_outs],
                    "in_house": [booking_to_dict(b) for b in overview.in_house],
                },
            },
        )

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
