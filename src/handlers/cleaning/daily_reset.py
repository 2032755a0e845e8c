import os
import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.cleaning_repo import CleaningRepository
from common.repository.room_repo import RoomRepository
from common.services.cleaning_service import CleaningService
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.datetime_normaliser import hotel_today, to_date

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


def lambda_handler(event, context):
    """Scheduled run: flag every room occupied today as needing cleaning."""
    today = to_date(event["date"]) if event and event.get("date") else hotel_today()

    try:
        changed = cleaning_service.run_daily_reset(today)
    except Exception:
        logger.exception(f"Daily cleaning reset failed for {today.isoformat()}")
        raise

    return {"date": today.isoformat(), "rooms_flagged": changed}
