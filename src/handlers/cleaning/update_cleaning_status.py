import os
import logging
from boto3 import resource
from botocore.exceptions import ClientError

from common.repository.booking_repo import BookingRepository
from common.repository.cleaning_repo import CleaningRepository
from common.repository.room_repo import RoomRepository
from common.services.cleaning_service import CleaningService
from common.schemas.cleaning import CleaningStatusRequest
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import NotFoundException
from pydantic import ValidationError

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


def update_cleaning_status(event, context):
    if not event.get("body"):
        return send_custom_response(400, "Request body is required")

    try:
        request_body = CleaningStatusRequest.model_validate_json(event["body"])
    except ValidationError as e:
        formatted = "; ".join(f"{err['loc'][-1]}: {err['msg']}" for err in e.errors())
        return send_custom_response(400, formatted)

    try:
        status = cleaning_service.set_status(request_body.room_number, request_body.status)
        return send_custom_response(
            200,
            "Cleaning status updated",
            {"room_number": status.room_number, "status": status.status.value},
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except ClientError:
        logger.exception("DynamoDB error while updating cleaning status")
        return send_custom_response(500, "Internal server error")

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
