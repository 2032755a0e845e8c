import os
import logging
from boto3 import resource
from botocore.exceptions import ClientError

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.booking_service import BookingService
from common.schemas.bookings import BookingRequest, booking_to_dict
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import (
    BookingValidationError,
    BookingWriteConflict,
    NotFoundException,
    RoomConflict,
)
from pydantic import ValidationError

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

booking_repo = BookingRepository(table)
room_repo = RoomRepository(table)

booking_service = BookingService(booking_repo=booking_repo, room_repo=room_repo)


def update_booking(event, context):
    path_params = event.get("pathParameters") or {}
    booking_id = path_params.get("booking_id")

    if not booking_id:
        return send_custom_response(400, "booking_id is required in the path")

    if not event.get("body"):
        return send_custom_response(400, "Request body is required")

    try:
        request_body = BookingRequest.model_validate_json(event["body"])
    except ValidationError as e:
        formatted = "; ".join(f"{err['msg']}" for err in e.errors())
        return send_custom_response(400, formatted or "Missing required fields")

    try:
        user_id = event["requestContext"]["authorizer"]["user_id"]
    except (KeyError, TypeError):
        return send_custom_response(401, "Unauthorized")

    try:
        booking = booking_service.update_booking(booking_id, request_body)
        logger.info(f"Booking {booking_id} updated by {user_id}")

        return send_custom_response(200, "Booking updated successfully", booking_to_dict(booking))

    except BookingValidationError as err:
        return send_custom_response(400, str(err))

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except RoomConflict as err:
        return send_custom_response(409, str(err), {"conflicting_rooms": err.room_numbers})

    except BookingWriteConflict as err:
        return send_custom_response(409, str(err))

    except ClientError:
        logger.exception(f"DynamoDB error while updating booking {booking_id}")
        return send_custom_response(500, "Internal server error")

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
