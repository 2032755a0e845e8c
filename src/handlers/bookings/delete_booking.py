import os
import logging
from boto3 import resource
from botocore.exceptions import ClientError

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.booking_service import BookingService
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import BookingWriteConflict, NotFoundException

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

booking_repo = BookingRepository(table)
room_repo = RoomRepository(table)

booking_service = BookingService(booking_repo=booking_repo, room_repo=room_repo)


def delete_booking(event, context):
    path_params = event.get("pathParameters") or {}
    booking_id = path_params.get("booking_id")

    if not booking_id:
        return send_custom_response(400, "booking_id is required in the path")

    try:
        user_id = event["requestContext"]["authorizer"]["user_id"]
    except (KeyError, TypeError):
        return send_custom_response(401, "Unauthorized")

    try:
        booking_service.delete_booking(booking_id)
        logger.info(f"Booking {booking_id} deleted by {user_id}")
        return send_custom_response(200, "Booking deleted successfully", {"booking_id": booking_id})

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except BookingWriteConflict as err:
        return send_custom_response(409, str(err))

    except ClientError:
        logger.exception(f"DynamoDB error while deleting booking {booking_id}")
        return send_custom_response(500, "Internal server error")

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
