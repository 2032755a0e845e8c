import os
import logging
from boto3 import resource
from botocore.exceptions import ClientError

from common.models.cleaning import CleaningToggle
from common.repository.booking_repo import BookingRepository
from common.repository.cleaning_repo import CleaningRepository
from common.repository.room_repo import RoomRepository
from common.services.cleaning_service import CleaningService
from common.schemas.cleaning import CleaningToggleRequest
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import CleaningStatusChanged, NotFoundException
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


def _toggle_to_dict(toggle: CleaningToggle) -> dict:
    return {
        "room_number": toggle.room_number,
        "current": toggle.current.value,
        "proposed": toggle.proposed.value,
    }


def toggle_cleaning_status(event, context):
    """Two-step toggle: without ``confirm`` only the proposed change is returned."""
    path_params = event.get("pathParameters") or {}
    room_number = path_params.get("room_number")

    if not room_number:
        return send_custom_response(400, "room_number is required in the path")

    try:
        request_body = CleaningToggleRequest.model_validate_json(event.get("body") or "{}")
    except ValidationError as e:
        formatted = "; ".join(f"{err['loc'][-1]}: {err['msg']}" for err in e.errors())
        return send_custom_response(400, formatted)

    try:
        toggle = cleaning_service.request_toggle(room_number)

        if not request_body.confirm:
            return send_custom_response(200, "Confirm to apply", _toggle_to_dict(toggle))

        if request_body.expected_status is not None:
            toggle = CleaningToggle(
                room_number=room_number,
                current=request_body.expected_status,
                proposed=request_body.expected_status.toggled(),
            )

        status = cleaning_service.confirm_toggle(toggle)
        return send_custom_response(
            200,
            "Cleaning status updated",
            {"room_number": status.room_number, "status": status.status.value},
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except CleaningStatusChanged as err:
        return send_custom_response(409, str(err))

    except ClientError:
        logger.exception(f"DynamoDB error while toggling room {room_number}")
        return send_custom_response(500, "Internal server error")

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
