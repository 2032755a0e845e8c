import os
import logging
from boto3 import resource
from botocore.exceptions import ClientError
from pydantic import ValidationError
from common.repository.room_repo import RoomRepository
from common.services.room_service import RoomService
from common.models.users import UserRole
from common.schemas.rooms import RoomRequest, room_to_dict
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_exceptions import RoomAlreadyExists
from common.utils.custom_response import send_custom_response

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

room_repo = RoomRepository(table)
room_service = RoomService(room_repo=room_repo)


def add_room(event, context):
    try:
        role_raw = event["requestContext"]["authorizer"]["role"]
    except (KeyError, TypeError):
        return send_custom_response(401, "Unauthorized")

    try:
        role = UserRole(role_raw.upper())
    except ValueError:
        return send_custom_response(403, "Forbidden")

    if role not in (UserRole.MANAGER, UserRole.ADMIN):
        return send_custom_response(403, "Only managers or admins can add rooms")

    if not event.get("body"):
        return send_custom_response(400, "Request body is required")

    try:
        body = RoomRequest.model_validate_json(event["body"])
    except ValidationError as e:
        formatted = "; ".join(f"{err['msg']}" for err in e.errors())
        return send_custom_response(400, formatted or "Invalid room")

    try:
        room = room_service.add_room(
            room_id=body.room_id,
            number=body.number,
            floor=body.floor,
            view=body.view,
            bed_type=body.bed_type,
        )
    except RoomAlreadyExists as err:
        return send_custom_response(400, str(err))
    except ClientError:
        logger.exception(f"Error adding room {body.number}")
        return send_custom_response(500, "Internal server error")
    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")

    return send_custom_response(201, f"Room {room.number} added successfully", room_to_dict(room))
