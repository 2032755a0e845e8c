import os
import logging
from boto3 import resource
from botocore.exceptions import ClientError
from pydantic import ValidationError

from common.models.users import UserRole
from common.repository.user_repo import UserRepository
from common.services.user_service import UserService
from common.schemas.users import OperatorRequest
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_exceptions import UserAlreadyExists
from common.utils.custom_response import send_custom_response

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

user_repo = UserRepository(table=table)
service = UserService(user_repo=user_repo)


def add_operator(event, context):
    try:
        role_raw = event["requestContext"]["authorizer"]["role"]
    except (KeyError, TypeError):
        return send_custom_response(401, "Unauthorized")

    if str(role_raw).upper() != UserRole.ADMIN.value:
        return send_custom_response(403, "Only admins can add operators")

    if not event.get("body"):
        return send_custom_response(400, "Request body is required")

    try:
        request_body = OperatorRequest.model_validate_json(event["body"])
    except ValidationError as e:
        formatted = "; ".join(
            f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()
        )
        return send_custom_response(400, formatted)

    try:
        user = service.add_operator(
            request_body.username,
            request_body.password,
            request_body.role,
        )
        logger.info(f"Operator {user.username} added with role {user.role.value}")
        return send_custom_response(
            status_code=201,
            message="operator added",
            data={"user_id": user.user_id, "username": user.username, "role": user.role.value},
        )
    except UserAlreadyExists as e:
        return send_custom_response(status_code=409, message=str(e))
    except ClientError:
        logger.exception("DynamoDB error while adding operator")
        return send_custom_response(status_code=500, message="Internal server error")
    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(status_code=500, message="Internal server error")
