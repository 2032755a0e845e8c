import os
import logging
from boto3 import resource
from botocore.exceptions import ClientError

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.receipt_service import ReceiptService, render_receipt
from common.schemas.receipts import ReceiptRequest, receipt_to_dict
from common.utils.constants import AWS_REGION, BOTO_CONFIG
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import NotFoundException
from pydantic import ValidationError

logger = logging.getLogger()
logger.setLevel(logging.INFO)

TABLE_NAME = os.environ.get("TABLE_NAME")

dynamodb = resource("dynamodb", region_name=AWS_REGION, config=BOTO_CONFIG)
table = dynamodb.Table(TABLE_NAME)

receipt_service = ReceiptService(
    booking_repo=BookingRepository(table),
    room_repo=RoomRepository(table),
)


def generate_receipt(event, context):
    if not event.get("body"):
        return send_custom_response(400, "Request body is required")

    try:
        request_body = ReceiptRequest.model_validate_json(event["body"])
    except ValidationError as e:
        formatted = "; ".join(f"{err['loc'][-1]}: {err['msg']}" for err in e.errors())
        return send_custom_response(400, formatted)

    try:
        receipt = receipt_service.generate_receipt(
            booking_ids=request_body.booking_ids,
            payment_method=request_body.payment_method,
            payment_date=request_body.payment_date,
        )
        logger.info(f"Receipt {receipt.receipt_no} generated for {len(request_body.booking_ids)} booking(s)")

        return send_custom_response(
            200,
            "Receipt generated",
            {**receipt_to_dict(receipt), "text": render_receipt(receipt)},
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except ClientError:
        logger.exception("DynamoDB error while generating receipt")
        return send_custom_response(500, "Internal server error")

    except Exception:
        logger.exception("Unhandled error")
        return send_custom_response(500, "Internal server error")
