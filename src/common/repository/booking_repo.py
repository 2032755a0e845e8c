from botocore.exceptions import ClientError
import logging
from typing import Optional, List, Dict
from boto3.dynamodb.conditions import Attr
from common.models.bookings import Booking, BookingStatus, Guest
from common.models.rooms import sort_room_numbers
from common.utils.custom_exceptions import BookingWriteConflict, NotFoundException, RoomConflict
from common.utils.datetime_normaliser import from_iso_string, to_date
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
    from types_boto3_dynamodb import DynamoDBClient
else:
    Table = object
    DynamoDBClient = object


logger = logging.getLogger(__name__)

CONDITION_FAILED = "ConditionalCheckFailed"
CONFLICT_REASONS = {CONDITION_FAILED, "TransactionConflict"}


def _money(value: Optional[float]) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def _cancellation_codes(err: ClientError) -> List[Optional[str]]:
    if err.response.get("Error", {}).get("Code") != "TransactionCanceledException":
        return []
    return [reason.get("Code") for reason in err.response.get("CancellationReasons") or []]


def _failed_indexes(codes: List[Optional[str]]) -> List[int]:
    return [i for i, code in enumerate(codes) if code in CONFLICT_REASONS]


def _code_at(codes: List[Optional[str]], index: int) -> Optional[str]:
    return codes[index] if index < len(codes) else None


class BookingRepository:
    def __init__(self, table: Table, client: DynamoDBClient = None):
        self.table = table
        self.client = client if client else table.meta.client

    def _booking_item(self, booking: Booking) -> dict:
        return {
            "pk": f"BOOKING#{booking.booking_id}",
            "sk": "DETAILS",
            "guest_id": booking.guest.guest_id,
            "check_in": booking.check_in.isoformat(),
            "check_out": booking.check_out.isoformat(),
            "rooms": list(booking.rooms),
            "booking_status": booking.status.value,
            "deposit_amount": _money(booking.deposit_amount),
            "total_price": _money(booking.total_price),
            "price_per_night": _money(booking.price_per_night),
            "created_at": booking.created_at.isoformat(),
        }

    def _guest_fields(self, guest: Guest) -> dict:
        return {
            "guest_name": guest.name,
            "phone": guest.phone,
            "email": guest.email,
            "address": guest.address,
            "tax_id": guest.tax_id,
        }

    def add_booking(self, booking: Booking, room_claims: List[dict], new_guest: bool):
        """Write the booking, its guest reference and the room claims at once.

        ``room_claims`` are the version checks built by the room repository,
        in the same order as ``booking.rooms``.
        """
        guest = booking.guest
        if new_guest:
            guest_item = {
                "Put": {
                    "TableName": self.table.name,
                    "Item": {
                        "pk": f"GUEST#{guest.guest_id}",
                        "sk": "DETAILS",
                        **self._guest_fields(guest),
                        "booking_count": 1,
                    },
                    "ConditionExpression": "attribute_not_exists(pk)",
                }
            }
        else:
            guest_item = {
                "Update": {
                    "TableName": self.table.name,
                    "Key": {"pk": f"GUEST#{guest.guest_id}", "sk": "DETAILS"},
                    "UpdateExpression": "SET booking_count = booking_count + :one",
                    "ExpressionAttributeValues": {":one": 1},
                    "ConditionExpression": "attribute_exists(pk)",
                }
            }

        transact_items = [
            {
                "Put": {
                    "TableName": self.table.name,
                    "Item": self._booking_item(booking),
                    "ConditionExpression": "attribute_not_exists(pk)",
                }
            },
            guest_item,
            *room_claims,
        ]

        try:
            self.client.transact_write_items(
                TransactItems=transact_items,
                ClientRequestToken=booking.booking_id,
            )
        except ClientError as err:
            codes = _cancellation_codes(err)
            if _code_at(codes, 1) == CONDITION_FAILED and not new_guest:
                raise NotFoundException("guest", guest.guest_id, 404)
            failed = _failed_indexes(codes)
            claimed = [booking.rooms[i - 2] for i in failed if i >= 2]
            if claimed:
                raise RoomConflict(
                    sort_room_numbers(claimed), "Room(s) were booked by another request"
                )
            if failed:
                raise BookingWriteConflict(booking.booking_id)
            logger.error(f"Error creating booking {booking.booking_id}: {err}")
            raise

    def replace_booking(self, booking: Booking, room_claims: List[dict]):
        """Swap the stored booking group for ``booking`` in one transaction."""
        guest_fields = self._guest_fields(booking.guest)
        names = {f"#{k}": k for k in guest_fields}
        values = {f":{k}": v for k, v in guest_fields.items()}
        transact_items = [
            {
                "Put": {
                    "TableName": self.table.name,
                    "Item": self._booking_item(booking),
                    "ConditionExpression": "attribute_exists(pk)",
                }
            },
            {
                "Update": {
                    "TableName": self.table.name,
                    "Key": {"pk": f"GUEST#{booking.guest.guest_id}", "sk": "DETAILS"},
                    "UpdateExpression": "SET "
                    + ", ".join(f"#{k} = :{k}" for k in guest_fields),
                    "ExpressionAttributeNames": names,
                    "ExpressionAttributeValues": values,
                    "ConditionExpression": "attribute_exists(pk)",
                }
            },
            *room_claims,
        ]

        try:
            self.client.transact_write_items(TransactItems=transact_items)
        except ClientError as err:
            codes = _cancellation_codes(err)
            if _code_at(codes, 0) == CONDITION_FAILED:
                raise NotFoundException("booking", booking.booking_id, 404)
            failed = _failed_indexes(codes)
            claimed = [booking.rooms[i - 2] for i in failed if i >= 2]
            if claimed:
                raise RoomConflict(
                    sort_room_numbers(claimed), "Room(s) were booked by another request"
                )
            if failed:
                raise BookingWriteConflict(booking.booking_id)
            logger.error(f"Error updating booking {booking.booking_id}: {err}")
            raise

    def delete_booking(self, booking: Booking, delete_guest: bool):
        """Remove the booking and release its guest reference.

        The guest row is deleted or decremented on condition that its
        ``booking_count`` is still the one the caller planned against.
        """
        guest = booking.guest
        guest_key = {"pk": f"GUEST#{guest.guest_id}", "sk": "DETAILS"}
        if delete_guest:
            guest_item = {
                "Delete": {
                    "TableName": self.table.name,
                    "Key": guest_key,
                    "ConditionExpression": "booking_count = :count",
                    "ExpressionAttributeValues": {":count": guest.booking_count},
                }
            }
        else:
            guest_item = {
                "Update": {
                    "TableName": self.table.name,
                    "Key": guest_key,
                    "UpdateExpression": "SET booking_count = booking_count - :one",
                    "ConditionExpression": "booking_count = :count",
                    "ExpressionAttributeValues": {
                        ":one": 1,
                        ":count": guest.booking_count,
                    },
                }
            }

        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Delete": {
                            "TableName": self.table.name,
                            "Key": {"pk": f"BOOKING#{booking.booking_id}", "sk": "DETAILS"},
                            "ConditionExpression": "attribute_exists(pk)",
                        }
                    },
                    guest_item,
                ]
            )
        except ClientError as err:
            codes = _cancellation_codes(err)
            if _code_at(codes, 0) == CONDITION_FAILED:
                raise NotFoundException("booking", booking.booking_id, 404)
            if _failed_indexes(codes):
                raise BookingWriteConflict(booking.booking_id)
            logger.error(f"Error deleting booking {booking.booking_id}: {err}")
            raise

    def get_guest(self, guest_id: str) -> Optional[Guest]:
        try:
            response = self.table.get_item(
                Key={"pk": f"GUEST#{guest_id}", "sk": "DETAILS"},
                ConsistentRead=True,
            )
        except ClientError as err:
            logger.error(f"Error retrieving guest {guest_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self._to_guest(item)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        try:
            response = self.table.get_item(
                Key={"pk": f"BOOKING#{booking_id}", "sk": "DETAILS"},
                ConsistentRead=True,
            )
        except ClientError as err:
            logger.error(f"Error retrieving booking {booking_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None

        guest = self.get_guest(item["guest_id"])
        if guest is None:
            logger.warning(f"Booking {booking_id} references missing guest {item['guest_id']}")
            guest = Guest(guest_id=item["guest_id"], name="", phone="")
        return self._to_domain(item, guest)

    def list_bookings(self) -> List[Booking]:
        scan = {
            "FilterExpression": Attr("sk").eq("DETAILS")
            & (Attr("pk").begins_with("BOOKING#") | Attr("pk").begins_with("GUEST#")),
            "ConsistentRead": True,
        }
        items = []
        try:
            resp = self.table.scan(**scan)
            items.extend(resp.get("Items", []))
            while "LastEvaluatedKey" in resp:
                resp = self.table.scan(**scan, ExclusiveStartKey=resp["LastEvaluatedKey"])
                items.extend(resp.get("Items", []))
        except ClientError as err:
            logger.error(f"Error listing bookings: {err}")
            raise

        guests: Dict[str, Guest] = {}
        booking_items = []
        for item in items:
            if item["pk"].startswith("GUEST#"):
                guest = self._to_guest(item)
                guests[guest.guest_id] = guest
            else:
                booking_items.append(item)

        bookings = []
        for item in booking_items:
            guest = guests.get(item["guest_id"])
            if guest is None:
                logger.warning(f"Skipping {item['pk']}: guest {item['guest_id']} missing")
                continue
            bookings.append(self._to_domain(item, guest))
        return bookings

    @staticmethod
    def _to_guest(item: dict) -> Guest:
        return Guest(
            guest_id=item["pk"].removeprefix("GUEST#"),
            name=item.get("guest_name", ""),
            phone=item.get("phone", ""),
            email=item.get("email"),
            address=item.get("address"),
            tax_id=item.get("tax_id"),
            booking_count=int(item.get("booking_count", 0)),
        )

    @staticmethod
    def _to_domain(item: dict, guest: Guest) -> Booking:
        deposit = item.get("deposit_amount")
        return Booking(
            booking_id=item["pk"].removeprefix("BOOKING#"),
            guest=guest,
            check_in=to_date(item["check_in"]),
            check_out=to_date(item["check_out"]),
            rooms=sort_room_numbers(item.get("rooms", [])),
            status=BookingStatus(item["booking_status"]),
            deposit_amount=float(deposit) if deposit is not None else None,
            total_price=float(item.get("total_price") or 0),
            created_at=from_iso_string(item["created_at"]),
        )
