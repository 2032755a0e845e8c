from botocore.exceptions import ClientError
import logging
from typing import Optional, List
from boto3.dynamodb.conditions import Key
from common.models.rooms import Room, RoomView, BedType, catalog_order
from common.models.cleaning import CleaningState
from common.utils.custom_exceptions import RoomAlreadyExists

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
    from types_boto3_dynamodb import DynamoDBClient
else:
    Table = object
    DynamoDBClient = object


logger = logging.getLogger(__name__)

ROOM_PARTITION = "ROOMS"
CLEANING_PARTITION = "CLEANING"


class RoomRepository:
    def __init__(self, table: Table, client: DynamoDBClient = None):
        self.table = table
        self.client = client if client else table.meta.client

    def add_room(self, room: Room):
        room_item = {
            "pk": ROOM_PARTITION,
            "sk": f"ROOM#{room.number}",
            "room_id": room.room_id,
            "floor": room.floor,
            "view": room.view.value,
            "bed_type": room.bed_type.value,
            "version": 0,
        }
        cleaning_item = {
            "pk": CLEANING_PARTITION,
            "sk": f"ROOM#{room.number}",
            "cleaning_status": CleaningState.CLEAN.value,
        }
        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table.name,
                            "Item": room_item,
                            "ConditionExpression": "attribute_not_exists(sk)",
                        }
                    },
                    {
                        "Put": {
                            "TableName": self.table.name,
                            "Item": cleaning_item,
                        }
                    },
                ]
            )
        except ClientError as err:
            reasons = err.response.get("CancellationReasons") or [{}]
            if reasons[0].get("Code") == "ConditionalCheckFailed":
                raise RoomAlreadyExists(f"Room {room.number} already exists")
            logger.error(f"Error creating room {room.number}: {err}")
            raise

    def get_room(self, number: str) -> Optional[Room]:
        try:
            response = self.table.get_item(
                Key={"pk": ROOM_PARTITION, "sk": f"ROOM#{number}"}
            )
        except ClientError as err:
            logger.error(f"Error retrieving room {number}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self._to_domain(item)

    def list_rooms(self, consistent: bool = False) -> List[Room]:
        query = {
            "KeyConditionExpression": Key("pk").eq(ROOM_PARTITION)
            & Key("sk").begins_with("ROOM#"),
            "ConsistentRead": consistent,
        }
        rooms = []
        try:
            resp = self.table.query(**query)
            rooms.extend(self._to_domain(item) for item in resp.get("Items", []))
            while "LastEvaluatedKey" in resp:
                resp = self.table.query(
                    **query, ExclusiveStartKey=resp["LastEvaluatedKey"]
                )
                rooms.extend(self._to_domain(item) for item in resp.get("Items", []))
        except ClientError as err:
            logger.error(f"Error listing rooms: {err}")
            raise
        return catalog_order(rooms)

    def claim_item(self, room: Room) -> dict:
        """Transaction item that bumps the room version if nobody else has.

        Booking writes include one per claimed room, so two writers that read
        the same catalog cannot both commit a booking for the same room.
        """
        return {
            "Update": {
                "TableName": self.table.name,
                "Key": {"pk": ROOM_PARTITION, "sk": f"ROOM#{room.number}"},
                "UpdateExpression": "SET #version = :next",
                "ConditionExpression": "#version = :current",
                "ExpressionAttributeNames": {"#version": "version"},
                "ExpressionAttributeValues": {
                    ":current": room.version,
                    ":next": room.version + 1,
                },
            }
        }

    @staticmethod
    def _to_domain(item: dict) -> Room:
        return Room(
            room_id=int(item["room_id"]),
            number=item["sk"].removeprefix("ROOM#"),
            floor=int(item["floor"]),
            view=RoomView(item["view"]),
            bed_type=BedType(item["bed_type"]),
            version=int(item.get("version", 0)),
        )
